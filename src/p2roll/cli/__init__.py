"""Command-line interface for p2roll."""

from p2roll.cli.app import build_parser, main, run

__all__ = [
    "build_parser",
    "main",
    "run",
]
