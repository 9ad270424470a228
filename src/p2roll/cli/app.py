"""Command-line entry point for p2roll.

Usage:
    p2roll character add --name Amiri --player Sam --strength 4 ...
    p2roll character edit --name Amiri --level 4 --perception E
    p2roll character remove --player Sam
    p2roll character list
    p2roll roll perception --all --target 20

Each invocation loads the roster once, runs one command, and writes the
roster back only if a mutating command finished without error.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from p2roll import __version__
from p2roll.cli.theme import color_enabled, format_error, format_roll, format_target
from p2roll.core.config import get_settings, resolve_roster_path
from p2roll.core.exceptions import P2RollError, ValidationError
from p2roll.core.logging import bind_context, clear_context, configure_logging, get_logger
from p2roll.engine.dice import RollResolver
from p2roll.models.character import validate_character, validate_update
from p2roll.models.enums import ProficiencyRank, Statistic
from p2roll.storage.roster import Roster


logger = get_logger(__name__)

ABILITY_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("--strength", "strength", "str mod"),
    ("--dexterity", "dexterity", "dex mod"),
    ("--constitution", "constitution", "con mod"),
    ("--intelligence", "intellect", "int mod"),
    ("--wisdom", "wisdom", "wis mod"),
    ("--charisma", "charisma", "cha mod"),
)

RANK_OPTIONS: tuple[tuple[str, str], ...] = (
    ("perception", "perception prof for character"),
    ("stealth", "stealth prof for character"),
    ("reflex", "reflex save prof for character"),
    ("fortitude", "fortitude save prof for character"),
    ("will", "will save prof for character"),
    ("arcana", "arcana prof for character"),
    ("nature", "nature prof for character"),
    ("occultism", "occultism prof for character"),
    ("religion", "religion prof for character"),
)


@dataclass
class CommandContext:
    """Everything a command handler needs for one invocation."""

    roster: Roster
    resolver: RollResolver
    stdout: TextIO
    stderr: TextIO
    color: bool = False
    icons: bool = True


# =============================================================================
# Argument types
# =============================================================================


def rank_argument(value: str) -> ProficiencyRank:
    """argparse type for proficiency ranks (U/T/E/M/L or full names)."""
    try:
        return ProficiencyRank.parse(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(f"{exc.message}: {value!r}") from exc


# =============================================================================
# Command handlers
# =============================================================================


def _character_add(args: argparse.Namespace, ctx: CommandContext) -> None:
    character = validate_character(
        {
            "name": args.name,
            "player": args.player,
            "level": args.level,
            "modifiers": {dest: getattr(args, dest) for _, dest, _ in ABILITY_OPTIONS},
            "proficiencies": {
                "perception": args.perception,
                "stealth": args.stealth,
                "saves": {
                    "reflex": args.reflex,
                    "fortitude": args.fortitude,
                    "will": args.will,
                },
                "identify": {
                    "arcana": args.arcana,
                    "nature": args.nature,
                    "occultism": args.occultism,
                    "religion": args.religion,
                },
            },
            "armor_penalty": args.armor_penalty,
        }
    )
    ctx.roster.add(character)
    print(f"created character '{character.name}' ({character.player})", file=ctx.stderr)


def _character_remove(args: argparse.Namespace, ctx: CommandContext) -> None:
    if args.name is not None:
        removed = ctx.roster.remove_by_name(args.name)
    else:
        removed = ctx.roster.remove_by_player(args.player)
    print(f"removed character '{removed.name}' ({removed.player})", file=ctx.stderr)


def _character_edit(args: argparse.Namespace, ctx: CommandContext) -> None:
    character = ctx.roster.select(name=args.name, player=args.player)
    fields = {
        "name": args.new_name,
        "player": args.new_player,
        "level": args.level,
        "armor_penalty": args.armor_penalty,
    }
    fields.update({dest: getattr(args, dest) for _, dest, _ in ABILITY_OPTIONS})
    fields.update({dest: getattr(args, dest) for dest, _ in RANK_OPTIONS})
    update = validate_update({key: value for key, value in fields.items() if value is not None})

    edited = ctx.roster.edit(character, update)
    print(f"edited character '{edited.name}' ({edited.player})", file=ctx.stderr)


def _character_list(args: argparse.Namespace, ctx: CommandContext) -> None:
    for character in ctx.roster:
        print(character.label, file=ctx.stdout)


def _roll(args: argparse.Namespace, ctx: CommandContext) -> None:
    if args.all:
        characters = ctx.roster.characters
    else:
        characters = [ctx.roster.select(name=args.name, player=args.player)]

    rolls = ctx.resolver.roll_for(characters, args.statistic, args.target)

    if args.target is not None:
        print(format_target(args.target, color=ctx.color), file=ctx.stdout)
    for roll in rolls:
        print(format_roll(roll, color=ctx.color, icons=ctx.icons), file=ctx.stdout)


# =============================================================================
# Parser
# =============================================================================


def _add_selector(parser: argparse.ArgumentParser, verb: str, *, allow_all: bool = False) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-n", "--name", help=f"name of character to {verb}")
    group.add_argument("-p", "--player", help=f"name of player whose character to {verb}")
    if allow_all:
        group.add_argument("-a", "--all", action="store_true", help=f"{verb} for all characters")


def _add_character_parsers(subparsers: argparse._SubParsersAction) -> None:
    character = subparsers.add_parser(
        "character",
        aliases=["char"],
        help="manage characters in the game",
    )
    commands = character.add_subparsers(dest="action", required=True, metavar="ACTION")

    add = commands.add_parser("add", help="add a new character to the game")
    add.add_argument("-n", "--name", required=True, help="name of character to add")
    add.add_argument(
        "-p", "--player", required=True, help="name of player to whom character belongs"
    )
    add.add_argument("--level", type=int, default=1, help="character level (default: 1)")
    for flag, dest, help_text in ABILITY_OPTIONS:
        add.add_argument(flag, dest=dest, type=int, required=True, help=help_text)
    for dest, help_text in RANK_OPTIONS:
        add.add_argument(
            f"--{dest}",
            type=rank_argument,
            default=ProficiencyRank.UNTRAINED,
            metavar="{U,T,E,M,L}",
            help=f"{help_text} (default: U)",
        )
    add.add_argument(
        "--armor-penalty",
        type=int,
        default=0,
        help="reduction to stealth from armor (default: 0)",
    )
    add.set_defaults(handler=_character_add, mutates=True, command_name="character add")

    remove = commands.add_parser("remove", help="remove character from the game")
    _add_selector(remove, "remove")
    remove.set_defaults(handler=_character_remove, mutates=True, command_name="character remove")

    edit = commands.add_parser("edit", help="edit a character")
    _add_selector(edit, "edit")
    edit.add_argument("--new-name", help="name to change to")
    edit.add_argument("--new-player", help="player name to change to")
    edit.add_argument("--level", type=int, help="character level")
    for flag, dest, help_text in ABILITY_OPTIONS:
        edit.add_argument(flag, dest=dest, type=int, help=help_text)
    for dest, help_text in RANK_OPTIONS:
        edit.add_argument(f"--{dest}", type=rank_argument, metavar="{U,T,E,M,L}", help=help_text)
    edit.add_argument("--armor-penalty", type=int, help="reduction to stealth from armor")
    edit.set_defaults(handler=_character_edit, mutates=True, command_name="character edit")

    listing = commands.add_parser("list", help="list characters")
    listing.set_defaults(handler=_character_list, mutates=False, command_name="character list")


def _add_roll_parsers(subparsers: argparse._SubParsersAction) -> None:
    roll = subparsers.add_parser("roll", help="roll dice for characters")
    statistics = roll.add_subparsers(dest="statistic_name", required=True, metavar="STATISTIC")

    for statistic in Statistic:
        parser = statistics.add_parser(statistic.value, help=statistic.description)
        _add_selector(parser, "roll", allow_all=True)
        parser.add_argument("-t", "--target", type=int, help="target DC to match or beat")
        parser.set_defaults(
            handler=_roll,
            mutates=False,
            statistic=statistic,
            command_name=f"roll {statistic.value}",
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the p2roll command."""
    parser = argparse.ArgumentParser(
        prog="p2roll",
        description="Pathfinder 2e roster and roll calculator",
    )
    parser.add_argument("-C", "--config", help="path to game config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="disable colored output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="group", required=True, metavar="COMMAND")
    _add_character_parsers(subparsers)
    _add_roll_parsers(subparsers)
    return parser


# =============================================================================
# Entry points
# =============================================================================


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    resolver: RollResolver | None = None,
) -> int:
    """Run one p2roll command.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).
        stdout: Stream for command output.
        stderr: Stream for status and error messages.
        resolver: Roll resolver to use; tests pass one with a fixed die.

    Returns:
        Process exit status: 0 on success, 1 on any application error.
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    command = args.command_name
    color_requested = not args.no_color

    try:
        settings = get_settings()
        configure_logging(
            level="DEBUG" if args.verbose else settings.effective_log_level,
            json_format=settings.json_logs,
            log_file=settings.log_file,
        )
        color_requested = settings.display.color and not args.no_color

        path = resolve_roster_path(args.config, settings)
        bind_context(command=command, roster=str(path))

        ctx = CommandContext(
            roster=Roster.load(path),
            resolver=resolver or RollResolver(),
            stdout=stdout,
            stderr=stderr,
            color=color_enabled(stdout, requested=color_requested),
            icons=settings.display.icons,
        )
        args.handler(args, ctx)
        if args.mutates:
            ctx.roster.save()
    except P2RollError as exc:
        logger.debug("Command failed", error=repr(exc))
        color = color_enabled(stderr, requested=color_requested)
        print(format_error(command, exc.message, color=color), file=stderr)
        return 1
    finally:
        clear_context()

    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


__all__ = [
    "CommandContext",
    "build_parser",
    "main",
    "rank_argument",
    "run",
]
