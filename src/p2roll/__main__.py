"""Allow ``python -m p2roll``."""

from p2roll.cli.app import run


if __name__ == "__main__":
    run()
