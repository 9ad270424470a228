"""Storage module for p2roll persistence.

Provides the YAML roster file holding every character.
"""

from p2roll.storage.roster import ROSTER_KEY, Roster

__all__ = [
    "ROSTER_KEY",
    "Roster",
]
