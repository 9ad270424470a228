"""Roll resolution for p2roll.

Submodules:
    dice: d20 checks, degree-of-success classification, batch rolls
"""

from __future__ import annotations

from p2roll.engine.dice import (
    CharacterRoll,
    RollOutcome,
    RollResolver,
    apply_natural_shift,
    classify,
    roll_d20,
)


__all__ = [
    "CharacterRoll",
    "RollOutcome",
    "RollResolver",
    "apply_natural_shift",
    "classify",
    "roll_d20",
]
