"""p2roll: a Pathfinder 2e character roster and d20 roll calculator.

Characters are kept in a YAML roster file; skill and save totals are derived
from ability modifiers, proficiency ranks and level, then rolled against an
optional DC with degree-of-success classification.
"""

__version__ = "0.1.0"
