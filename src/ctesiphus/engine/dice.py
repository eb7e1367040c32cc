"""Dice rolling and reward resolution for Ctesiphus.

Notation accepted by roll_notation / roll_with_breakdown:

    [count]D<sides>[+|-modifier]      e.g. "D3", "2D6", "D3+1", "d6-1"

Malformed notation resolves to 0 instead of raising: content-table values are
data, and a typo there should cost a reward, not a campaign.

Every roller takes an optional ``rng`` (a random.Random) so callers can inject
a seeded generator; without one the module-level random functions are used.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Optional, Union

NOTATION_PATTERN = re.compile(r"^(\d*)D(\d+)([+-]\d+)?$", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class RollBreakdown:
    """Roll result with individual dice, for display.

    Attributes:
        total: Sum of the dice plus modifier
        rolls: Individual die results
        modifier: Parsed modifier
        notation: The notation string exactly as given
    """

    total: int
    rolls: list[int] = field(default_factory=list)
    modifier: int = 0
    notation: str = ""


def _source(rng: Optional[random.Random]):
    return rng if rng is not None else random


def roll_range(minimum: int, maximum: int, rng: Optional[random.Random] = None) -> int:
    """Uniform integer in [minimum, maximum] inclusive."""
    return _source(rng).randint(minimum, maximum)


def roll_d3(rng: Optional[random.Random] = None) -> int:
    return roll_range(1, 3, rng)


def roll_d6(rng: Optional[random.Random] = None) -> int:
    return roll_range(1, 6, rng)


def roll_2d6(rng: Optional[random.Random] = None) -> int:
    return roll_d6(rng) + roll_d6(rng)


def roll_compound(rng: Optional[random.Random] = None) -> int:
    """Roll a D36: D3 for the tens digit, D6 for the units digit.

    Produces one of 18 values: 11-16, 21-26, 31-36.
    """
    tens = roll_d3(rng)
    units = roll_d6(rng)
    return tens * 10 + units


def parse_notation(notation: str) -> Optional[tuple[int, int, int]]:
    """Parse dice notation into (count, sides, modifier), or None if malformed."""
    match = NOTATION_PATTERN.match(notation.strip())
    if not match:
        return None
    count = int(match.group(1) or 0) or 1
    sides = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0
    if sides == 0:
        return None
    return count, sides, modifier


def roll_with_breakdown(notation: str, rng: Optional[random.Random] = None) -> RollBreakdown:
    """Roll dice notation and keep the individual results."""
    parsed = parse_notation(notation)
    if parsed is None:
        return RollBreakdown(total=0, rolls=[], modifier=0, notation=notation)

    count, sides, modifier = parsed
    rolls = [roll_range(1, sides, rng) for _ in range(count)]
    return RollBreakdown(
        total=sum(rolls) + modifier,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_notation(notation: str, rng: Optional[random.Random] = None) -> int:
    """Roll dice notation and return the total (0 for malformed notation)."""
    return roll_with_breakdown(notation, rng).total


def resolve_value(value: Union[int, str, None], rng: Optional[random.Random] = None) -> int:
    """Resolve a table value: integers pass through, notation is rolled.

    Strings without a die ("3") are read as integers; anything else resolves to 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if "d" in value.lower():
            return roll_notation(value, rng)
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0
