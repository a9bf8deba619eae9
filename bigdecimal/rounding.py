"""Midpoint rounding modes."""

from enum import Enum


class MidpointRounding(str, Enum):
    """How to round a value exactly halfway between two integers."""

    AWAY_FROM_ZERO = "away_from_zero"
    # Banker's rounding: round away only when the whole part is odd
    TO_EVEN = "to_even"
