"""Decimal-based rounding shared by all percentage computations."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

TWO_PLACES = Decimal("0.01")


def round_half_away(value: float, places: Decimal = TWO_PLACES) -> float:
    """
    Round a float half away from zero.

    The value is converted through its shortest repr, so 2.675 rounds to
    2.68 rather than the 2.67 that binary rounding would give.

    Args:
        value: Number to round
        places: Quantum to round to (default two decimals)

    Returns:
        Rounded value as float
    """
    if not math.isfinite(value):
        return value

    # ROUND_HALF_UP in decimal rounds ties away from zero for both signs
    rounded = Decimal(repr(float(value))).quantize(places, rounding=ROUND_HALF_UP)
    # adding 0.0 turns -0.0 into 0.0
    return float(rounded) + 0.0


def percent(part: float, total: float, default: float = 0.0) -> float:
    """Return part/total as a rounded percentage, or default when total is zero."""
    if total == 0:
        return default
    return round_half_away(part / total * 100)


def round_optional(value: Optional[float]) -> Optional[float]:
    """Round a nullable value, passing None through."""
    if value is None:
        return None
    return round_half_away(value)
