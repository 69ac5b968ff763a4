"""
Field catalog and tolerant readers for raw market snapshots.

A snapshot maps timeframe-qualified field names to numbers, strings or
None. Readers here never raise for missing or mistyped values: anything
that is not a finite real number reads as None.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional

from ..errors import MalformedDataError

# Raw field names as published by the scanner
CLOSE = "close"
HIGH = "high"
LOW = "low"
HULLMA9 = "HullMA9"
RSI = "RSI"
REC_RSI = "Rec.RSI"
EMA20 = "EMA20"
MACD_LINE = "MACD.macd"
MACD_SIGNAL = "MACD.signal"
STOCH_K = "Stoch.K"
STOCH_D = "Stoch.D"
ADX = "ADX"
ADX_PLUS_DI = "ADX+DI"
ADX_MINUS_DI = "ADX-DI"
CCI20 = "CCI20"
WILLIAMS_R = "W.R"
BB_POWER = "BBPower"
MOMENTUM = "Mom"
AWESOME_OSCILLATOR = "AO"

PIVOT_METHODS = ("Classic", "Fibonacci", "Camarilla", "Woodie", "Demark")

# Scanner label for each pivot ladder label; the pivot itself is "Middle"
PIVOT_FIELD_LABELS = {
    "pp": "Middle",
    "r1": "R1",
    "r2": "R2",
    "r3": "R3",
    "s1": "S1",
    "s2": "S2",
    "s3": "S3",
}

DEMARK_LABELS = ("s1", "pp", "r1")

INDICATOR_FIELDS = (
    CLOSE, HIGH, LOW, HULLMA9, RSI, REC_RSI, EMA20, MACD_LINE, MACD_SIGNAL,
    STOCH_K, STOCH_D, ADX, ADX_PLUS_DI, ADX_MINUS_DI, CCI20, WILLIAMS_R,
    BB_POWER, MOMENTUM, AWESOME_OSCILLATOR,
)


def pivot_field(method: str, label: str) -> str:
    """Raw field name of one pivot level, e.g. ``Pivot.M.Classic.R1``."""
    return f"Pivot.M.{method}.{PIVOT_FIELD_LABELS[label]}"


def pivot_fields() -> list[str]:
    """Every raw pivot field the scanner can publish."""
    names = []
    for method in PIVOT_METHODS:
        labels = DEMARK_LABELS if method == "Demark" else tuple(PIVOT_FIELD_LABELS)
        names.extend(pivot_field(method, label) for label in labels)
    return names


def qualify(name: str, interval: str) -> str:
    """Qualify a raw field name with its timeframe: ``RSI`` -> ``RSI|15``."""
    return f"{name}|{interval}"


def all_fields(interval: str) -> list[str]:
    """Timeframe-qualified list of every field the engine reads."""
    return [qualify(name, interval) for name in (*INDICATOR_FIELDS, *pivot_fields())]


def to_number(value: Any) -> Optional[float]:
    """Coerce a raw snapshot value to float, or None when unusable."""
    # bool is an int subclass but never a market value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


class FieldReader:
    """
    Read-only view over one snapshot at one timeframe.

    The wrapped mapping is never copied or mutated.
    """

    def __init__(self, snapshot: Mapping[str, Any], interval: str = "15"):
        if not isinstance(snapshot, Mapping):
            raise MalformedDataError(
                f"Snapshot must be a mapping, got {type(snapshot).__name__}",
                raw_data=str(snapshot)[:100],
                expected_format="mapping of field name to value"
            )
        self.snapshot = snapshot
        self.interval = interval

    def number(self, name: str) -> Optional[float]:
        """Numeric value of a raw field, None when absent or unusable."""
        return to_number(self.snapshot.get(qualify(name, self.interval)))

    def has_any(self, names: list[str]) -> bool:
        """True when at least one of the named fields holds a number."""
        return any(self.number(name) is not None for name in names)
