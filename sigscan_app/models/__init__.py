"""
Data models and contracts module.

Immutable value objects for readings, pivot levels, dominance scores,
final signals and per-cycle result records. Follows functional programming
principles with frozen dataclasses.
"""

from .signals import (
    AggregateSummary,
    CycleRecord,
    DominanceScore,
    FinalSignal,
    MarketStatus,
    PIVOT_LABELS,
    PivotGroup,
    PivotLevels,
    Reading,
    Recommendation,
    SymbolAnalysis,
)

__all__ = [
    "AggregateSummary",
    "CycleRecord",
    "DominanceScore",
    "FinalSignal",
    "MarketStatus",
    "PIVOT_LABELS",
    "PivotGroup",
    "PivotLevels",
    "Reading",
    "Recommendation",
    "SymbolAnalysis",
]
