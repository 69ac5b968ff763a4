"""Snapshot-level metrics: dominance scoring and pivot levels"""

from .dominance import DominanceTally, score_dominance, tally_dominance
from .pivots import compute_pivot_levels, extract_pivot_groups, formula_pivot_groups, pivot_recommendation

__all__ = [
    "DominanceTally",
    "score_dominance",
    "tally_dominance",
    "compute_pivot_levels",
    "extract_pivot_groups",
    "formula_pivot_groups",
    "pivot_recommendation",
]
