"""
Signal aggregation module.

Weighted final vote per symbol and the dominance-based batch summary.
"""

from .aggregator import aggregate_votes, collect_votes, compute_final_signal
from .summary import build_aggregate_summary

__all__ = [
    "aggregate_votes",
    "collect_votes",
    "compute_final_signal",
    "build_aggregate_summary",
]
