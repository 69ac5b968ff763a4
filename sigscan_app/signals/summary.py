"""Batch summary built from per-symbol dominance scores"""

from collections.abc import Sequence

from ..models.signals import AggregateSummary, SymbolAnalysis
from ..utils.rounding import round_half_away


def build_aggregate_summary(
    analyses: Sequence[SymbolAnalysis],
    time: str,
    active_sessions: Sequence[str] = ()
) -> AggregateSummary:
    """
    Fold a batch of analyses into one buy/sell/neutral split.

    Sums dominance scores, not final signals. The neutral share is what the
    unrounded buy and sell shares leave of 100 and is not clamped.

    Args:
        analyses: Per-symbol records of one cycle
        time: Summary timestamp
        active_sessions: Sessions active at that time

    Returns:
        AggregateSummary for the batch
    """
    total_buy = sum(analysis.dominance.buy for analysis in analyses)
    total_sell = sum(analysis.dominance.sell for analysis in analyses)
    total = total_buy + total_sell

    buy_percent = total_buy / total * 100 if total > 0 else 0.0
    sell_percent = total_sell / total * 100 if total > 0 else 0.0
    neutral_percent = 100 - buy_percent - sell_percent

    return AggregateSummary(
        time=time,
        total_symbols=len(analyses),
        buy_percent=round_half_away(buy_percent),
        sell_percent=round_half_away(sell_percent),
        neutral_percent=round_half_away(neutral_percent),
        active_sessions=tuple(active_sessions),
    )
