"""
Final signal aggregation.

Every indicator reading and the pivot call cast one vote. Configured bonus
indicators (RSI and HullMA9 by default) add extra weight to a directional
vote, and the strictly largest bucket decides; any tie is Neutral.
"""

from collections.abc import Mapping
from typing import Optional

from ..config.defaults import AggregatorParams
from ..models.signals import FinalSignal, Recommendation, SymbolAnalysis
from ..utils.rounding import percent

DEFAULT_PARAMS = AggregatorParams()

PIVOT_VOTE = "pivots"


def collect_votes(analysis: SymbolAnalysis) -> dict[str, Recommendation]:
    """Recommendation of every voting input, keyed by input name."""
    votes = {
        name: reading.recommendation
        for name, reading in analysis.indicator_readings().items()
    }
    votes[PIVOT_VOTE] = analysis.pivots.recommendation
    return votes


def aggregate_votes(votes: Mapping[str, Recommendation],
                    params: Optional[AggregatorParams] = None) -> FinalSignal:
    """
    Run the weighted vote over a set of recommendations.

    Args:
        votes: Recommendation per voting input
        params: Bonus weight and the inputs that earn it

    Returns:
        FinalSignal with decision, rounded confidence and raw weights
    """
    params = params or DEFAULT_PARAMS
    weights = {outcome: 0 for outcome in Recommendation}

    for name, recommendation in votes.items():
        weights[recommendation] += 1
        if name in params.bonus_indicators and recommendation != Recommendation.NEUTRAL:
            weights[recommendation] += params.bonus_weight

    total = sum(weights.values())
    confidence = {
        outcome: percent(weight, total)
        for outcome, weight in weights.items()
    }

    buy = confidence[Recommendation.BUY]
    sell = confidence[Recommendation.SELL]
    neutral = confidence[Recommendation.NEUTRAL]

    if buy > sell and buy > neutral:
        decision = Recommendation.BUY
    elif sell > buy and sell > neutral:
        decision = Recommendation.SELL
    else:
        decision = Recommendation.NEUTRAL

    return FinalSignal(decision=decision, confidence=confidence, weights=weights)


def compute_final_signal(analysis: SymbolAnalysis,
                         params: Optional[AggregatorParams] = None) -> FinalSignal:
    """Final signal of a fully populated analysis record."""
    return aggregate_votes(collect_votes(analysis), params)
