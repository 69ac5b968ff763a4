"""Per-indicator evaluators mapping raw snapshot fields to readings"""

from .evaluators import (
    EVALUATORS,
    evaluate_adx,
    evaluate_bb_power,
    evaluate_cci,
    evaluate_ema,
    evaluate_hullma9,
    evaluate_indicators,
    evaluate_macd,
    evaluate_rsi,
    evaluate_stochastic,
    evaluate_williams_r,
)

__all__ = [
    "EVALUATORS",
    "evaluate_adx",
    "evaluate_bb_power",
    "evaluate_cci",
    "evaluate_ema",
    "evaluate_hullma9",
    "evaluate_indicators",
    "evaluate_macd",
    "evaluate_rsi",
    "evaluate_stochastic",
    "evaluate_williams_r",
]
