"""
Buy/sell dominance scoring.

An independent bias estimate computed straight from raw RSI, momentum,
ADX and MACD fields. It does not look at indicator readings and does not
take part in the final vote; it feeds dominance reporting and the batch
summary only.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DominanceParams
from ..data import fields as f
from ..data.fields import FieldReader
from ..models.signals import DominanceScore
from ..utils.rounding import round_half_away

DEFAULT_PARAMS = DominanceParams()


@dataclass(frozen=True)
class DominanceTally:
    """Raw point totals before normalization."""
    buy_score: float = 0
    sell_score: float = 0

    def add(self, buy: float = 0, sell: float = 0) -> "DominanceTally":
        return DominanceTally(self.buy_score + buy, self.sell_score + sell)

    @property
    def total(self) -> float:
        return self.buy_score + self.sell_score


def tally_dominance(reader: FieldReader, params: Optional[DominanceParams] = None) -> DominanceTally:
    """
    Accumulate buy and sell points from the four raw checks.

    Args:
        reader: Field reader over the snapshot
        params: Point values and thresholds

    Returns:
        Point totals for both sides
    """
    params = params or DEFAULT_PARAMS
    tally = DominanceTally()

    # RSI: always one of four branches when present
    rsi = reader.number(f.RSI)
    if rsi is not None:
        if rsi > params.rsi_overbought:
            tally = tally.add(sell=params.extreme_points)
        elif rsi < params.rsi_oversold:
            tally = tally.add(buy=params.extreme_points)
        elif rsi > params.rsi_midline:
            tally = tally.add(buy=params.midline_points)
        else:
            tally = tally.add(sell=params.midline_points)

    # Momentum: zero abstains
    momentum = reader.number(f.MOMENTUM)
    if momentum is not None:
        if momentum > 0:
            tally = tally.add(buy=params.momentum_points)
        elif momentum < 0:
            tally = tally.add(sell=params.momentum_points)

    # ADX: a trend sides with RSI above the midline, otherwise with sellers,
    # including when RSI is missing
    adx = reader.number(f.ADX)
    if adx is not None:
        if adx > params.adx_trend:
            if rsi is not None and rsi > params.rsi_midline:
                tally = tally.add(buy=params.trend_points)
            else:
                tally = tally.add(sell=params.trend_points)
        else:
            tally = tally.add(buy=params.weak_trend_points, sell=params.weak_trend_points)

    # MACD line against signal: equality abstains
    line = reader.number(f.MACD_LINE)
    signal = reader.number(f.MACD_SIGNAL)
    if line is not None and signal is not None:
        if line > signal:
            tally = tally.add(buy=params.macd_points)
        elif line < signal:
            tally = tally.add(sell=params.macd_points)

    return tally


def score_dominance(reader: FieldReader, params: Optional[DominanceParams] = None) -> DominanceScore:
    """
    Normalize the dominance tally to a buy/sell percentage pair.

    When no check scored, both sides get the neutral split (50/50).
    """
    params = params or DEFAULT_PARAMS
    tally = tally_dominance(reader, params)

    if tally.total == 0:
        return DominanceScore(buy=params.neutral_split, sell=100.0 - params.neutral_split)

    return DominanceScore(
        buy=round_half_away(tally.buy_score / tally.total * 100),
        sell=round_half_away(tally.sell_score / tally.total * 100),
    )
