"""
Indicator evaluators.

One pure function per technical indicator. Each reads its fields from a
snapshot and returns a Reading; missing or unusable inputs produce a
Neutral reading with a null value instead of an error.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from ..config.defaults import IndicatorParams
from ..data import fields as f
from ..data.fields import FieldReader
from ..models.signals import Reading, Recommendation

SnapshotLike = Union[Mapping[str, Any], FieldReader]

DEFAULT_PARAMS = IndicatorParams()


def _reader(snapshot: SnapshotLike, interval: str) -> FieldReader:
    if isinstance(snapshot, FieldReader):
        return snapshot
    return FieldReader(snapshot, interval)


def evaluate_hullma9(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                     interval: str = "15") -> Reading:
    """
    Close against the 9-period Hull moving average.

    The Hull value doubles as the reading's reference price.
    """
    reader = _reader(snapshot, interval)
    close = reader.number(f.CLOSE)
    hullma9 = reader.number(f.HULLMA9)

    if close is None or hullma9 is None:
        return Reading.neutral()

    return Reading(
        value=hullma9,
        recommendation=Recommendation.from_comparison(close, hullma9),
        price=hullma9,
    )


def evaluate_rsi(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                 interval: str = "15") -> Reading:
    """
    Relative strength index.

    A numeric upstream recommendation wins by its sign alone; otherwise
    RSI above the overbought line is Sell and below the oversold line Buy.
    """
    params = params or DEFAULT_PARAMS
    reader = _reader(snapshot, interval)
    rsi = reader.number(f.RSI)
    close = reader.number(f.CLOSE)
    upstream = reader.number(f.REC_RSI)

    if upstream is not None:
        return Reading(value=rsi, recommendation=Recommendation.from_sign(upstream), price=close)

    if rsi is None:
        return Reading.neutral()

    if rsi > params.rsi_overbought:
        recommendation = Recommendation.SELL
    elif rsi < params.rsi_oversold:
        recommendation = Recommendation.BUY
    else:
        recommendation = Recommendation.NEUTRAL

    return Reading(value=rsi, recommendation=recommendation, price=close)


def evaluate_ema(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                 interval: str = "15") -> Reading:
    """Close against the 20-period exponential moving average."""
    reader = _reader(snapshot, interval)
    close = reader.number(f.CLOSE)
    ema = reader.number(f.EMA20)

    if close is None or ema is None:
        return Reading.neutral()

    return Reading(value=ema, recommendation=Recommendation.from_comparison(close, ema), price=close)


def evaluate_macd(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                  interval: str = "15") -> Reading:
    """MACD line against its signal line."""
    reader = _reader(snapshot, interval)
    line = reader.number(f.MACD_LINE)
    signal = reader.number(f.MACD_SIGNAL)
    close = reader.number(f.CLOSE)

    if line is None or signal is None:
        return Reading.neutral()

    return Reading(value=line, recommendation=Recommendation.from_comparison(line, signal), price=close)


def evaluate_stochastic(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                        interval: str = "15") -> Reading:
    """
    Stochastic %K/%D crossover.

    A crossover inside the extreme bands is not treated as a call.
    """
    params = params or DEFAULT_PARAMS
    reader = _reader(snapshot, interval)
    k = reader.number(f.STOCH_K)
    d = reader.number(f.STOCH_D)
    close = reader.number(f.CLOSE)

    if k is None or d is None:
        return Reading.neutral()

    if k > d and k < params.stoch_upper:
        recommendation = Recommendation.BUY
    elif k < d and k > params.stoch_lower:
        recommendation = Recommendation.SELL
    else:
        recommendation = Recommendation.NEUTRAL

    return Reading(value=k, recommendation=recommendation, price=close)


def evaluate_adx(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                 interval: str = "15") -> Reading:
    """Directional movement: +DI/-DI decide only when ADX shows a trend."""
    params = params or DEFAULT_PARAMS
    reader = _reader(snapshot, interval)
    adx = reader.number(f.ADX)
    plus_di = reader.number(f.ADX_PLUS_DI)
    minus_di = reader.number(f.ADX_MINUS_DI)
    close = reader.number(f.CLOSE)

    if adx is None or plus_di is None or minus_di is None:
        return Reading.neutral()

    if adx > params.adx_trend:
        recommendation = Recommendation.from_comparison(plus_di, minus_di)
    else:
        recommendation = Recommendation.NEUTRAL

    return Reading(value=adx, recommendation=recommendation, price=close)


def evaluate_cci(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                 interval: str = "15") -> Reading:
    """Commodity channel index beyond +/-100."""
    params = params or DEFAULT_PARAMS
    reader = _reader(snapshot, interval)
    cci = reader.number(f.CCI20)
    close = reader.number(f.CLOSE)

    if cci is None:
        return Reading.neutral()

    if cci > params.cci_upper:
        recommendation = Recommendation.BUY
    elif cci < params.cci_lower:
        recommendation = Recommendation.SELL
    else:
        recommendation = Recommendation.NEUTRAL

    return Reading(value=cci, recommendation=recommendation, price=close)


def evaluate_williams_r(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                        interval: str = "15") -> Reading:
    """Williams %R: oversold below -80 is Buy, overbought above -20 is Sell."""
    params = params or DEFAULT_PARAMS
    reader = _reader(snapshot, interval)
    williams = reader.number(f.WILLIAMS_R)
    close = reader.number(f.CLOSE)

    if williams is None:
        return Reading.neutral()

    if williams < params.williams_oversold:
        recommendation = Recommendation.BUY
    elif williams > params.williams_overbought:
        recommendation = Recommendation.SELL
    else:
        recommendation = Recommendation.NEUTRAL

    return Reading(value=williams, recommendation=recommendation, price=close)


def evaluate_bb_power(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                      interval: str = "15") -> Reading:
    """Bull/bear power: the sign alone decides."""
    reader = _reader(snapshot, interval)
    power = reader.number(f.BB_POWER)
    close = reader.number(f.CLOSE)

    if power is None:
        return Reading.neutral()

    return Reading(value=power, recommendation=Recommendation.from_sign(power), price=close)


Evaluator = Callable[..., Reading]

# Keyed by the attribute name on SymbolAnalysis
EVALUATORS: dict[str, Evaluator] = {
    "hullma9": evaluate_hullma9,
    "rsi": evaluate_rsi,
    "ema": evaluate_ema,
    "macd": evaluate_macd,
    "stochastic": evaluate_stochastic,
    "adx": evaluate_adx,
    "cci": evaluate_cci,
    "williams_r": evaluate_williams_r,
    "bb_power": evaluate_bb_power,
}


def evaluate_indicators(snapshot: SnapshotLike, params: Optional[IndicatorParams] = None,
                        interval: str = "15") -> dict[str, Reading]:
    """Run every evaluator over one snapshot."""
    reader = _reader(snapshot, interval)
    return {name: evaluator(reader, params) for name, evaluator in EVALUATORS.items()}
