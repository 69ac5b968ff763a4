"""Pivot point levels: direct extraction, local formulas and the classic-band call"""

from typing import Optional

import structlog

from ..config.defaults import PivotParams
from ..data import fields as f
from ..data.fields import FieldReader
from ..models.signals import PIVOT_LABELS, PivotGroup, PivotLevels, Recommendation

logger = structlog.get_logger(__name__)

DEFAULT_PARAMS = PivotParams()

METHOD_ATTRS = {
    "Classic": "classic",
    "Fibonacci": "fibonacci",
    "Camarilla": "camarilla",
    "Woodie": "woodie",
    "Demark": "demark",
}


def extract_pivot_groups(reader: FieldReader) -> dict[str, PivotGroup]:
    """
    Copy precomputed pivot fields into one group per method.

    Labels the snapshot does not carry stay None; Demark only has s1/pp/r1.
    """
    groups = {}
    for method, attr in METHOD_ATTRS.items():
        labels = f.DEMARK_LABELS if method == "Demark" else PIVOT_LABELS
        groups[attr] = PivotGroup(**{
            label: reader.number(f.pivot_field(method, label)) for label in labels
        })
    return groups


def formula_pivot_groups(high: float, low: float, close: float,
                         params: Optional[PivotParams] = None) -> dict[str, PivotGroup]:
    """
    Compute the inner pivot band of every method from OHLC.

    Woodie and Demark share one baseline, (high + low + 2 * close) / 4, and
    apply the classic r1/s1 formula to it.

    Args:
        high: Session high
        low: Session low
        close: Current close
        params: Fibonacci ratio and Camarilla factor

    Returns:
        Pivot groups keyed by method attribute name
    """
    params = params or DEFAULT_PARAMS
    pp = (high + low + close) / 3
    diff = high - low
    weighted_pp = (high + low + 2 * close) / 4
    camarilla_step = diff * params.camarilla_factor / params.camarilla_divisor

    weighted = PivotGroup(pp=weighted_pp, r1=2 * weighted_pp - low, s1=2 * weighted_pp - high)

    return {
        "classic": PivotGroup(pp=pp, r1=2 * pp - low, s1=2 * pp - high),
        "fibonacci": PivotGroup(
            pp=pp,
            r1=pp + params.fibonacci_ratio * diff,
            s1=pp - params.fibonacci_ratio * diff,
        ),
        "camarilla": PivotGroup(pp=pp, r1=close + camarilla_step, s1=close - camarilla_step),
        "woodie": weighted,
        "demark": weighted,
    }


def pivot_recommendation(price: Optional[float], classic: PivotGroup) -> Recommendation:
    """Buy above classic R1, Sell below classic S1, otherwise Neutral."""
    if price is None:
        return Recommendation.NEUTRAL
    if classic.r1 is not None and price > classic.r1:
        return Recommendation.BUY
    if classic.s1 is not None and price < classic.s1:
        return Recommendation.SELL
    return Recommendation.NEUTRAL


def _choose_strategy(reader: FieldReader, strategy: str) -> str:
    if strategy != "auto":
        return strategy
    if reader.has_any(f.pivot_fields()):
        return "direct"
    return "formula"


def compute_pivot_levels(reader: FieldReader, params: Optional[PivotParams] = None) -> PivotLevels:
    """
    Build every pivot group for one snapshot and the classic-band call.

    In ``auto`` mode precomputed pivot fields are preferred; the local
    formulas are used when the snapshot carries none of them.
    """
    params = params or DEFAULT_PARAMS
    high = reader.number(f.HIGH)
    low = reader.number(f.LOW)
    close = reader.number(f.CLOSE)

    strategy = _choose_strategy(reader, params.strategy)

    if strategy == "direct":
        groups = extract_pivot_groups(reader)
    elif high is not None and low is not None and close is not None:
        groups = formula_pivot_groups(high, low, close, params)
    else:
        groups = {}

    logger.debug(
        "Pivot levels computed",
        strategy=strategy,
        has_levels=bool(groups),
        classic_r1=groups["classic"].r1 if groups else None,
        classic_s1=groups["classic"].s1 if groups else None,
    )

    classic = groups.get("classic", PivotGroup())

    return PivotLevels(
        **groups,
        high=high,
        low=low,
        recommendation=pivot_recommendation(close, classic),
    )
