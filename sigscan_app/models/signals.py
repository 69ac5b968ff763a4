"""
Value objects produced by the signal analysis engine.

All records are frozen and own no shared state. ``to_dict`` renders the
camelCase JSON shape written to the result history.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

PIVOT_LABELS = ("pp", "r1", "r2", "r3", "s1", "s2", "s3")


class Recommendation(str, Enum):
    """Directional call of a single indicator or of the final vote."""
    BUY = "Buy"
    SELL = "Sell"
    NEUTRAL = "Neutral"

    @classmethod
    def from_sign(cls, value: Optional[float]) -> "Recommendation":
        """Positive is Buy, negative is Sell, zero or missing is Neutral."""
        if value is None or value == 0:
            return cls.NEUTRAL
        return cls.BUY if value > 0 else cls.SELL

    @classmethod
    def from_comparison(cls, left: float, right: float) -> "Recommendation":
        """Buy when left is above right, Sell when below, Neutral when equal."""
        if left > right:
            return cls.BUY
        if left < right:
            return cls.SELL
        return cls.NEUTRAL


@dataclass(frozen=True)
class Reading:
    """One indicator's value, reference price and directional call."""
    value: Optional[float] = None
    recommendation: Recommendation = Recommendation.NEUTRAL
    price: Optional[float] = None

    @classmethod
    def neutral(cls) -> "Reading":
        """Reading for an indicator whose inputs are missing."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "price": self.price,
            "recommendation": self.recommendation.value,
        }


@dataclass(frozen=True)
class PivotGroup:
    """Support/resistance ladder of one pivot method."""
    pp: Optional[float] = None
    r1: Optional[float] = None
    r2: Optional[float] = None
    r3: Optional[float] = None
    s1: Optional[float] = None
    s2: Optional[float] = None
    s3: Optional[float] = None

    def to_dict(self) -> dict[str, Optional[float]]:
        return {label: getattr(self, label) for label in PIVOT_LABELS}


@dataclass(frozen=True)
class PivotLevels:
    """All pivot systems, the session range and the classic-band call."""
    classic: PivotGroup = field(default_factory=PivotGroup)
    fibonacci: PivotGroup = field(default_factory=PivotGroup)
    camarilla: PivotGroup = field(default_factory=PivotGroup)
    woodie: PivotGroup = field(default_factory=PivotGroup)
    demark: PivotGroup = field(default_factory=PivotGroup)
    high: Optional[float] = None
    low: Optional[float] = None
    recommendation: Recommendation = Recommendation.NEUTRAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "classic": self.classic.to_dict(),
            "fibonacci": self.fibonacci.to_dict(),
            "camarilla": self.camarilla.to_dict(),
            "woodie": self.woodie.to_dict(),
            # Demark only defines the inner band
            "demark": {
                "s1": self.demark.s1,
                "pp": self.demark.pp,
                "r1": self.demark.r1,
            },
            "highLow": {"high": self.high, "low": self.low},
            "recommendation": self.recommendation.value,
        }


@dataclass(frozen=True)
class DominanceScore:
    """Independent buy/sell bias in percent; buy + sell == 100."""
    buy: float = 50.0
    sell: float = 50.0

    def to_dict(self) -> dict[str, float]:
        return {"buy": self.buy, "sell": self.sell}


@dataclass(frozen=True)
class FinalSignal:
    """Weighted-vote decision with confidence per outcome."""
    decision: Recommendation
    confidence: dict[Recommendation, float]
    weights: dict[Recommendation, int] = field(default_factory=dict, compare=False)

    def __hash__(self) -> int:
        # Matches __eq__: decision and confidence only
        return hash((self.decision, tuple(sorted(self.confidence.items()))))

    def confidence_for(self, outcome: Recommendation) -> float:
        return self.confidence.get(outcome, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "decision": self.decision.value,
            "confidence": {
                outcome.value: self.confidence_for(outcome)
                for outcome in Recommendation
            },
        }


@dataclass(frozen=True)
class MarketStatus:
    """Externally supplied session facts for one symbol at one instant."""
    is_open: bool = True
    active_sessions: tuple[str, ...] = ()


@dataclass(frozen=True)
class SymbolAnalysis:
    """Full per-symbol result of one evaluation cycle."""
    symbol: str
    time: str
    price: Optional[float]
    hullma9: Reading
    rsi: Reading
    ema: Reading
    macd: Reading
    stochastic: Reading
    adx: Reading
    cci: Reading
    williams_r: Reading
    bb_power: Reading
    dominance: DominanceScore
    pivots: PivotLevels
    market_status: MarketStatus = field(default_factory=MarketStatus)
    rsi_recommendation: Optional[float] = None
    momentum: Optional[float] = None
    trend: Optional[float] = None
    volatility: Optional[float] = None
    final_signal: Optional[FinalSignal] = None

    def indicator_readings(self) -> dict[str, Reading]:
        """Indicator readings keyed by voting name, in vote order."""
        return {
            "hullma9": self.hullma9,
            "rsi": self.rsi,
            "macd": self.macd,
            "ema": self.ema,
            "stochastic": self.stochastic,
            "adx": self.adx,
            "cci": self.cci,
            "williams_r": self.williams_r,
            "bb_power": self.bb_power,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "time": self.time,
            "price": self.price,
            "isOpen": self.market_status.is_open,
            "activeSessions": list(self.market_status.active_sessions),
            "hullma9": self.hullma9.to_dict(),
            "rsi": self.rsi.to_dict(),
            "ema": self.ema.to_dict(),
            "macd": self.macd.to_dict(),
            "stochastic": self.stochastic.to_dict(),
            "adx": self.adx.to_dict(),
            "cci": self.cci.to_dict(),
            "williamsR": self.williams_r.to_dict(),
            "bbPower": self.bb_power.to_dict(),
            "rsiRecommendation": self.rsi_recommendation,
            "momentum": self.momentum,
            "trend": self.trend,
            "volatility": self.volatility,
            "buySellDominance": self.dominance.to_dict(),
            "pivotPoints": self.pivots.to_dict(),
            "finalSignal": self.final_signal.to_dict() if self.final_signal else None,
        }


@dataclass(frozen=True)
class AggregateSummary:
    """Batch-level buy/sell/neutral split derived from dominance scores."""
    time: str
    total_symbols: int
    buy_percent: float
    sell_percent: float
    neutral_percent: float
    active_sessions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "totalSymbols": self.total_symbols,
            "buyPercent": self.buy_percent,
            "sellPercent": self.sell_percent,
            "neutralPercent": self.neutral_percent,
            "activeSessions": list(self.active_sessions),
        }


@dataclass(frozen=True)
class CycleRecord:
    """Everything one evaluation cycle hands to the persistence layer."""
    symbols: tuple[SymbolAnalysis, ...]
    summary: AggregateSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbols": [analysis.to_dict() for analysis in self.symbols],
            "summary": self.summary.to_dict(),
        }
