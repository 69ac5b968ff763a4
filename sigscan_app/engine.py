"""
Signal analysis engine.

Assembles per-symbol analysis records from raw snapshots and folds a batch
of them into a cycle record:

Snapshot → Indicator Readings + Dominance + Pivots → Final Signal → Summary

The engine holds configuration only; every call is a pure function of its
arguments, so symbols can be analyzed in any order or in parallel.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional, Union

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .data import fields as f
from .data.fields import FieldReader
from .errors import MissingDataError
from .indicators.evaluators import evaluate_indicators
from .logging.config import get_signal_logger, log_signal_decision
from .metrics.dominance import score_dominance
from .metrics.pivots import compute_pivot_levels
from .models.signals import (
    AggregateSummary,
    CycleRecord,
    MarketStatus,
    SymbolAnalysis,
)
from .signals.aggregator import collect_votes, compute_final_signal
from .signals.summary import build_aggregate_summary
from .utils.time import format_timestamp

logger = structlog.get_logger(__name__)
signal_logger = get_signal_logger(__name__)

Timestamp = Union[str, datetime]


def _as_time(value: Timestamp) -> str:
    if isinstance(value, datetime):
        return format_timestamp(value)
    return value


class SignalAnalysisEngine:
    """
    Stateless assembler for symbol analyses and batch summaries.

    Timestamps and market status are supplied by the caller; the engine
    never reads the clock or performs I/O.
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        symbol_configs: Optional[Mapping[str, DefaultConfig]] = None
    ) -> None:
        """Initialize the engine with a global and optional per-symbol configuration."""
        self.config = config or get_default_config()
        self.symbol_configs = dict(symbol_configs or {})
        self.logger = logger
        self.signal_logger = signal_logger

    def config_for(self, symbol: str) -> DefaultConfig:
        """Configuration in effect for one symbol."""
        return self.symbol_configs.get(symbol, self.config)

    def analyze_symbol(
        self,
        symbol: str,
        snapshot: Optional[Mapping[str, Any]],
        time: Timestamp,
        market_status: Optional[MarketStatus] = None
    ) -> SymbolAnalysis:
        """
        Build the analysis record for one symbol.

        Construction happens in two passes: the readings, dominance and
        pivots first, then the final signal computed from that record.

        Args:
            symbol: Symbol identifier, e.g. ``CRYPTO:BTCUSD``
            snapshot: Raw field mapping for the symbol
            time: Evaluation timestamp (datetime or preformatted string)
            market_status: Session facts supplied by the caller

        Returns:
            Fully populated SymbolAnalysis

        Raises:
            MissingDataError: If no snapshot was supplied
            MalformedDataError: If snapshot is not a mapping
        """
        if snapshot is None:
            raise MissingDataError(f"No snapshot for {symbol}", symbol=symbol)

        config = self.config_for(symbol)
        reader = FieldReader(snapshot, config.timeframe.interval)
        readings = evaluate_indicators(reader, config.indicators)

        base = SymbolAnalysis(
            symbol=symbol,
            time=_as_time(time),
            price=reader.number(f.CLOSE),
            dominance=score_dominance(reader, config.dominance),
            pivots=compute_pivot_levels(reader, config.pivots),
            market_status=market_status or MarketStatus(),
            rsi_recommendation=reader.number(f.REC_RSI),
            momentum=reader.number(f.MOMENTUM),
            trend=reader.number(f.ADX),
            volatility=reader.number(f.AWESOME_OSCILLATOR),
            **readings,
        )

        self.logger.debug(
            "Indicator readings evaluated",
            symbol=symbol,
            readings={name: reading.recommendation.value for name, reading in readings.items()},
            dominance=base.dominance.to_dict(),
            pivot_recommendation=base.pivots.recommendation.value,
        )

        final_signal = compute_final_signal(base, config.aggregator)
        analysis = replace(base, final_signal=final_signal)

        log_signal_decision(
            self.signal_logger,
            symbol=symbol,
            decision=final_signal.decision.value,
            confidence=final_signal.to_dict()["confidence"],
            votes={name: vote.value for name, vote in collect_votes(analysis).items()},
        )

        return analysis

    def build_summary(
        self,
        analyses: Sequence[SymbolAnalysis],
        time: Timestamp,
        active_sessions: Sequence[str] = ()
    ) -> AggregateSummary:
        """Fold a batch of analyses into the dominance-based summary."""
        summary = build_aggregate_summary(analyses, _as_time(time), active_sessions)

        self.logger.info(
            "Batch summary built",
            total_symbols=summary.total_symbols,
            buy_percent=summary.buy_percent,
            sell_percent=summary.sell_percent,
            neutral_percent=summary.neutral_percent,
        )

        return summary

    def analyze_batch(
        self,
        snapshots: Mapping[str, Mapping[str, Any]],
        time: Timestamp,
        market_status: Optional[Mapping[str, MarketStatus]] = None,
        active_sessions: Sequence[str] = ()
    ) -> CycleRecord:
        """
        Analyze every symbol of one cycle and summarize the batch.

        Args:
            snapshots: Raw snapshot per symbol, in output order
            time: Evaluation timestamp shared by the whole cycle
            market_status: Session facts per symbol
            active_sessions: Sessions active for the summary

        Returns:
            CycleRecord with one analysis per symbol and the summary
        """
        market_status = market_status or {}
        analyses = tuple(
            self.analyze_symbol(symbol, snapshot, time, market_status.get(symbol))
            for symbol, snapshot in snapshots.items()
        )
        summary = self.build_summary(analyses, time, active_sessions)
        return CycleRecord(symbols=analyses, summary=summary)
