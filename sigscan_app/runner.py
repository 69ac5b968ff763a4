"""
Evaluation cycle runner.

Drives one cycle around the pure engine: fetch a snapshot per symbol,
look up session facts, analyze, summarize and hand the record to a sink.
All I/O failures surface here, never inside the engine.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .data.provider import SnapshotProvider
from .delivery.base import BaseRecordSink
from .engine import SignalAnalysisEngine
from .errors import DeliveryError, SnapshotFetchError
from .models.signals import CycleRecord, MarketStatus
from .sessions.calendar import SessionCalendar
from .utils.time import Clock, format_timestamp, resolve_time

logger = structlog.get_logger(__name__)


class SignalCycleRunner:
    """Runs evaluation cycles over a symbol list."""

    def __init__(
        self,
        provider: SnapshotProvider,
        sink: Optional[BaseRecordSink] = None,
        config: Optional[DefaultConfig] = None,
        clock: Optional[Clock] = None,
        calendar: Optional[SessionCalendar] = None,
        symbol_configs: Optional[Mapping[str, DefaultConfig]] = None
    ) -> None:
        self.config = config or get_default_config()
        self.provider = provider
        self.sink = sink
        self.clock = clock
        self.engine = SignalAnalysisEngine(self.config, symbol_configs)
        self.calendar = calendar or SessionCalendar(self.config.sessions, clock)

    def fetch_snapshots(self, symbols: Sequence[str]) -> dict[str, dict[str, Any]]:
        """
        Fetch one snapshot per symbol, preserving symbol order.

        Raises:
            SnapshotFetchError: On the first failure, unless failed symbols
                are configured to be skipped
        """
        snapshots = {}

        for symbol in symbols:
            try:
                snapshots[symbol] = self.provider.fetch(symbol)
            except SnapshotFetchError as e:
                if not self.config.scanner.skip_failed_symbols:
                    raise
                logger.warning(
                    "Skipping symbol without snapshot",
                    symbol=symbol,
                    error=str(e)
                )

        return snapshots

    def run_cycle(self, symbols: Optional[Sequence[str]] = None) -> CycleRecord:
        """
        Run one full evaluation cycle.

        Nothing reaches the sink unless every required snapshot was fetched
        and the record was built.

        Args:
            symbols: Symbols to evaluate (defaults to the configured list)

        Returns:
            The cycle record that was delivered

        Raises:
            SnapshotFetchError: If a snapshot could not be retrieved
            DeliveryError: If the sink rejected the record
        """
        symbols = list(symbols) if symbols is not None else list(self.config.scanner.symbols)
        moment = resolve_time(self.clock)

        logger.info("Evaluation cycle started", symbol_count=len(symbols), time=format_timestamp(moment))

        snapshots = self.fetch_snapshots(symbols)

        market_status: dict[str, MarketStatus] = {
            symbol: self.calendar.market_status(symbol, moment) for symbol in snapshots
        }

        record = self.engine.analyze_batch(
            snapshots,
            moment,
            market_status=market_status,
            active_sessions=self.calendar.active_sessions(moment),
        )

        if self.sink is not None:
            result = self.sink.deliver(record.to_dict())
            if not result.ok:
                raise DeliveryError(
                    f"Failed to deliver cycle record: {result.message}",
                    delivery_method=self.sink.name,
                    record_time=record.summary.time
                ) from result.error

        logger.info(
            "Evaluation cycle completed",
            symbol_count=len(record.symbols),
            buy_percent=record.summary.buy_percent,
            sell_percent=record.summary.sell_percent
        )

        return record
