"""Integration tests for a complete evaluation cycle."""

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from sigscan_app.config.defaults import HistoryParams, ScannerParams, get_default_config
from sigscan_app.delivery import HistoryFileSink
from sigscan_app.errors import DeliveryError, SnapshotFetchError
from sigscan_app.models.signals import Recommendation
from sigscan_app.runner import SignalCycleRunner


class FakeProvider:
    """Serves canned snapshots; symbols without one fail."""

    def __init__(self, snapshots: dict[str, dict[str, Any]]):
        self.snapshots = snapshots
        self.requested: list[str] = []

    def fetch(self, symbol: str) -> dict[str, Any]:
        self.requested.append(symbol)
        if symbol not in self.snapshots:
            raise SnapshotFetchError(symbol=symbol, status=503)
        return self.snapshots[symbol]


@pytest.fixture
def provider(bullish_snapshot, bearish_snapshot) -> FakeProvider:
    return FakeProvider({
        "CRYPTO:BTCUSD": bullish_snapshot,
        "OANDA:XAUUSD": bearish_snapshot,
    })


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "tradingdata.json"


@pytest.fixture
def sink(history_path: Path) -> HistoryFileSink:
    return HistoryFileSink(HistoryParams(output_path=str(history_path)))


class TestFullCycle:
    """Fetch, analyze, summarize and persist one cycle"""

    def test_cycle_persisted(self, provider, sink, history_path, clock):
        runner = SignalCycleRunner(provider, sink, clock=clock)

        record = runner.run_cycle(["CRYPTO:BTCUSD", "OANDA:XAUUSD"])

        history = json.loads(history_path.read_text())
        assert history == [record.to_dict()]

        btc, gold = history[0]["symbols"]
        assert btc["symbol"] == "CRYPTO:BTCUSD"
        assert btc["time"] == "2024-05-01T12:30:00.000Z"
        assert btc["finalSignal"]["decision"] == "Buy"
        assert gold["finalSignal"]["decision"] == "Sell"
        assert gold["isOpen"] is True
        assert gold["activeSessions"] == ["London", "New York"]
        assert history[0]["summary"]["activeSessions"] == ["London", "New York"]
        assert history[0]["summary"]["buyPercent"] == 50.0

    def test_default_symbol_list(self, provider, clock):
        config = get_default_config()
        config = replace(config, scanner=ScannerParams(symbols=("CRYPTO:BTCUSD",)))
        runner = SignalCycleRunner(provider, config=config, clock=clock)

        record = runner.run_cycle()

        assert provider.requested == ["CRYPTO:BTCUSD"]
        assert record.summary.total_symbols == 1

    def test_fetch_failure_aborts(self, provider, sink, history_path, clock):
        runner = SignalCycleRunner(provider, sink, clock=clock)

        with pytest.raises(SnapshotFetchError):
            runner.run_cycle(["CRYPTO:BTCUSD", "CRYPTO:MISSING"])

        assert not history_path.exists()

    def test_fetch_failure_skipped(self, provider, sink, clock):
        config = replace(get_default_config(), scanner=ScannerParams(skip_failed_symbols=True))
        runner = SignalCycleRunner(provider, sink, config=config, clock=clock)

        record = runner.run_cycle(["CRYPTO:MISSING", "CRYPTO:BTCUSD"])

        assert [a.symbol for a in record.symbols] == ["CRYPTO:BTCUSD"]
        assert record.summary.total_symbols == 1

    def test_delivery_failure_raises(self, provider, sink, history_path, clock):
        history_path.write_text("not json")
        runner = SignalCycleRunner(provider, sink, clock=clock)

        with pytest.raises(DeliveryError) as exc_info:
            runner.run_cycle(["CRYPTO:BTCUSD"])

        assert exc_info.value.delivery_method == "history"
        assert exc_info.value.record_time == "2024-05-01T12:30:00.000Z"
        assert history_path.read_text() == "not json"

    def test_symbol_configs_applied(self, provider, clock):
        config = get_default_config()
        strict = replace(config, indicators=replace(config.indicators, adx_trend=40.0))
        runner = SignalCycleRunner(provider, clock=clock, symbol_configs={"OANDA:XAUUSD": strict})

        record = runner.run_cycle(["CRYPTO:BTCUSD", "OANDA:XAUUSD"])

        assert record.symbols[0].adx.recommendation == Recommendation.BUY
        assert record.symbols[1].adx.recommendation == Recommendation.NEUTRAL
