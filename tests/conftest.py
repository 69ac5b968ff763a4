"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, Any
from datetime import datetime, timezone

from sigscan_app.utils.time import fixed_clock


@pytest.fixture
def bullish_snapshot() -> Dict[str, Any]:
    """Snapshot where most indicators lean to the buy side."""
    return {
        "close|15": 110.0,
        "high|15": 112.0,
        "low|15": 95.0,
        "HullMA9|15": 100.0,
        "RSI|15": 25.0,
        "Rec.RSI|15": None,
        "EMA20|15": 104.0,
        "MACD.macd|15": 1.2,
        "MACD.signal|15": 0.8,
        "Stoch.K|15": 60.0,
        "Stoch.D|15": 50.0,
        "ADX|15": 28.0,
        "ADX+DI|15": 30.0,
        "ADX-DI|15": 12.0,
        "CCI20|15": 140.0,
        "W.R|15": -85.0,
        "BBPower|15": 3.5,
        "Mom|15": 4.0,
        "AO|15": 2.1,
        "Pivot.M.Classic.Middle|15": 100.0,
        "Pivot.M.Classic.R1|15": 105.0,
        "Pivot.M.Classic.S1|15": 95.0,
    }


@pytest.fixture
def bearish_snapshot() -> Dict[str, Any]:
    """Snapshot where most indicators lean to the sell side."""
    return {
        "close|15": 90.0,
        "high|15": 104.0,
        "low|15": 88.0,
        "HullMA9|15": 100.0,
        "RSI|15": 75.0,
        "EMA20|15": 96.0,
        "MACD.macd|15": -0.5,
        "MACD.signal|15": 0.1,
        "Stoch.K|15": 40.0,
        "Stoch.D|15": 55.0,
        "ADX|15": 31.0,
        "ADX+DI|15": 10.0,
        "ADX-DI|15": 26.0,
        "CCI20|15": -150.0,
        "W.R|15": -10.0,
        "BBPower|15": -2.0,
        "Mom|15": -3.0,
        "AO|15": -1.4,
        "Pivot.M.Classic.Middle|15": 100.0,
        "Pivot.M.Classic.R1|15": 105.0,
        "Pivot.M.Classic.S1|15": 95.0,
    }


@pytest.fixture
def evaluation_time() -> datetime:
    """Fixed evaluation instant (a Wednesday during the London session)."""
    return datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(evaluation_time):
    """Clock pinned to the evaluation instant."""
    return fixed_clock(evaluation_time)
