#!/usr/bin/env python3
"""
Basic Usage Example - Signal Analysis Engine

This script demonstrates the signal analysis engine on canned snapshots.
It shows how to:
- Initialize the engine
- Analyze one symbol snapshot
- Inspect indicator readings, dominance and pivot levels
- Summarize a batch of symbols

No network access is needed.

Run: python examples/basic_usage.py
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict

from sigscan_app.engine import SignalAnalysisEngine
from sigscan_app.models.signals import SymbolAnalysis


def create_snapshot(close: float, rsi: float, macd: float, signal: float,
                    adx: float, momentum: float, interval: str = "15") -> Dict[str, Any]:
    """Create a scanner-style snapshot with timeframe-qualified field names."""
    fields = {
        "close": close,
        "high": close * 1.01,
        "low": close * 0.98,
        "HullMA9": close * 0.995,
        "RSI": rsi,
        "EMA20": close * 0.99,
        "MACD.macd": macd,
        "MACD.signal": signal,
        "Stoch.K": 55.0,
        "Stoch.D": 48.0,
        "ADX": adx,
        "ADX+DI": 24.0,
        "ADX-DI": 17.0,
        "CCI20": 85.0,
        "W.R": -45.0,
        "BBPower": close * 0.002,
        "Mom": momentum,
        "AO": momentum / 2,
    }
    return {f"{name}|{interval}": value for name, value in fields.items()}


def print_analysis(analysis: SymbolAnalysis) -> None:
    """Print the readings and decision for one symbol."""
    final = analysis.final_signal
    print(f"📊 {analysis.symbol} @ {analysis.price}")
    for name, reading in analysis.indicator_readings().items():
        print(f"  {name:<11} {reading.recommendation.value:<8} value={reading.value}")
    print(f"  pivots      {analysis.pivots.recommendation.value:<8} "
          f"classic r1={analysis.pivots.classic.r1:.2f} s1={analysis.pivots.classic.s1:.2f}")
    print(f"  Dominance: buy={analysis.dominance.buy}% sell={analysis.dominance.sell}%")
    print(f"  Decision: {final.decision.value}")
    print(f"  Confidence: {final.to_dict()['confidence']}")
    print("-" * 50)


def main():
    """Main demonstration function."""
    print("🚀 Signal Analysis Engine - Basic Usage Demo")
    print("=" * 60)

    print("1. Initializing the engine...")
    engine = SignalAnalysisEngine()
    print()

    now = datetime.now(timezone.utc)
    snapshots = {
        "CRYPTO:BTCUSD": create_snapshot(64250.0, 58.4, 120.5, 98.2, 27.1, 850.0),
        "CRYPTO:ETHUSD": create_snapshot(3120.0, 74.2, -4.1, 2.3, 31.5, -22.0),
        "OANDA:XAUUSD": create_snapshot(2331.5, 49.8, 0.4, 0.4, 14.2, 0.0),
    }

    print("2. Analyzing symbols...")
    for symbol, snapshot in snapshots.items():
        print_analysis(engine.analyze_symbol(symbol, snapshot, now))
    print()

    print("3. Summarizing the batch...")
    record = engine.analyze_batch(snapshots, now)
    print(json.dumps(record.summary.to_dict(), indent=2))


if __name__ == "__main__":
    main()
