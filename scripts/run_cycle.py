#!/usr/bin/env python3
"""Run one evaluation cycle and append it to the history file."""

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sigscan_app.config.loader import ConfigLoader
from sigscan_app.config.validation import ConfigValidator
from sigscan_app.data.provider import ScannerSnapshotProvider
from sigscan_app.delivery import HistoryFileSink, StdoutSink
from sigscan_app.errors import DeliveryError, SnapshotFetchError
from sigscan_app.logging import configure_logging, get_logger
from sigscan_app.runner import SignalCycleRunner


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("symbols", nargs="*", help="Symbols to evaluate (default: configured list)")
    parser.add_argument("--config-dir", type=Path, default=None, help="Directory holding settings.yaml")
    parser.add_argument("--output", default=None, help="History file path override")
    parser.add_argument("--dry-run", action="store_true", help="Print the record instead of persisting it")
    parser.add_argument("--log-level", default=None, help="Logging level override")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    loader = ConfigLoader.create(args.config_dir)
    overrides = {"history": {"output_path": args.output}} if args.output else None
    merged = loader.merge_config(overrides=overrides)

    errors = ConfigValidator.validate_config(merged)
    if errors:
        for error in errors:
            print(f"config error: {error.field}: {error.message} (value: {error.value})", file=sys.stderr)
        return 2

    config = loader.load(overrides=overrides)
    configure_logging(
        level=args.log_level or config.logging.level,
        format_json=config.logging.format_json
    )
    logger = get_logger("sigscan.run_cycle")

    provider = ScannerSnapshotProvider(config.scanner, config.timeframe.interval)
    sink = StdoutSink(pretty=True) if args.dry_run else HistoryFileSink(config.history)
    symbols = args.symbols or list(config.scanner.symbols)
    symbol_configs = {symbol: loader.load(symbol, overrides) for symbol in symbols}
    runner = SignalCycleRunner(provider, sink, config, symbol_configs=symbol_configs)

    try:
        runner.run_cycle(symbols)
    except SnapshotFetchError as e:
        logger.error("Cycle aborted", symbol=e.symbol, error=str(e))
        return 1
    except DeliveryError as e:
        logger.error("Cycle not persisted", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
