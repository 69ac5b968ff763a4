"""Standard output sink for dry runs."""

import json
import sys
from typing import Any, Optional, TextIO

from .base import BaseRecordSink


class StdoutSink(BaseRecordSink):
    """Prints each cycle record as JSON, or as one line per symbol."""

    def __init__(self, name: str = "stdout", pretty: bool = False, stream: Optional[TextIO] = None):
        super().__init__(name)
        self.pretty = pretty
        self.stream = stream

    def _write(self, record: dict[str, Any]) -> str:
        stream = self.stream or sys.stdout
        print(self._format_record(record), file=stream, flush=True)
        return "stdout"

    def _format_record(self, record: dict[str, Any]) -> str:
        if not self.pretty:
            return json.dumps(record)

        lines = []
        for analysis in record.get("symbols", []):
            final = analysis.get("finalSignal") or {}
            confidence = final.get("confidence", {})
            lines.append(
                f"{analysis['symbol']:<18} {final.get('decision', 'n/a'):<8} "
                f"buy={confidence.get('Buy', 0):.2f}% sell={confidence.get('Sell', 0):.2f}% "
                f"neutral={confidence.get('Neutral', 0):.2f}%"
            )

        summary = record.get("summary", {})
        lines.append(
            f"SUMMARY {summary.get('totalSymbols', 0)} symbols: "
            f"buy={summary.get('buyPercent', 0):.2f}% sell={summary.get('sellPercent', 0):.2f}% "
            f"neutral={summary.get('neutralPercent', 0):.2f}%"
        )
        return "\n".join(lines)

    def health_check(self) -> bool:
        """Check if the output stream is writable."""
        try:
            return (self.stream or sys.stdout).writable()
        except (OSError, ValueError):
            return False
