"""Snapshot acquisition from the scanner HTTP endpoint."""

import json
import socket
import time
from typing import Any, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import ScannerParams
from ..errors import SnapshotFetchError
from .fields import all_fields

logger = structlog.get_logger(__name__)


class SnapshotProvider(Protocol):
    """Anything that can return one raw snapshot per symbol."""

    def fetch(self, symbol: str) -> dict[str, Any]:
        ...


class ScannerSnapshotProvider:
    """Fetches timeframe-qualified indicator fields for one symbol per request."""

    def __init__(self, params: Optional[ScannerParams] = None, interval: str = "15"):
        self.params = params or ScannerParams()
        self.interval = interval
        self.fields = all_fields(interval)

    def build_url(self, symbol: str) -> str:
        """Scanner URL requesting every field the engine reads."""
        query = urlencode({
            "symbol": symbol,
            "fields": ",".join(self.fields),
            "no_404": "true",
        })
        return f"{self.params.base_url}?{query}"

    def fetch(self, symbol: str) -> dict[str, Any]:
        """
        Fetch one snapshot, retrying transient failures.

        Args:
            symbol: Symbol identifier, e.g. ``CRYPTO:BTCUSD``

        Returns:
            Raw snapshot mapping

        Raises:
            SnapshotFetchError: When every attempt failed
        """
        attempt = 0

        while True:
            try:
                return self._fetch_once(symbol, attempt)
            except SnapshotFetchError as e:
                # Client errors will not change on retry
                retryable = e.status is None or e.status >= 500

                if not retryable or attempt >= self.params.retry_attempts:
                    logger.error(
                        "Failed to retrieve snapshot",
                        symbol=symbol,
                        attempts=attempt + 1,
                        status=e.status,
                        error=str(e)
                    )
                    raise

                attempt += 1
                logger.warning(
                    "Snapshot fetch failed, retrying",
                    symbol=symbol,
                    attempt=attempt,
                    retry_delay=self.params.retry_delay_seconds,
                    error=str(e)
                )
                time.sleep(self.params.retry_delay_seconds)

    def _fetch_once(self, symbol: str, attempt: int) -> dict[str, Any]:
        req = Request(
            self.build_url(symbol),
            headers={
                'Accept': 'application/json',
                'User-Agent': 'sigscan-app/0.1'
            },
            method='GET'
        )

        try:
            with urlopen(req, timeout=self.params.timeout_seconds) as response:
                raw = response.read()

        except HTTPError as e:
            raise SnapshotFetchError(
                f"failed to retrieve snapshot: HTTP {e.code} {e.reason}",
                symbol=symbol,
                status=e.code,
                retry_count=attempt,
                max_retries=self.params.retry_attempts
            ) from e

        except (URLError, socket.timeout, OSError) as e:
            raise SnapshotFetchError(
                f"failed to retrieve snapshot: {e}",
                symbol=symbol,
                retry_count=attempt,
                max_retries=self.params.retry_attempts
            ) from e

        try:
            payload = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise SnapshotFetchError(
                f"failed to retrieve snapshot: invalid encoding ({e.reason})",
                symbol=symbol,
                retry_count=attempt,
                max_retries=self.params.retry_attempts
            ) from e

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise SnapshotFetchError(
                f"failed to retrieve snapshot: invalid JSON ({e.msg})",
                symbol=symbol,
                retry_count=attempt,
                max_retries=self.params.retry_attempts
            ) from e

        if not isinstance(data, dict):
            raise SnapshotFetchError(
                f"failed to retrieve snapshot: expected object, got {type(data).__name__}",
                symbol=symbol,
                retry_count=attempt,
                max_retries=self.params.retry_attempts
            )

        logger.debug("Snapshot fetched", symbol=symbol, field_count=len(data))
        return data
