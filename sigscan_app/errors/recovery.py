"""
Recovery strategy classifications for error handling.

Errors here can be retried on the next cycle without intervention.
"""

from typing import Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, retry_count: int = 0,
                 max_retries: int = 3, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True


class SnapshotFetchError(RecoverableError):
    """The market-data collaborator failed to return a snapshot."""

    def __init__(self, message: str = "failed to retrieve snapshot",
                 symbol: Optional[str] = None, status: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.status = status
