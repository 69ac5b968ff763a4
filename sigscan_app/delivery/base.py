"""Base classes for cycle record sinks."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog


class DeliveryStatus(Enum):
    """Record delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of one record delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.SUCCESS


class BaseRecordSink(ABC):
    """Base class for sinks that accept one cycle record at a time."""

    def __init__(self, name: str, config: Any = None):
        self.name = name
        self.config = config
        self.logger = structlog.get_logger(f"sigscan.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def _write(self, record: dict[str, Any]) -> str:
        """
        Write one serialized cycle record.

        Returns:
            Human-readable description of where the record went
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the sink can currently accept records."""

    def deliver(self, record: dict[str, Any]) -> DeliveryResult:
        """
        Deliver one serialized cycle record.

        Failures are reported in the result rather than raised.
        """
        try:
            destination = self._write(record)

        except Exception as e:
            self._error_count += 1
            self.logger.error(
                "Record delivery failed",
                delivery_name=self.name,
                error=str(e),
                error_type=type(e).__name__
            )
            return DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"{type(e).__name__}: {e}",
                error=e
            )

        self._delivery_count += 1
        self.logger.info(
            "Record delivered",
            delivery_name=self.name,
            destination=destination,
            symbol_count=len(record.get("symbols", []))
        )
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message=destination)

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
