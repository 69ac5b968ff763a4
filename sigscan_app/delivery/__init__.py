"""Result sinks for completed evaluation cycles."""

from .base import BaseRecordSink, DeliveryResult, DeliveryStatus
from .history_file import HistoryFileSink
from .stdout_delivery import StdoutSink

__all__ = [
    "BaseRecordSink",
    "DeliveryResult",
    "DeliveryStatus",
    "HistoryFileSink",
    "StdoutSink",
]
