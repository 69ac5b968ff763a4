"""
System failure error classifications for the I/O layer.

These exceptions represent failures outside the pure engine that stop a
cycle from completing.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """History file read or write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class DeliveryError(SystemFailureError):
    """Result sink failures."""

    def __init__(self, message: str, delivery_method: Optional[str] = None,
                 record_time: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.delivery_method = delivery_method
        self.record_time = record_time
