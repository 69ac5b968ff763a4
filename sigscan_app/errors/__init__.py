"""
Error classification for the signal scanner.

The analysis engine itself never raises for sparse data; these exceptions
cover contract violations and the I/O layer around the engine (snapshot
acquisition, history persistence, result delivery).
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    DeliveryError,
)
from .recovery import (
    RecoverableError,
    SnapshotFetchError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "DeliveryError",
    # Recovery Categories
    "RecoverableError",
    "SnapshotFetchError",
]
