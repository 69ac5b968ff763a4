"""Growing JSON history file: one array element per evaluation cycle."""

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional

from ..config.defaults import HistoryParams
from ..errors import PersistenceError
from ..validation.record_schema import validate_record
from .base import BaseRecordSink


class HistoryFileSink(BaseRecordSink):
    """
    Appends cycle records to a JSON array file.

    Each write rewrites the whole array into a temporary file that then
    replaces the target, so a failed write leaves the previous history in
    place. An existing file that cannot be parsed as an array is never
    overwritten.
    """

    def __init__(self, params: Optional[HistoryParams] = None, name: str = "history"):
        params = params or HistoryParams()
        super().__init__(name, params)
        self.params: HistoryParams = params
        self.output_path = Path(params.output_path)
        self.lock_path = self.output_path.with_name(f".{self.output_path.name}.lock")

        if params.create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def load_history(self) -> list[dict[str, Any]]:
        """
        Read the persisted history.

        Returns:
            List of cycle records, empty when the file does not exist yet

        Raises:
            PersistenceError: If the file is unreadable or not a JSON array
        """
        if not self.output_path.exists():
            return []

        try:
            with open(self.output_path) as f:
                history = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Cannot read history file: {e}",
                operation="read",
                target=str(self.output_path)
            ) from e

        if not isinstance(history, list):
            raise PersistenceError(
                f"History file must hold a JSON array, found {type(history).__name__}",
                operation="read",
                target=str(self.output_path)
            )

        return history

    def _write(self, record: dict[str, Any]) -> str:
        validate_record(record)

        with self._locked():
            history = self.load_history()
            history.append(record)
            self._replace(history)

        return str(self.output_path)

    @contextmanager
    def _locked(self):
        with open(self.lock_path, "a") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _replace(self, history: list[dict[str, Any]]) -> None:
        directory = self.output_path.parent
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.output_path.name}.", dir=directory)

        try:
            with os.fdopen(fd, "w") as tmp:
                json.dump(history, tmp, indent=self.params.indent)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.output_path)

        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(
                f"Cannot write history file: {e}",
                operation="write",
                target=str(self.output_path)
            ) from e

    def health_check(self) -> bool:
        """Check if the history directory is writable."""
        try:
            test_file = self.output_path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except OSError as e:
            self.logger.warning(
                "Health check failed",
                delivery_name=self.name,
                error=str(e)
            )
            return False
