from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from csvplot.models.error_record import ErrorRecord

"""JSON Lines error log for pipeline failures.

- fixed key set (see ErrorRecord)
- at most one `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) per buffer, created on
  the first flush that has something to write
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords in memory; flush() appends them to the log file.

    Not thread safe; the CLI runs one pipeline at a time.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._path = self.logs_dir / f"errors-{stamp}.log"
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def record(self, file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        """Create a timestamped record, buffer it and return it."""
        rec = ErrorRecord.create(file, stage, error_type, message)
        self.append(rec)
        return rec

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records and return the log path.

        Returns None without touching the filesystem when nothing is pending.
        """
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(f"{rec.to_json_line()}\n" for rec in self._pending)
        with path.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._pending.clear()
        return path
