from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per terminal pipeline failure. Keys are fixed: timestamp, file,
stage, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV file name being processed
        stage: Pipeline stage that failed (e.g. "parse", "config", "build")
        error_type: ErrorKind value in UPPER_SNAKE_CASE
        message: User-facing error message, verbatim
    """
    timestamp: str
    file: str
    stage: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            stage=stage,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
