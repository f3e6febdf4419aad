from __future__ import annotations

from enum import Enum

"""Error taxonomy for the ingestion pipeline.

Every stage either returns a complete result or raises exactly one
PipelineError. The message is shown to the user verbatim, so it is written
for a person rather than for a log parser; `kind` is the machine-readable
part and doubles as the error_type of the JSON Lines error log.
"""

__all__ = [
    "ErrorKind",
    "PipelineError",
]


class ErrorKind(str, Enum):
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    EMPTY_FILE = "EMPTY_FILE"
    TOO_MANY_COLUMNS = "TOO_MANY_COLUMNS"
    TOO_MANY_ROWS = "TOO_MANY_ROWS"
    SYNTAX_ERROR = "SYNTAX_ERROR"
    CHANNEL_FAILURE = "CHANNEL_FAILURE"  # parse worker died without a terminal message
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class PipelineError(Exception):
    """Terminal failure of one parse attempt. Never retried internally."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __reduce__(self):  # keep kind when crossing a process boundary
        return (self.__class__, (self.kind, self.message))
