from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from ..ingest.errors import ErrorKind

"""Messages exchanged between the parse worker and the orchestrator.

The worker emits zero or more ParseProgress messages followed by exactly one
terminal message (ParseSuccess or ParseFailure). All classes are plain
module-level dataclasses so they pickle across a multiprocessing.Queue.
"""

__all__ = [
    "RawDataset",
    "ParseProgress",
    "ParseSuccess",
    "ParseFailure",
    "ParseMessage",
    "is_terminal",
]


@dataclass(frozen=True)
class RawDataset:
    """Uncleaned parse output: header candidates plus ragged data rows."""
    file_name: str
    headers: list[str]
    rows: list[list[str]]


@dataclass(frozen=True)
class ParseProgress:
    progress: int  # 0-100
    message: str
    type: Literal["progress"] = field(default="progress", init=False)


@dataclass(frozen=True)
class ParseSuccess:
    data: RawDataset
    type: Literal["success"] = field(default="success", init=False)


@dataclass(frozen=True)
class ParseFailure:
    error: str
    kind: ErrorKind = ErrorKind.UNKNOWN_ERROR
    type: Literal["error"] = field(default="error", init=False)


ParseMessage = Union[ParseProgress, ParseSuccess, ParseFailure]


def is_terminal(message: ParseMessage) -> bool:
    return message.type != "progress"
