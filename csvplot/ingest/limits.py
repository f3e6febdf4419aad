from __future__ import annotations

from collections.abc import Sequence

from csvplot.ingest.errors import ErrorKind, PipelineError
from csvplot.models.config_models import PipelineConfig

"""Limit validation: reject oversized or overshaped input early.

Checks run before any inference so that a 2GB upload or a 10k-column sheet
fails in milliseconds. Thresholds come from PipelineConfig.
"""

__all__ = [
    "check_file_size",
    "check_not_empty",
    "check_shape",
    "is_large_file",
]


def check_file_size(size: int, config: PipelineConfig) -> None:
    if size > config.max_file_size:
        raise PipelineError(
            ErrorKind.FILE_TOO_LARGE,
            f"File size exceeds maximum of {config.max_file_size_mb}MB",
        )


def is_large_file(size: int, config: PipelineConfig) -> bool:
    return size > config.warn_file_size


def check_not_empty(grid: Sequence[Sequence[str]]) -> None:
    """A file that parses to zero rows is an error; a header-only file is not."""
    if len(grid) == 0:
        raise PipelineError(ErrorKind.EMPTY_FILE, "CSV file is empty")


def check_shape(column_count: int, row_count: int, config: PipelineConfig) -> None:
    """Validate header width and data row count (header excluded).

    Columns are checked first; a file violating both reports the columns.
    """
    if column_count > config.max_columns:
        raise PipelineError(
            ErrorKind.TOO_MANY_COLUMNS,
            f"CSV has {column_count} columns, maximum is {config.max_columns}",
        )
    if row_count > config.max_rows:
        raise PipelineError(
            ErrorKind.TOO_MANY_ROWS,
            f"CSV has {row_count} rows, maximum is {config.max_rows}",
        )
