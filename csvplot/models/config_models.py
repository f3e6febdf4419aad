from __future__ import annotations

from dataclasses import dataclass

"""Pipeline configuration dataclass for the CSV ingestion core.

Every tunable threshold used by the limit validator, the type inferrer and
the chart sampler lives here. The YAML loader in csvplot/config/loader.py
builds instances of this class; code never hard-codes these numbers inline.
"""

__all__ = [
    "PipelineConfig",
    "DEFAULT_CONFIG",
]

MB = 1024 * 1024


@dataclass(frozen=True)
class PipelineConfig:
    """Tunable limits and sizes for one pipeline run.

    Defaults mirror the values the upload UI was tuned for: 50MB files,
    one million rows, one hundred columns.
    """
    max_file_size: int = 50 * MB  # bytes; larger files fail with FILE_TOO_LARGE
    warn_file_size: int = 10 * MB  # bytes; larger files only log a warning
    max_rows: int = 1_000_000  # data rows, header excluded
    recommended_rows: int = 100_000  # datasets above this log a warning
    max_columns: int = 100
    sample_size: int = 1_000  # rows examined by type inference
    chart_sampling_threshold: int = 50_000  # default max points per chart
    preview_rows: int = 500
    delimiter: str = ","
    recents_limit: int = 10
    storage_directory: str = "./.csvplot"

    @property
    def max_file_size_mb(self) -> int:
        return self.max_file_size // MB


DEFAULT_CONFIG = PipelineConfig()
