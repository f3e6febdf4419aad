from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from ..ingest.builder import build_parsed_csv
from ..ingest.errors import ErrorKind, PipelineError
from ..ingest.limits import check_file_size, is_large_file
from ..models.config_models import DEFAULT_CONFIG, PipelineConfig
from ..models.dataset import ParsedCSV
from ..models.messages import ParseMessage, ParseProgress, RawDataset
from ..storage.charts import ChartRepository
from ..storage.recents import RecentsRepository
from .worker import ParseWorker

logger = logging.getLogger(__name__)

"""Pipeline orchestration: file bytes -> ParsedCSV.

Flow:
1. spawn a parse worker and consume its message stream
2. forward progress messages to the caller's callback
3. on success build the dataset (clean, infer, sign)
4. register the dataset in the injected recents repository, with the
   number of charts already saved for its signature
5. on error raise PipelineError carrying the worker's message verbatim

There is no retry; re-attempting is the caller's decision.
"""

__all__ = [
    "load_dataset",
    "load_file",
]

ProgressCallback = Callable[[ParseProgress], None]


class _Worker(Protocol):
    def messages(self) -> Any: ...

    def close(self) -> None: ...

    def __enter__(self) -> Any: ...

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> Any: ...


WorkerFactory = Callable[[bytes, str, PipelineConfig], _Worker]


def _consume(
    worker: _Worker,
    file_name: str,
    on_progress: ProgressCallback | None,
) -> RawDataset:
    message: ParseMessage
    for message in worker.messages():
        if message.type == "progress":
            logger.debug(f"parse progress file={file_name} {message.progress}% {message.message}")
            if on_progress is not None:
                on_progress(message)
        elif message.type == "success":
            return message.data
        else:
            logger.debug(f"parse failed file={file_name} kind={message.kind.value}")
            raise PipelineError(message.kind, message.error)
    raise PipelineError(ErrorKind.CHANNEL_FAILURE, "Worker error: no result received")


def load_dataset(
    data: bytes,
    file_name: str,
    config: PipelineConfig = DEFAULT_CONFIG,
    *,
    charts: ChartRepository | None = None,
    recents: RecentsRepository | None = None,
    on_progress: ProgressCallback | None = None,
    worker_factory: WorkerFactory | None = None,
) -> ParsedCSV:
    """Parse, clean, type and sign one CSV file.

    Args:
        data: Raw file bytes
        file_name: Display name of the file
        config: Pipeline limits and sizes
        charts: Saved charts; only used to count charts for the recents entry
        recents: Recently opened datasets; the new dataset is registered here
        on_progress: Called with every progress message, in order
        worker_factory: Builds the parse worker; defaults to ParseWorker (child process)

    Returns:
        The immutable ParsedCSV

    Raises:
        PipelineError: On any limit violation, syntax error or worker failure
    """
    if is_large_file(len(data), config):
        logger.warning(
            f"large file {file_name}: {len(data) / (1024 * 1024):.1f}MB; parsing may take a while"
        )

    factory = worker_factory or ParseWorker
    with factory(data, file_name, config) as worker:
        raw = _consume(worker, file_name, on_progress)

    dataset = build_parsed_csv(raw.file_name, raw.headers, raw.rows, sample_size=config.sample_size)
    logger.info(
        f"loaded {dataset.file_name}: rows={dataset.row_count} columns={dataset.column_count} "
        f"signature={dataset.signature}"
    )
    if dataset.row_count > config.recommended_rows:
        logger.warning(
            f"{dataset.file_name} has {dataset.row_count} rows; "
            f"more than {config.recommended_rows} rows may slow down charts"
        )

    if recents is not None:
        chart_count = charts.count(dataset.signature) if charts is not None else 0
        recents.add(dataset.metadata(chart_count=chart_count))
    return dataset


def load_file(path: Path, config: PipelineConfig = DEFAULT_CONFIG, **kwargs: Any) -> ParsedCSV:
    """Read a CSV file from disk and run load_dataset on its bytes.

    The size limit is checked against the file's size before reading it.
    """
    check_file_size(path.stat().st_size, config)
    return load_dataset(path.read_bytes(), path.name, config, **kwargs)
