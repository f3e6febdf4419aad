from __future__ import annotations

import multiprocessing
import pickle
import queue
from collections.abc import Callable, Iterator
from typing import Any

from ..ingest.errors import ErrorKind, PipelineError
from ..ingest.limits import check_file_size, check_not_empty, check_shape
from ..ingest.reader import decode_bytes, parse_text, split_header
from ..models.config_models import DEFAULT_CONFIG, PipelineConfig
from ..models.messages import (
    ParseFailure,
    ParseMessage,
    ParseProgress,
    ParseSuccess,
    RawDataset,
    is_terminal,
)

"""Isolated parse worker.

`parse_job` is the unit of work: bytes in, an ordered stream of messages out
(zero or more progress messages, then exactly one success or error).
`ParseWorker` runs it in a child process and talks to it only through a
multiprocessing.Queue, so a crash while parsing cannot corrupt the caller;
it surfaces as a CHANNEL_FAILURE message instead.

`InlineParseWorker` runs the same job in the calling process with the same
interface, for callers that cannot spawn processes.
"""

__all__ = [
    "parse_job",
    "ParseWorker",
    "InlineParseWorker",
]

Emit = Callable[[ParseMessage], None]

_UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def parse_job(
    data: bytes,
    file_name: str,
    config: PipelineConfig = DEFAULT_CONFIG,
    emit: Emit | None = None,
) -> None:
    """Parse `data` and report through `emit`.

    Order: size check, 0 "Reading file...", decode, 30 "Parsing CSV...",
    parse, empty check, 60 "Processing data...", shape check,
    90 "Finalizing...", success. Any exception becomes one ParseFailure and
    nothing is emitted after it.
    """
    if emit is None:
        raise ValueError("emit callback is required")
    try:
        check_file_size(len(data), config)
        emit(ParseProgress(0, "Reading file..."))
        text = decode_bytes(data)

        emit(ParseProgress(30, "Parsing CSV..."))
        parsed = parse_text(text, delimiter=config.delimiter)
        check_not_empty(parsed.grid)

        emit(ParseProgress(60, "Processing data..."))
        headers, rows = split_header(parsed.grid)
        check_shape(len(headers), len(rows), config)

        emit(ParseProgress(90, "Finalizing..."))
        raw = RawDataset(file_name=file_name, headers=headers, rows=rows)
    except PipelineError as e:
        emit(ParseFailure(e.message, e.kind))
        return
    except Exception as e:  # noqa: BLE001 - any crash inside the job is one error message
        emit(ParseFailure(str(e) or _UNKNOWN_ERROR_MESSAGE, ErrorKind.UNKNOWN_ERROR))
        return
    emit(ParseSuccess(raw))


def _run(data: bytes, file_name: str, config: PipelineConfig, channel: Any) -> None:
    parse_job(data, file_name, config, channel.put)


class ParseWorker:
    """Run `parse_job` in a child process.

    Usage:
        with ParseWorker(data, "sales.csv", config) as worker:
            for message in worker.messages():
                ...

    `messages()` stops after the first terminal message. If the child exits
    without sending one, a CHANNEL_FAILURE ParseFailure is yielded in its
    place. `close()` terminates a still-running child and joins it.
    """

    def __init__(
        self,
        data: bytes,
        file_name: str,
        config: PipelineConfig = DEFAULT_CONFIG,
        *,
        poll_interval: float = 0.1,
        join_timeout: float = 5.0,
        context: Any = None,
    ) -> None:
        self.file_name = file_name
        self.poll_interval = poll_interval
        self.join_timeout = join_timeout
        ctx = context or multiprocessing.get_context()
        self._queue = ctx.Queue()
        self._process = ctx.Process(
            target=_run,
            args=(data, file_name, config, self._queue),
            name=f"csvplot-parse-{file_name}",
            daemon=True,
        )
        self._started = False
        self._finished = False

    @property
    def exitcode(self) -> int | None:
        return self._process.exitcode

    def start(self) -> None:
        if not self._started:
            self._process.start()
            self._started = True

    def _channel_failure(self, detail: str) -> ParseFailure:
        self._finished = True
        return ParseFailure(f"Worker error: {detail}", ErrorKind.CHANNEL_FAILURE)

    def _receive(self) -> ParseMessage | None:
        """One message, or None when the child is gone and the queue is drained."""
        while True:
            try:
                return self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                if self._process.is_alive():
                    continue
            # child exited; a final message may still be in flight
            try:
                return self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                return None

    def messages(self) -> Iterator[ParseMessage]:
        self.start()
        while not self._finished:
            try:
                message = self._receive()
            except (EOFError, OSError, pickle.UnpicklingError) as e:
                yield self._channel_failure(str(e) or type(e).__name__)
                return
            if message is None:
                self._process.join(self.join_timeout)
                yield self._channel_failure(f"process exited with code {self._process.exitcode}")
                return
            if is_terminal(message):
                self._finished = True
            yield message

    def close(self) -> None:
        if self._started:
            if self._process.is_alive():
                self._process.terminate()
            self._process.join(self.join_timeout)
        self._queue.close()
        self._queue.join_thread()
        self._finished = True

    def __enter__(self) -> ParseWorker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class InlineParseWorker:
    """Same interface as ParseWorker, but runs the job in the calling process."""

    def __init__(self, data: bytes, file_name: str, config: PipelineConfig = DEFAULT_CONFIG) -> None:
        self.file_name = file_name
        self._data = data
        self._config = config

    def messages(self) -> Iterator[ParseMessage]:
        collected: list[ParseMessage] = []
        parse_job(self._data, self.file_name, self._config, collected.append)
        for message in collected:
            yield message
            if is_terminal(message):
                return

    def close(self) -> None:
        pass

    def __enter__(self) -> InlineParseWorker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
