from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from csvplot.config.loader import ConfigError, apply_env_overrides, load_config_or_default
from csvplot.ingest.errors import PipelineError
from csvplot.logging.error_log import ErrorLogBuffer
from csvplot.logging.init import log_summary, set_debug, setup_logging
from csvplot.models.config_models import PipelineConfig
from csvplot.models.dataset import ParsedCSV
from csvplot.services.pipeline import load_file
from csvplot.services.progress import ParseProgressBar
from csvplot.services.sampling import sample_rows
from csvplot.services.summary import render_column_table, render_summary_line
from csvplot.storage import ChartRepository, RecentsRepository, StorageError

"""CLI entrypoint.

Flow:
- load .env (overrides existing environment variables)
- load config (--config, else config/csvplot.yml when present, else defaults)
- apply CSVPLOT_* environment overrides
- parse the CSV file in a worker process with a tqdm progress bar
- log modification notes and the SUMMARY line

Exit codes: 0 success, 1 fatal (config error, missing file, parse failure).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

CHARTS_FILE = "charts.json"
RECENTS_FILE = "recents.json"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values in the file win over the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="csvplot",
        description="Parse, clean and type a CSV file for charting",
    )
    p.add_argument("file", type=Path, help="CSV file to load")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/csvplot.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print column types and preview rows")
    p.add_argument(
        "--max-points",
        type=int,
        default=None,
        help="Report how many rows a sampled chart with this point budget would render",
    )
    p.add_argument("--no-store", action="store_true", help="Do not record the file in the recents list")
    return p.parse_args(argv)


def _open_repositories(cfg: PipelineConfig) -> tuple[ChartRepository, RecentsRepository]:
    directory = Path(cfg.storage_directory)
    return (
        ChartRepository(directory / CHARTS_FILE),
        RecentsRepository(directory / RECENTS_FILE, limit=cfg.recents_limit),
    )


def _inspect_data(dataset: ParsedCSV, cfg: PipelineConfig) -> None:
    print(f"FILE: {dataset.file_name} signature={dataset.signature}")
    print(render_column_table(dataset))
    preview = dataset.preview(min(cfg.preview_rows, 5))
    print(f"PREVIEW: first {len(preview)} of {dataset.row_count} rows")
    for row in preview:
        print("  " + " | ".join(row))


def _log_failure(logger: logging.Logger, error_log: ErrorLogBuffer, path: Path, stage: str, error_type: str, message: str) -> None:
    logger.error(message)
    error_log.record(path.name, stage, error_type, message)
    written = error_log.flush()
    if written is not None:
        logger.debug(f"error log written: {written}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no explicit argv is given; [] means "no args"
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.max_points is not None and args.max_points < 1:
        logger.error(f"--max-points must be >= 1, got {args.max_points}")
        return EXIT_FATAL

    try:
        cfg = apply_env_overrides(load_config_or_default(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    path: Path = args.file
    if not path.is_file():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL

    error_log = ErrorLogBuffer()
    try:
        charts, recents = (None, None) if args.no_store else _open_repositories(cfg)
    except StorageError as e:
        _log_failure(logger, error_log, path, "storage", "STORAGE_ERROR", str(e))
        return EXIT_FATAL

    logger.info(f"Loading {path}")
    start = time.perf_counter()
    try:
        with ParseProgressBar(description=path.name) as bar:
            dataset = load_file(path, cfg, charts=charts, recents=recents, on_progress=bar)
            bar.finish()
    except PipelineError as e:
        _log_failure(logger, error_log, path, "parse", e.kind.value, e.message)
        return EXIT_FATAL
    except StorageError as e:
        _log_failure(logger, error_log, path, "storage", "STORAGE_ERROR", str(e))
        return EXIT_FATAL
    elapsed = time.perf_counter() - start

    for note in dataset.modifications:
        logger.info(f"modification: {note}")
    if charts is not None:
        logger.info(f"saved charts for this signature: {charts.count(dataset.signature)}")

    if args.inspect_data:
        _inspect_data(dataset, cfg)

    if args.max_points is not None:
        rendered = len(sample_rows(dataset.rows, args.max_points))
        logger.info(f"sampling: {rendered} of {dataset.row_count} rows with max_points={args.max_points}")

    summary_line = render_summary_line(dataset, elapsed)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
