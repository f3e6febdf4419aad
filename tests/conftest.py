# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from csvplot.ingest.builder import build_parsed_csv
from csvplot.logging.init import reset_logging
from csvplot.models.dataset import ParsedCSV


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def clean_env(monkeypatch) -> None:
    for var in (
        "CSVPLOT_MAX_FILE_SIZE",
        "CSVPLOT_MAX_ROWS",
        "CSVPLOT_MAX_COLUMNS",
        "CSVPLOT_SAMPLE_SIZE",
        "CSVPLOT_CHART_SAMPLING_THRESHOLD",
        "CSVPLOT_PREVIEW_ROWS",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """limits:
  max_file_size: 1048576
  max_rows: 1000
  max_columns: 20
inference:
  sample_size: 100
charts:
  sampling_threshold: 50
  preview_rows: 10
storage:
  directory: ./.csvplot
  recents_limit: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "csvplot.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sales_csv_text() -> str:
    return (
        "region,  amount ,,active,day\n"
        "north,10,a,yes,2024-01-01\n"
        "south,20.5,b,no,2024-01-02\n"
        "\n"
        "north,7,c,true,2024-01-03\n"
        "east,,d,false,2024-01-04\n"
        " , , , , \n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[..., Path]:
    def _write(text: str, name: str = "sales.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture()
def make_dataset() -> Callable[..., ParsedCSV]:
    def _make(headers: list[str], rows: list[list[str]], file_name: str = "test.csv") -> ParsedCSV:
        return build_parsed_csv(file_name, headers, rows)

    return _make
