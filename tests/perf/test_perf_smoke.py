from __future__ import annotations

import time

import numpy as np
import pytest

from csvplot.ingest.builder import build_parsed_csv
from csvplot.ingest.reader import parse_text, split_header
from csvplot.models.dataset import ColumnKind
from csvplot.services.sampling import sample_rows

"""Lenient throughput smoke tests; they catch order-of-magnitude regressions only."""

ROWS = 50_000


def _synthetic_csv(rows: int) -> str:
    rng = np.random.default_rng(7)
    amounts = np.round(rng.uniform(0, 1000, rows), 2)
    regions = rng.choice(np.array(["north", "south", "east", "west"]), rows)
    flags = rng.choice(np.array(["yes", "no"]), rows)
    lines = ["id,amount,region,active"]
    lines.extend(f"{i},{a},{r},{f}" for i, (a, r, f) in enumerate(zip(amounts, regions, flags)))
    return "\n".join(lines) + "\n"


@pytest.mark.perf
def test_parse_and_build_throughput():
    text = _synthetic_csv(ROWS)

    start = time.perf_counter()
    headers, rows = split_header(parse_text(text).grid)
    ds = build_parsed_csv("perf.csv", headers, rows)
    elapsed = time.perf_counter() - start

    assert ds.row_count == ROWS
    assert [c.kind for c in ds.columns] == [
        ColumnKind.NUMBER,
        ColumnKind.NUMBER,
        ColumnKind.TEXT,
        ColumnKind.BOOLEAN,
    ]
    assert elapsed < 30.0


@pytest.mark.perf
def test_sampling_throughput():
    rows = list(range(1_000_000))
    start = time.perf_counter()
    sampled = sample_rows(rows, 5_000)
    elapsed = time.perf_counter() - start

    assert len(sampled) == 5_000
    assert sampled[0] == 0
    assert elapsed < 2.0
