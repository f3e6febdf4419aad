from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from ..models.chart import ChartConfig, ChartSpec
from ..models.config_models import DEFAULT_CONFIG, PipelineConfig
from ..models.dataset import ParsedCSV

"""Chart sampling: deterministic fixed-stride row reduction.

Distinct from the inference sample. The same input length and point budget
always select the same rows, so re-rendering a chart never flickers.
"""

__all__ = [
    "sample_rows",
    "should_sample",
    "chart_rows",
]

T = TypeVar("T")


def sample_rows(rows: Sequence[T], max_points: int) -> Sequence[T]:
    """Reduce `rows` to exactly `max_points` rows by fixed stride.

    Row i of the output is rows[floor(i * len(rows) / max_points)]. The first
    row is always kept and the selected indices strictly increase.

    Args:
        rows: Rows to reduce
        max_points: Output size, at least 1

    Returns:
        `rows` itself when it already fits, otherwise a new list

    Raises:
        ValueError: If max_points < 1
    """
    if max_points < 1:
        raise ValueError(f"max_points must be >= 1, got {max_points}")
    total = len(rows)
    if total <= max_points:
        return rows
    # integer arithmetic: floor(i * step) without float rounding
    return [rows[(i * total) // max_points] for i in range(max_points)]


def should_sample(
    chart: ChartConfig | ChartSpec,
    dataset: ParsedCSV,
    config: PipelineConfig = DEFAULT_CONFIG,
) -> bool:
    return chart.sampling_enabled and dataset.row_count > config.chart_sampling_threshold


def chart_rows(
    chart: ChartConfig | ChartSpec,
    dataset: ParsedCSV,
    config: PipelineConfig = DEFAULT_CONFIG,
    rows: Sequence[Sequence[str]] | None = None,
) -> Sequence[Sequence[str]]:
    """Rows a chart should render: filtered rows (or all rows), sampled when enabled."""
    source = dataset.rows if rows is None else rows
    if not should_sample(chart, dataset, config):
        return source
    return sample_rows(source, chart.max_points or config.chart_sampling_threshold)
