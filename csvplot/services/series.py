from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models.chart import ChartConfig, ChartSpec, ChartType
from ..models.dataset import ColumnKind, ParsedCSV
from .filters import top_categories

"""Chart-ready series extraction.

Turns (dataset, chart, rows) into plain column vectors that any plotting
front end can consume. Cells stay raw strings; parsing and styling belong
to the renderer. Charts naming columns the dataset does not have produce
no series rather than an error, since a chart re-attached by signature may
predate a column rename.
"""

__all__ = [
    "SCATTER_CATEGORY_LIMIT",
    "VIOLIN_CATEGORY_LIMIT",
    "OTHER_SERIES",
    "Series",
    "build_series",
]

SCATTER_CATEGORY_LIMIT = 12
VIOLIN_CATEGORY_LIMIT = 8
OTHER_SERIES = "Other"


@dataclass(frozen=True)
class Series:
    name: str
    x: tuple[str, ...] = field(default_factory=tuple)
    y: tuple[str, ...] = field(default_factory=tuple)
    z: tuple[str, ...] = field(default_factory=tuple)
    color: tuple[str, ...] = field(default_factory=tuple)  # numeric colour scale values


def _column(rows: Sequence[Sequence[str]], index: int) -> tuple[str, ...]:
    if index < 0:
        return ()
    return tuple(row[index] if index < len(row) else "" for row in rows)


def _grouped(
    rows: Sequence[Sequence[str]],
    group_index: int,
    limit: int,
    *,
    with_other: bool,
) -> list[tuple[str, list[Sequence[str]]]]:
    categories = top_categories(rows, group_index, limit)
    groups: dict[str, list[Sequence[str]]] = {name: [] for name in categories}
    other: list[Sequence[str]] = []
    for row in rows:
        value = row[group_index] if group_index < len(row) else ""
        bucket = groups.get(value)
        if bucket is not None:
            bucket.append(row)
        else:
            other.append(row)
    out = list(groups.items())
    if with_other and other:
        out.append((OTHER_SERIES, other))
    return out


def _scatter(dataset: ParsedCSV, chart: ChartConfig | ChartSpec, rows: Sequence[Sequence[str]]) -> list[Series]:
    if not chart.y_columns:
        return []
    x_index = dataset.column_index(chart.x_column)
    y_name = chart.y_columns[0]
    y_index = dataset.column_index(y_name)
    if x_index < 0 or y_index < 0:
        return []

    color_index = dataset.column_index(chart.color_by_column) if chart.color_by_column else -1
    if color_index < 0:
        return [Series(name=y_name, x=_column(rows, x_index), y=_column(rows, y_index))]

    if dataset.columns[color_index].kind is ColumnKind.NUMBER:
        return [
            Series(
                name=y_name,
                x=_column(rows, x_index),
                y=_column(rows, y_index),
                color=_column(rows, color_index),
            )
        ]

    return [
        Series(name=name, x=_column(group, x_index), y=_column(group, y_index))
        for name, group in _grouped(rows, color_index, SCATTER_CATEGORY_LIMIT, with_other=True)
    ]


def _violin(dataset: ParsedCSV, chart: ChartConfig | ChartSpec, rows: Sequence[Sequence[str]]) -> list[Series]:
    if not chart.y_columns:
        return []
    y_name = chart.y_columns[0]
    y_index = dataset.column_index(y_name)
    if y_index < 0:
        return []
    x_index = dataset.column_index(chart.x_column) if chart.x_column else -1

    color_index = dataset.column_index(chart.color_by_column) if chart.color_by_column else -1
    if color_index < 0:
        return [Series(name=y_name, x=_column(rows, x_index), y=_column(rows, y_index))]

    return [
        Series(name=name, x=_column(group, x_index), y=_column(group, y_index))
        for name, group in _grouped(rows, color_index, VIOLIN_CATEGORY_LIMIT, with_other=False)
    ]


def _per_y_column(
    dataset: ParsedCSV,
    chart: ChartConfig | ChartSpec,
    rows: Sequence[Sequence[str]],
    *,
    with_x: bool,
) -> list[Series]:
    x_values = _column(rows, dataset.column_index(chart.x_column)) if with_x else ()
    out: list[Series] = []
    for name in chart.y_columns:
        index = dataset.column_index(name)
        if index < 0:
            continue
        out.append(Series(name=name, x=x_values, y=_column(rows, index)))
    return out


def build_series(
    dataset: ParsedCSV,
    chart: ChartConfig | ChartSpec,
    rows: Sequence[Sequence[str]] | None = None,
) -> list[Series]:
    """Extract the series a chart draws from `rows` (defaults to all dataset rows).

    - scatter: one series, or one per top-12 category of color_by plus "Other";
      a numeric color_by column becomes a colour scale instead
    - line / bar: one series per resolvable y column, sharing x
    - box: one series per resolvable y column, y only
    - violin: one series, or one per top-8 category of color_by
    - histogram: one series over x
    - scatter3d: one series, requires x, y and z
    - surface: one series over z
    """
    if rows is None:
        rows = dataset.rows

    chart_type = chart.type
    if chart_type is ChartType.SCATTER:
        return _scatter(dataset, chart, rows)
    if chart_type in (ChartType.LINE, ChartType.BAR):
        return _per_y_column(dataset, chart, rows, with_x=True)
    if chart_type is ChartType.BOX:
        return _per_y_column(dataset, chart, rows, with_x=False)
    if chart_type is ChartType.VIOLIN:
        return _violin(dataset, chart, rows)
    if chart_type is ChartType.HISTOGRAM:
        x_index = dataset.column_index(chart.x_column)
        if x_index < 0:
            return []
        return [Series(name=chart.x_column, x=_column(rows, x_index))]
    if chart_type is ChartType.SCATTER3D:
        if not chart.y_columns or not chart.z_column:
            return []
        indexes = [
            dataset.column_index(chart.x_column),
            dataset.column_index(chart.y_columns[0]),
            dataset.column_index(chart.z_column),
        ]
        if min(indexes) < 0:
            return []
        x_index, y_index, z_index = indexes
        return [
            Series(
                name=chart.title or chart.z_column,
                x=_column(rows, x_index),
                y=_column(rows, y_index),
                z=_column(rows, z_index),
            )
        ]
    if chart_type is ChartType.SURFACE:
        z_index = dataset.column_index(chart.z_column) if chart.z_column else -1
        if z_index < 0:
            return []
        return [Series(name=chart.z_column, z=_column(rows, z_index))]
    raise ValueError(f"unsupported chart type: {chart_type!r}")
