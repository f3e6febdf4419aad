from __future__ import annotations

import pytest

from csvplot.models.chart import ChartConfig, ChartType
from csvplot.services.series import OTHER_SERIES, build_series


@pytest.fixture()
def dataset(make_dataset):
    rows = [
        [str(i), str(i * 2), str(i * 3), f"g{i % 14}", str(i % 5)]
        for i in range(28)
    ]
    return make_dataset(["x", "y", "z", "group", "score"], rows)


def _chart(chart_type: ChartType, **kwargs) -> ChartConfig:
    kwargs.setdefault("x_column", "x")
    return ChartConfig(type=chart_type, title="chart", **kwargs)


def test_line_and_bar_one_series_per_y_column(dataset):
    for chart_type in (ChartType.LINE, ChartType.BAR):
        series = build_series(dataset, _chart(chart_type, y_columns=("y", "missing", "z")))
        assert [s.name for s in series] == ["y", "z"]
        assert series[0].x == tuple(str(i) for i in range(28))
        assert series[1].y[:3] == ("0", "3", "6")


def test_box_has_y_only(dataset):
    (series,) = build_series(dataset, _chart(ChartType.BOX, y_columns=("y",)))
    assert series.x == ()
    assert len(series.y) == 28


def test_histogram_over_x(dataset):
    (series,) = build_series(dataset, _chart(ChartType.HISTOGRAM))
    assert series.name == "x"
    assert len(series.x) == 28
    assert series.y == ()


def test_scatter_groups_top_twelve_categories_plus_other(dataset):
    series = build_series(dataset, _chart(ChartType.SCATTER, y_columns=("y",), color_by_column="group"))
    names = [s.name for s in series]
    assert names[:12] == [f"g{i}" for i in range(12)]
    assert names[-1] == OTHER_SERIES
    assert len(series) == 13
    assert sum(len(s.x) for s in series) == 28
    assert len(series[-1].x) == 4  # g12 and g13, two rows each


def test_scatter_numeric_color_becomes_scale(dataset):
    (series,) = build_series(dataset, _chart(ChartType.SCATTER, y_columns=("y",), color_by_column="score"))
    assert series.color[:6] == ("0", "1", "2", "3", "4", "0")


def test_scatter_without_color(dataset):
    (series,) = build_series(dataset, _chart(ChartType.SCATTER, y_columns=("y",)))
    assert series.name == "y"
    assert series.color == ()


def test_violin_groups_top_eight_without_other(dataset):
    series = build_series(dataset, _chart(ChartType.VIOLIN, y_columns=("y",), color_by_column="group"))
    assert [s.name for s in series] == [f"g{i}" for i in range(8)]


def test_scatter3d_requires_xyz(dataset):
    assert build_series(dataset, _chart(ChartType.SCATTER3D, y_columns=("y",))) == []
    (series,) = build_series(dataset, _chart(ChartType.SCATTER3D, y_columns=("y",), z_column="z"))
    assert len(series.z) == 28


def test_surface_over_z(dataset):
    (series,) = build_series(dataset, _chart(ChartType.SURFACE, z_column="z"))
    assert series.z[1] == "3"


def test_unknown_columns_yield_no_series(dataset):
    assert build_series(dataset, _chart(ChartType.SCATTER, x_column="nope", y_columns=("y",))) == []
    assert build_series(dataset, _chart(ChartType.HISTOGRAM, x_column="nope")) == []
    assert build_series(dataset, _chart(ChartType.LINE, y_columns=("nope",))) == []


def test_series_use_given_rows(dataset):
    rows = dataset.rows[:5]
    (series,) = build_series(dataset, _chart(ChartType.LINE, y_columns=("y",)), rows)
    assert series.y == ("0", "2", "4", "6", "8")
