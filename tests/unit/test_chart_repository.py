from __future__ import annotations

import json
from itertools import count
from pathlib import Path

import pytest

from csvplot.models.chart import ChartConfig, ChartType
from csvplot.storage import ChartRepository, StorageError


def _config(**kwargs) -> ChartConfig:
    return ChartConfig(type=ChartType.SCATTER, title="Sales", x_column="day", y_columns=("amount",), **kwargs)


def _clock():
    ticks = count(1000)
    return lambda: next(ticks)


def test_add_generates_id_and_timestamps():
    repo = ChartRepository(clock=_clock())
    spec = repo.add("sig1", _config())
    assert spec.id
    assert spec.created_at == spec.updated_at == 1000
    assert spec.dataset_signature == "sig1"
    assert repo.get("sig1") == [spec]
    assert repo.count("sig1") == 1


def test_add_keeps_given_id():
    repo = ChartRepository()
    spec = repo.add("sig1", _config(id="chart-1"))
    assert spec.id == "chart-1"


def test_get_unknown_signature_returns_empty_list():
    assert ChartRepository().get("nope") == []
    assert ChartRepository().count("nope") == 0


def test_update_bumps_updated_at_only():
    repo = ChartRepository(clock=_clock())
    spec = repo.add("sig1", _config())
    updated = repo.update("sig1", spec.id, title="Renamed", y_columns=["amount", "tax"])
    assert updated is not None
    assert updated.title == "Renamed"
    assert updated.y_columns == ("amount", "tax")
    assert updated.created_at == spec.created_at
    assert updated.updated_at > spec.updated_at
    assert repo.get("sig1") == [updated]


def test_update_unknown_chart_returns_none():
    repo = ChartRepository()
    assert repo.update("sig1", "missing", title="x") is None


def test_update_rejects_identity_fields():
    repo = ChartRepository()
    spec = repo.add("sig1", _config())
    with pytest.raises(ValueError):
        repo.update("sig1", spec.id, created_at=1)


def test_delete_and_clear():
    repo = ChartRepository()
    a = repo.add("sig1", _config())
    b = repo.add("sig1", _config())
    repo.add("sig2", _config())
    assert repo.delete("sig1", a.id) is True
    assert repo.delete("sig1", a.id) is False
    assert [c.id for c in repo.get("sig1")] == [b.id]
    repo.clear("sig1")
    assert repo.get("sig1") == []
    assert repo.count("sig2") == 1


def test_charts_persist_to_json(tmp_path: Path):
    path = tmp_path / "store" / "charts.json"
    repo = ChartRepository(path)
    spec = repo.add("sig1", _config(color_by_column="region"))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data) == ["sig1"]
    assert data["sig1"][0]["type"] == "scatter"
    assert data["sig1"][0]["y_columns"] == ["amount"]

    reloaded = ChartRepository(path)
    assert reloaded.get("sig1") == [spec]


def test_corrupt_file_raises_storage_error(tmp_path: Path):
    path = tmp_path / "charts.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        ChartRepository(path)
