from __future__ import annotations

from csvplot.ingest.builder import build_parsed_csv, new_dataset_id
from csvplot.ingest.signature import hash_headers
from csvplot.models.dataset import ColumnKind


def test_build_cleans_and_records_modifications():
    ds = build_parsed_csv(
        "people.csv",
        ["  name  ", "", "age"],
        [["alice", "x", "30"], [""], ["  ", "", " "], [" bob ", "y", "41"]],
    )
    assert ds.headers == ("name", "Column_2", "age")
    assert ds.rows == (("alice", "x", "30"), ("bob", "y", "41"))
    assert ds.row_count == 2
    assert ds.column_count == 3
    assert ds.modifications == (
        'Empty header at position 2 renamed to "Column_2"',
        "Removed 2 empty row(s)",
    )
    assert ds.signature == hash_headers(["name", "Column_2", "age"])
    assert ds.columns[2].kind is ColumnKind.NUMBER
    assert ds.file_name == "people.csv"


def test_build_without_corrections_has_no_modifications():
    ds = build_parsed_csv("ok.csv", ["a", "b"], [["1", "2"]])
    assert ds.modifications == ()


def test_build_is_idempotent_on_its_output():
    first = build_parsed_csv(
        "data.csv",
        [" a", "", "c "],
        [[" 1 ", "x", ""], ["", "", ""], ["2", " y", "z"]],
    )
    second = build_parsed_csv(first.file_name, list(first.headers), [list(r) for r in first.rows])
    assert second.modifications == ()
    assert second.signature == first.signature
    assert second.rows == first.rows
    assert second.columns == first.columns


def test_build_keeps_ragged_rows():
    ds = build_parsed_csv("r.csv", ["a", "b", "c"], [["1"], ["2", "3", "4", "5"]])
    assert ds.rows == (("1",), ("2", "3", "4", "5"))


def test_build_assigns_fresh_ids_and_timestamp():
    a = build_parsed_csv("f.csv", ["a"], [["1"]])
    b = build_parsed_csv("f.csv", ["a"], [["1"]])
    assert a.id != b.id
    assert a.signature == b.signature
    assert a.uploaded_at > 0


def test_new_dataset_id_shape():
    value = new_dataset_id()
    assert len(value) == 21
    assert all(ch.isalnum() or ch in "_-" for ch in value)


def test_metadata_and_preview():
    ds = build_parsed_csv("m.csv", ["a"], [[str(i)] for i in range(10)])
    meta = ds.metadata(chart_count=3)
    assert meta.row_count == 10
    assert meta.column_count == 1
    assert meta.chart_count == 3
    assert meta.signature == ds.signature
    assert len(ds.preview(4)) == 4
    assert ds.column_index("a") == 0
    assert ds.column_index("missing") == -1
