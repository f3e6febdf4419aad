from __future__ import annotations

import pytest

from csvplot.ingest.cleaning import clean_headers, remove_empty_rows, trim_cells


def test_clean_headers_trims_and_names_blank_headers():
    cleaned, notes = clean_headers(["  name  ", "", "age"])
    assert cleaned == ["name", "Column_2", "age"]
    assert len(notes) == 1
    assert "position 2" in notes[0]
    assert notes[0] == 'Empty header at position 2 renamed to "Column_2"'


def test_clean_headers_positions_are_independent():
    cleaned, notes = clean_headers(["a", "", "c", "   "])
    assert cleaned == ["a", "Column_2", "c", "Column_4"]
    assert len(notes) == 2


@pytest.mark.parametrize(
    "headers",
    [
        [],
        [""],
        ["", "", ""],
        ["\t", " x ", "\n"],
        ["Name", "name "],
    ],
)
def test_clean_headers_never_returns_empty_names(headers):
    cleaned, _ = clean_headers(headers)
    assert len(cleaned) == len(headers)
    assert all(name != "" for name in cleaned)


def test_clean_headers_keeps_duplicates_after_trim():
    cleaned, notes = clean_headers(["Name", " Name "])
    assert cleaned == ["Name", "Name"]
    assert notes == []


def test_remove_empty_rows_counts_and_keeps_order():
    rows = [["a", "1"], [""], ["  ", "\t"], ["b", ""], []]
    kept, removed = remove_empty_rows(rows)
    assert kept == [["a", "1"], ["b", ""]]
    assert removed == 3


def test_remove_empty_rows_is_idempotent():
    rows = [["x"], [" "], ["", ""], ["y", "z"]]
    once, first_removed = remove_empty_rows(rows)
    twice, second_removed = remove_empty_rows(once)
    assert twice == once
    assert first_removed == 2
    assert second_removed == 0


def test_trim_cells_returns_new_rows():
    rows = [[" a ", "b\t"], ["  "]]
    trimmed = trim_cells(rows)
    assert trimmed == [["a", "b"], [""]]
    assert rows[0][0] == " a "
