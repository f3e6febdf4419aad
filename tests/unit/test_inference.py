from __future__ import annotations

import pytest

from csvplot.ingest.inference import (
    detect_date,
    infer_column_types,
    normalize_boolean,
    parse_number,
)
from csvplot.models.dataset import ColumnKind, DateFormat


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", 1.0),
        ("-2.5", -2.5),
        ("+3", 3.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        (" 42 ", 42.0),
    ],
)
def test_parse_number_accepts_plain_literals(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "1,000", "$5", "0x1F", "1_000", "nan", "inf", "1e999"])
def test_parse_number_rejects_other_text(value):
    assert parse_number(value) is None


def test_detect_date_formats():
    assert detect_date("2024-01-01") is DateFormat.ISO_8601
    assert detect_date("2024-01-01T10:20:30.123Z") is DateFormat.ISO_8601
    assert detect_date("1/2/2024") is DateFormat.US_SLASH_DATE
    assert detect_date("2024/01/01") is None
    assert detect_date("yesterday") is None


def test_normalize_boolean_tokens():
    assert normalize_boolean("YES") == "true"
    assert normalize_boolean("1") == "true"
    assert normalize_boolean("False") == "false"
    assert normalize_boolean("0") == "false"
    assert normalize_boolean("maybe") is None


def test_numeric_column_min_max():
    rows = [["1", "2", "3"], ["4", "5", "6"], ["7", "8", "9"]]
    columns = infer_column_types(rows, ["a", "b", "c"])
    first = columns[0]
    assert first.kind is ColumnKind.NUMBER
    assert first.min == 1
    assert first.max == 7
    assert first.nan_count == 0
    assert first.unique_count == 3


def test_iso_date_column():
    rows = [["2024-01-01", "x"], ["2024-01-02", "y"]]
    columns = infer_column_types(rows, ["day", "label"])
    assert columns[0].kind is ColumnKind.DATE
    assert columns[0].date_format is DateFormat.ISO_8601
    assert columns[1].kind is ColumnKind.TEXT


def test_boolean_columns():
    rows = [["true", "false"], ["yes", "no"], ["1", "0"]]
    columns = infer_column_types(rows, ["a", "b"])
    assert [c.kind for c in columns] == [ColumnKind.BOOLEAN, ColumnKind.BOOLEAN]


def test_mixed_column_when_minority_matches():
    values = ["1", "2", "x", "y", "z"]
    rows = [[v] for v in values]
    columns = infer_column_types(rows, ["col"])
    assert columns[0].kind is ColumnKind.MIXED


def test_blank_cells_and_short_rows_are_ignored():
    rows = [["1", ""], ["2"], ["3", "  "]]
    columns = infer_column_types(rows, ["n", "empty"])
    assert columns[0].kind is ColumnKind.NUMBER
    assert columns[1].kind is ColumnKind.TEXT
    assert columns[1].unique_count is None


def test_number_with_some_invalid_values_counts_nan():
    rows = [[str(i)] for i in range(9)] + [["n/a"]]
    columns = infer_column_types(rows, ["n"])
    assert columns[0].kind is ColumnKind.NUMBER
    assert columns[0].nan_count == 1
    assert columns[0].max == 8


def test_only_sample_rows_are_examined():
    rows = [["a"]] * 10 + [["1"]] * 100
    columns = infer_column_types(rows, ["col"], sample_size=10)
    assert columns[0].kind is ColumnKind.TEXT
    assert columns[0].unique_count == 1


@pytest.mark.parametrize(
    "values,expected",
    [
        (["10", "20", "30", "40", "x"], ColumnKind.MIXED),
        (["10", "20", "30", "40", "50", "x"], ColumnKind.NUMBER),
        (["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "x"], ColumnKind.MIXED),
        (["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05", "x"], ColumnKind.DATE),
        (["yes", "no", "yes", "no", "maybe"], ColumnKind.MIXED),
        (["yes", "no", "yes", "no", "yes", "maybe"], ColumnKind.BOOLEAN),
        (["10", "a", "b", "c", "d"], ColumnKind.TEXT),
        (["10", "20", "a", "b", "c", "d", "e", "f", "g"], ColumnKind.MIXED),
    ],
)
def test_ratio_thresholds_are_strict(values, expected):
    columns = infer_column_types([[v] for v in values], ["col"])
    assert columns[0].kind is expected


@pytest.mark.parametrize(
    "value",
    [
        "\u0663",
        "\u0661\u0662.\u0665",
        "\uff11\uff12",
    ],
)
def test_parse_number_rejects_non_ascii_digits(value):
    assert parse_number(value) is None


def test_detect_date_rejects_non_ascii_digits():
    assert detect_date("\u0662\u0660\u0662\u0664-\u0660\u0661-\u0660\u0661") is None
    assert detect_date("\u0661/\u0662/\u0662\u0660\u0662\u0664") is None
