from __future__ import annotations

import json

from csvplot.models.error_record import ErrorRecord


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="sales.csv",
        stage="parse",
        error_type="FILE_TOO_LARGE",
        message="File size exceeds maximum of 50MB",
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "sales.csv"
    assert data["stage"] == "parse"
    assert data["error_type"] == "FILE_TOO_LARGE"
    assert data["message"] == "File size exceeds maximum of 50MB"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == {"timestamp", "file", "stage", "error_type", "message"}


def test_error_record_keeps_non_ascii_text():
    rec = ErrorRecord.create("données.csv", "parse", "SYNTAX_ERROR", "CSV parsing error: ligne 3")
    line = rec.to_json_line()
    assert "données.csv" in line
    assert "\n" not in line
