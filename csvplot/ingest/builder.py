from __future__ import annotations

import secrets
import string
from collections.abc import Sequence
from datetime import UTC, datetime

from csvplot.ingest.cleaning import clean_headers, remove_empty_rows, trim_cells
from csvplot.ingest.inference import infer_column_types
from csvplot.ingest.signature import hash_headers
from csvplot.models.config_models import DEFAULT_CONFIG
from csvplot.models.dataset import ParsedCSV

"""Dataset builder: raw parse result -> immutable ParsedCSV.

Steps, in order:
1. clean headers (notes for every auto-named header)
2. drop blank rows (one note, only when something was dropped)
3. trim remaining cells
4. infer column kinds on the cleaned rows
5. hash the cleaned headers

Feeding a built dataset's headers and rows back in produces no new notes
and the same signature.
"""

__all__ = [
    "build_parsed_csv",
    "new_dataset_id",
]

_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
_ID_LENGTH = 21


def new_dataset_id() -> str:
    """Random URL-safe 21-character id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def build_parsed_csv(
    file_name: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    sample_size: int = DEFAULT_CONFIG.sample_size,
) -> ParsedCSV:
    """Clean, type and sign a raw dataset.

    Args:
        file_name: Original upload name, kept for display
        headers: Header candidates (first parsed row)
        rows: Data rows, possibly ragged or blank
        sample_size: Rows examined by type inference

    Returns:
        A new ParsedCSV with a fresh id and the current timestamp
    """
    modifications: list[str] = []

    cleaned_headers, header_notes = clean_headers(headers)
    modifications.extend(header_notes)

    non_empty_rows, removed_count = remove_empty_rows(rows)
    if removed_count > 0:
        modifications.append(f"Removed {removed_count} empty row(s)")

    trimmed_rows = trim_cells(non_empty_rows)

    columns = infer_column_types(trimmed_rows, cleaned_headers, sample_size=sample_size)

    return ParsedCSV(
        id=new_dataset_id(),
        file_name=file_name,
        headers=tuple(cleaned_headers),
        rows=tuple(tuple(row) for row in trimmed_rows),
        columns=tuple(columns),
        signature=hash_headers(cleaned_headers),
        uploaded_at=_now_ms(),
        modifications=tuple(modifications),
    )
