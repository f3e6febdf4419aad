from __future__ import annotations

import math
import re
from collections.abc import Sequence

import pandas as pd

from csvplot.models.config_models import DEFAULT_CONFIG
from csvplot.models.dataset import ColumnKind, ColumnMetadata, DateFormat

"""Column type inference from a bounded sample.

Only the first `sample_size` rows are examined, whatever the file size.
Columns whose distinguishing values appear only after the sample window can
be misclassified; that is accepted in exchange for constant-time inference
on large files.

Classification, first match wins, over the non-blank sampled values:
    numeric ratio > 0.8  -> number  (min, max, nan_count)
    date ratio    > 0.8  -> date    (format of first matching value)
    boolean ratio > 0.8  -> boolean
    any ratio     > 0.2  -> mixed
    otherwise            -> text
"""

__all__ = [
    "DOMINANT_RATIO",
    "MIXED_RATIO",
    "parse_number",
    "detect_date",
    "normalize_boolean",
    "is_boolean",
    "infer_column_types",
]

DOMINANT_RATIO = 0.8
MIXED_RATIO = 0.2

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_ISO_8601_RE = re.compile(r"\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:\.\d{3})?Z?)?", re.ASCII)
_US_SLASH_DATE_RE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}", re.ASCII)

_TRUE_TOKENS = frozenset({"true", "yes", "1"})
_FALSE_TOKENS = frozenset({"false", "no", "0"})


def parse_number(value: str) -> float | None:
    """Parse a plain decimal literal; None for anything else or non-finite.

    Surrounding whitespace is ignored. Thousands separators, currency signs,
    underscores and hex literals are rejected.
    """
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):  # e.g. 1e999
        return None
    return number


def detect_date(value: str) -> DateFormat | None:
    if _ISO_8601_RE.fullmatch(value):
        return DateFormat.ISO_8601
    if _US_SLASH_DATE_RE.fullmatch(value):
        return DateFormat.US_SLASH_DATE
    return None


def normalize_boolean(value: str) -> str | None:
    """Map true/yes/1 to "true" and false/no/0 to "false" (case-insensitive)."""
    lower = value.lower()
    if lower in _TRUE_TOKENS:
        return "true"
    if lower in _FALSE_TOKENS:
        return "false"
    return None


def is_boolean(value: str) -> bool:
    return normalize_boolean(value) is not None


def _sampled_values(sample: Sequence[Sequence[str]], index: int) -> pd.Series:
    # short rows count as blank in the missing positions
    cells = [row[index] if index < len(row) else "" for row in sample]
    return pd.Series([c for c in cells if c.strip() != ""], dtype="object")


def _infer_column(name: str, values: pd.Series) -> ColumnMetadata:
    total = len(values)
    if total == 0:
        return ColumnMetadata(name=name, kind=ColumnKind.TEXT)

    numbers = values.map(parse_number)
    numeric_mask = numbers.notna()
    formats = values.map(detect_date)
    date_mask = formats.notna()
    boolean_mask = values.map(is_boolean)

    numeric_ratio = numeric_mask.sum() / total
    date_ratio = date_mask.sum() / total
    boolean_ratio = boolean_mask.sum() / total
    unique_count = int(values.nunique())

    if numeric_ratio > DOMINANT_RATIO:
        numeric_values = numbers[numeric_mask].astype(float)
        return ColumnMetadata(
            name=name,
            kind=ColumnKind.NUMBER,
            unique_count=unique_count,
            min=float(numeric_values.min()),
            max=float(numeric_values.max()),
            nan_count=int(total - numeric_mask.sum()),
        )
    if date_ratio > DOMINANT_RATIO:
        return ColumnMetadata(
            name=name,
            kind=ColumnKind.DATE,
            unique_count=unique_count,
            date_format=formats[date_mask].iloc[0],
        )
    if boolean_ratio > DOMINANT_RATIO:
        kind = ColumnKind.BOOLEAN
    elif max(numeric_ratio, date_ratio, boolean_ratio) > MIXED_RATIO:
        kind = ColumnKind.MIXED
    else:
        kind = ColumnKind.TEXT
    return ColumnMetadata(name=name, kind=kind, unique_count=unique_count)


def infer_column_types(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    sample_size: int = DEFAULT_CONFIG.sample_size,
) -> list[ColumnMetadata]:
    """Classify every column from the first `sample_size` rows.

    Args:
        rows: Cleaned, trimmed data rows (may be ragged)
        headers: Cleaned header names, one per column
        sample_size: Number of leading rows to examine

    Returns:
        One ColumnMetadata per header, in header order
    """
    sample = rows[:sample_size]
    return [_infer_column(name, _sampled_values(sample, i)) for i, name in enumerate(headers)]
