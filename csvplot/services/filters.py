from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from ..ingest.inference import normalize_boolean, parse_number
from ..models.dataset import ColumnKind, ParsedCSV
from ..models.filters import (
    BOOLEAN_VALUES,
    ActiveFilter,
    BooleanFilter,
    CategoryFilter,
    DateFilter,
    Filter,
    NumberFilter,
)

"""Filter engine: default filters, row evaluation and active-filter chips.

Filters are values; every operation here returns new filter objects and
new row lists. Dispatch is on `filter.kind`.

Only active filters (value differs from the default) are evaluated, so a
filter set at its defaults never hides a row, including rows with blank or
unparsable cells and rows beyond the inference sample.
"""

__all__ = [
    "CATEGORY_MIN_UNIQUE",
    "CATEGORY_MAX_UNIQUE",
    "CATEGORY_OPTION_LIMIT",
    "top_categories",
    "build_initial_filters",
    "apply_filters",
    "row_passes",
    "is_filter_active",
    "compute_active_filters",
    "reset_filter",
    "reset_filters",
    "clear_filter",
    "update_filter",
]

CATEGORY_MIN_UNIQUE = 2
CATEGORY_MAX_UNIQUE = 100
CATEGORY_OPTION_LIMIT = 20
_LABEL_MAX_ITEMS = 3


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def top_categories(rows: Iterable[Sequence[str]], column_index: int, limit: int = 12) -> list[str]:
    """Most frequent non-blank values of a column, ties in first-seen order."""
    counts: Counter[str] = Counter()
    for row in rows:
        value = _cell(row, column_index)
        if value == "":
            continue
        counts[value] += 1
    # most_common keeps insertion order for equal counts
    return [value for value, _ in counts.most_common(limit)]


def build_initial_filters(dataset: ParsedCSV) -> list[Filter]:
    """Derive one default filter per filterable column.

    - number with known min/max -> full-range NumberFilter
    - boolean -> both values allowed
    - date -> unbounded
    - text/mixed with 2..100 distinct sampled values -> CategoryFilter over
      the 20 most frequent values, all selected
    Other columns are not filterable.
    """
    filters: list[Filter] = []
    for index, (header, meta) in enumerate(zip(dataset.headers, dataset.columns)):
        if meta.kind is ColumnKind.NUMBER and meta.min is not None and meta.max is not None:
            filters.append(
                NumberFilter(
                    column=header,
                    min=meta.min,
                    max=meta.max,
                    value_min=meta.min,
                    value_max=meta.max,
                )
            )
            continue
        if meta.kind is ColumnKind.BOOLEAN:
            filters.append(BooleanFilter(column=header))
            continue
        if meta.kind is ColumnKind.DATE:
            filters.append(DateFilter(column=header))
            continue
        if meta.kind not in (ColumnKind.TEXT, ColumnKind.MIXED):
            continue
        unique = meta.unique_count or 0
        if CATEGORY_MIN_UNIQUE <= unique <= CATEGORY_MAX_UNIQUE:
            options = top_categories(dataset.rows, index, CATEGORY_OPTION_LIMIT)
            if len(options) >= CATEGORY_MIN_UNIQUE:
                filters.append(
                    CategoryFilter(column=header, options=tuple(options), selected=frozenset(options))
                )
    return filters


def _passes(flt: Filter, value: str) -> bool:
    if flt.kind == "number":
        number = parse_number(value)
        if number is None:
            return False
        return flt.value_min <= number <= flt.value_max
    if flt.kind == "boolean":
        normalized = normalize_boolean(value)
        return normalized is not None and normalized in flt.allowed
    if flt.kind == "category":
        return value in flt.selected
    if flt.kind == "date":
        if value == "":
            return False
        # lexicographic; only meaningful for zero-padded ISO dates
        if flt.start and value < flt.start:
            return False
        if flt.end and value > flt.end:
            return False
        return True
    raise ValueError(f"unknown filter kind: {flt.kind!r}")


def row_passes(row: Sequence[str], resolved: Sequence[tuple[Filter, int]]) -> bool:
    return all(_passes(flt, _cell(row, index)) for flt, index in resolved)


def apply_filters(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    filters: Sequence[Filter],
) -> Sequence[Sequence[str]]:
    """Return the rows that pass every active filter, in input order.

    Filters naming a column absent from `headers` are skipped. When no filter
    is active the input sequence itself is returned.
    """
    header_list = list(headers)
    resolved: list[tuple[Filter, int]] = []
    for flt in filters:
        if not is_filter_active(flt) or flt.column not in header_list:
            continue
        resolved.append((flt, header_list.index(flt.column)))
    if not resolved:
        return rows
    return [row for row in rows if row_passes(row, resolved)]


def is_filter_active(flt: Filter) -> bool:
    if flt.kind == "number":
        return flt.value_min != flt.min or flt.value_max != flt.max
    if flt.kind == "category":
        return len(flt.selected) != len(flt.options)
    if flt.kind == "boolean":
        return len(flt.allowed) != len(BOOLEAN_VALUES)
    if flt.kind == "date":
        return bool(flt.start) or bool(flt.end)
    raise ValueError(f"unknown filter kind: {flt.kind!r}")


def _format_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _label(flt: Filter) -> str:
    if flt.kind == "number":
        return f"{flt.column}: {_format_number(flt.value_min)}–{_format_number(flt.value_max)}"
    if flt.kind == "category":
        ordered = [o for o in flt.options if o in flt.selected]
        ordered += sorted(flt.selected.difference(flt.options))
        if len(ordered) <= _LABEL_MAX_ITEMS:
            return f"{flt.column}: {', '.join(ordered)}"
        return f"{flt.column}: {len(ordered)} selected"
    if flt.kind == "boolean":
        allowed = [v for v in ("true", "false") if v in flt.allowed]
        return f"{flt.column}: {', '.join(allowed)}"
    parts: list[str] = []
    if flt.start:
        parts.append(f"from {flt.start}")
    if flt.end:
        parts.append(f"to {flt.end}")
    return f"{flt.column}: {' '.join(parts)}"


def compute_active_filters(filters: Iterable[Filter]) -> list[ActiveFilter]:
    """Chips for the filters that currently have an effect. Derived, never stored."""
    return [
        ActiveFilter(column=flt.column, label=_label(flt), kind=flt.kind)
        for flt in filters
        if is_filter_active(flt)
    ]


def reset_filter(flt: Filter) -> Filter:
    """Return `flt` at its default: full range, all selected, both allowed, unbounded."""
    if flt.kind == "number":
        return replace(flt, value_min=flt.min, value_max=flt.max)
    if flt.kind == "category":
        return replace(flt, selected=frozenset(flt.options))
    if flt.kind == "boolean":
        return replace(flt, allowed=BOOLEAN_VALUES)
    if flt.kind == "date":
        return replace(flt, start=None, end=None)
    raise ValueError(f"unknown filter kind: {flt.kind!r}")


def reset_filters(filters: Iterable[Filter]) -> list[Filter]:
    return [reset_filter(flt) for flt in filters]


def clear_filter(filters: Iterable[Filter], column: str) -> list[Filter]:
    """Reset the filter on `column` to its default; the filter stays in the list."""
    return [reset_filter(flt) if flt.column == column else flt for flt in filters]


def _normalize_changes(flt: Filter, changes: dict[str, Any]) -> dict[str, Any]:
    if "column" in changes or "kind" in changes:
        raise ValueError("a filter's column and kind cannot be changed")
    if flt.kind == "number":
        unknown = set(changes) - {"value_min", "value_max"}
        if unknown:
            raise ValueError(f"unsupported number filter fields: {sorted(unknown)}")
        lo = float(changes.get("value_min", flt.value_min))
        hi = float(changes.get("value_max", flt.value_max))
        lo = min(max(lo, flt.min), flt.max)
        hi = min(max(hi, flt.min), flt.max)
        if lo > hi:
            raise ValueError(f"value_min {lo} exceeds value_max {hi} for column {flt.column!r}")
        return {"value_min": lo, "value_max": hi}
    if flt.kind == "category":
        unknown = set(changes) - {"selected"}
        if unknown:
            raise ValueError(f"unsupported category filter fields: {sorted(unknown)}")
        return {"selected": frozenset(changes.get("selected", flt.selected))}
    if flt.kind == "boolean":
        unknown = set(changes) - {"allowed"}
        if unknown:
            raise ValueError(f"unsupported boolean filter fields: {sorted(unknown)}")
        allowed = frozenset(changes.get("allowed", flt.allowed))
        if not allowed <= BOOLEAN_VALUES:
            raise ValueError(f"boolean filter values must be 'true'/'false', got {sorted(allowed)}")
        return {"allowed": allowed}
    unknown = set(changes) - {"start", "end"}
    if unknown:
        raise ValueError(f"unsupported date filter fields: {sorted(unknown)}")
    return {key: (value or None) for key, value in changes.items()}


def update_filter(filters: Iterable[Filter], column: str, /, **changes: Any) -> list[Filter]:
    """Return a new filter list with the filter on `column` updated.

    Number bounds are clamped into [min, max]; an inverted range raises
    ValueError. Unknown columns leave the list unchanged.
    """
    out: list[Filter] = []
    for flt in filters:
        if flt.column == column:
            flt = replace(flt, **_normalize_changes(flt, changes))
        out.append(flt)
    return out
