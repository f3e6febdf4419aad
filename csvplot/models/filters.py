from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

"""Filter models: a tagged union discriminated by the `kind` field.

Variants do not share a base class. The filter engine dispatches on
`filter.kind` explicitly, so adding a variant means adding a branch there.
"""

__all__ = [
    "BOOLEAN_VALUES",
    "NumberFilter",
    "DateFilter",
    "BooleanFilter",
    "CategoryFilter",
    "Filter",
    "FilterKind",
    "ActiveFilter",
]

BOOLEAN_VALUES: frozenset[str] = frozenset({"true", "false"})

FilterKind = Literal["number", "date", "boolean", "category"]


@dataclass(frozen=True)
class NumberFilter:
    """Closed numeric range; min/max is the observed range, value_* the selection."""
    column: str
    min: float
    max: float
    value_min: float
    value_max: float
    kind: Literal["number"] = field(default="number", init=False)


@dataclass(frozen=True)
class DateFilter:
    """Optional lexicographic bounds on the raw date text."""
    column: str
    start: str | None = None
    end: str | None = None
    kind: Literal["date"] = field(default="date", init=False)


@dataclass(frozen=True)
class BooleanFilter:
    column: str
    allowed: frozenset[str] = BOOLEAN_VALUES
    kind: Literal["boolean"] = field(default="boolean", init=False)


@dataclass(frozen=True)
class CategoryFilter:
    column: str
    options: tuple[str, ...]
    selected: frozenset[str]
    kind: Literal["category"] = field(default="category", init=False)


Filter = Union[NumberFilter, DateFilter, BooleanFilter, CategoryFilter]


@dataclass(frozen=True)
class ActiveFilter:
    """Chip shown for a filter whose value diverges from its default."""
    column: str
    label: str
    kind: FilterKind
