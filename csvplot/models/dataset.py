from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Dataset domain models: column metadata and the immutable ParsedCSV.

A ParsedCSV is created exactly once by csvplot.ingest.builder and is then
shared by reference between the filter engine, the sampler and the chart
series builder. Collections are stored as tuples so that no consumer can
mutate the dataset in place.
"""

__all__ = [
    "ColumnKind",
    "DateFormat",
    "ColumnMetadata",
    "ParsedCSV",
    "DatasetMetadata",
]

Row = tuple[str, ...]


class ColumnKind(str, Enum):
    """Semantic type assigned to a column from its sampled values."""
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"
    BOOLEAN = "boolean"
    MIXED = "mixed"


class DateFormat(str, Enum):
    """Date layout captured from the first matching sample value."""
    ISO_8601 = "ISO_8601"
    US_SLASH_DATE = "US_SLASH_DATE"


@dataclass(frozen=True)
class ColumnMetadata:
    """Per-column statistics computed once at build time.

    min / max / nan_count are only set for NUMBER columns and date_format only
    for DATE columns. unique_count is None only for columns without any
    non-blank sampled value.
    """
    name: str
    kind: ColumnKind = ColumnKind.TEXT
    unique_count: int | None = None
    min: float | None = None
    max: float | None = None
    nan_count: int | None = None
    date_format: DateFormat | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name, "kind": self.kind.value}
        if self.unique_count is not None:
            data["uniqueCount"] = self.unique_count
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        if self.nan_count is not None:
            data["nanCount"] = self.nan_count
        if self.date_format is not None:
            data["dateFormat"] = self.date_format.value
        return data


@dataclass(frozen=True)
class DatasetMetadata:
    """Row-free summary of a dataset, the only part kept in the recents list."""
    id: str
    file_name: str
    signature: str
    row_count: int
    column_count: int
    uploaded_at: int  # epoch milliseconds (UTC)
    chart_count: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "signature": self.signature,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "uploadedAt": self.uploaded_at,
            "chartCount": self.chart_count,
        }

    @staticmethod
    def from_dict(data: dict[str, object]) -> DatasetMetadata:
        return DatasetMetadata(
            id=str(data["id"]),
            file_name=str(data["fileName"]),
            signature=str(data["signature"]),
            row_count=int(data["rowCount"]),  # type: ignore[arg-type]
            column_count=int(data["columnCount"]),  # type: ignore[arg-type]
            uploaded_at=int(data["uploadedAt"]),  # type: ignore[arg-type]
            chart_count=int(data.get("chartCount", 0)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ParsedCSV:
    """The typed, cleaned dataset.

    Invariants (established by build_parsed_csv):
    - row_count == len(rows)
    - column_count == len(headers) == len(columns)
    - signature depends on headers only
    - every row has at least one non-blank cell and every cell is trimmed
    """
    id: str
    file_name: str
    headers: tuple[str, ...]
    rows: tuple[Row, ...]
    columns: tuple[ColumnMetadata, ...]
    signature: str
    uploaded_at: int  # epoch milliseconds (UTC)
    modifications: tuple[str, ...] = field(default_factory=tuple)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column_index(self, name: str) -> int:
        """Return the first index of column `name`, or -1 when absent."""
        try:
            return self.headers.index(name)
        except ValueError:
            return -1

    def preview(self, limit: int) -> tuple[Row, ...]:
        return self.rows[:limit]

    def metadata(self, chart_count: int = 0) -> DatasetMetadata:
        return DatasetMetadata(
            id=self.id,
            file_name=self.file_name,
            signature=self.signature,
            row_count=self.row_count,
            column_count=self.column_count,
            uploaded_at=self.uploaded_at,
            chart_count=chart_count,
        )

    def kind_counts(self) -> dict[ColumnKind, int]:
        counts: dict[ColumnKind, int] = {}
        for col in self.columns:
            counts[col.kind] = counts.get(col.kind, 0) + 1
        return counts
