from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field

from csvplot.ingest.errors import ErrorKind, PipelineError

"""Delimited-text reader.

Turns decoded text into a RawGrid: a list of rows of raw string cells, first
row = header candidates. Deliberately dumb:

- no type coercion ("007" stays "007", "$1,200" stays "$1,200")
- blank lines are kept as [""] rows; removing them is the cleaner's job
- rows are neither padded nor truncated, so the grid may be ragged

Quote errors are fatal. Field-count differences against the header are
recorded as diagnostics and otherwise ignored.
"""

__all__ = [
    "ParseDiagnostic",
    "RawParse",
    "decode_bytes",
    "parse_text",
    "split_header",
]

QUOTES = "Quotes"
FIELD_MISMATCH = "FieldMismatch"


@dataclass(frozen=True)
class ParseDiagnostic:
    type: str  # Quotes | FieldMismatch
    code: str  # e.g. TooFewFields
    message: str
    row: int  # 0-based grid row index

    @property
    def fatal(self) -> bool:
        return self.type == QUOTES


@dataclass
class RawParse:
    grid: list[list[str]]
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)


def decode_bytes(data: bytes) -> str:
    """Decode file bytes as UTF-8, dropping a BOM and replacing bad bytes."""
    return data.decode("utf-8-sig", errors="replace")


def parse_text(text: str, delimiter: str = ",") -> RawParse:
    """Parse CSV text into a ragged grid of strings.

    Raises:
        PipelineError(SYNTAX_ERROR): on an unbalanced quote, a character
            after a closing quote, or end of input inside a quoted field.
    """
    # one field may span the whole input; the csv module caps fields at 128 KiB
    csv.field_size_limit(max(csv.field_size_limit(), len(text) + 1))
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=delimiter,
        quotechar='"',
        doublequote=True,
        strict=True,
    )
    grid: list[list[str]] = []
    diagnostics: list[ParseDiagnostic] = []
    expected: int | None = None
    try:
        for record in reader:
            if not record:
                # blank line; keep it so the cleaner can count it
                record = [""]
            row_index = len(grid)
            if expected is None:
                expected = len(record)
            elif len(record) != expected and record != [""]:
                code = "TooFewFields" if len(record) < expected else "TooManyFields"
                diagnostics.append(
                    ParseDiagnostic(
                        type=FIELD_MISMATCH,
                        code=code,
                        message=f"Expected {expected} fields but parsed {len(record)}",
                        row=row_index,
                    )
                )
            grid.append(record)
    except csv.Error as e:
        diag = ParseDiagnostic(
            type=QUOTES,
            code="InvalidQuotes",
            message=f"{e} (line {reader.line_num})",
            row=len(grid),
        )
        raise PipelineError(ErrorKind.SYNTAX_ERROR, f"CSV parsing error: {diag.message}") from e
    return RawParse(grid=grid, diagnostics=diagnostics)


def split_header(grid: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Split a non-empty grid into (header candidates, data rows)."""
    return grid[0], grid[1:]
