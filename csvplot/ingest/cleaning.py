from __future__ import annotations

from collections.abc import Sequence

"""Header and row cleaning.

Each correction that changes what the user uploaded is recorded as a
human-readable modification note. Order used by the builder:
clean_headers -> remove_empty_rows -> trim_cells. The emptiness test trims
on its own, so a "   " cell counts as empty regardless of that order.
"""

__all__ = [
    "clean_headers",
    "remove_empty_rows",
    "trim_cells",
]


def clean_headers(headers: Sequence[str]) -> tuple[list[str], list[str]]:
    """Trim header names and auto-name blank ones after their 1-based position.

    Positions are independent: blanks at positions 2 and 4 become Column_2
    and Column_4. Non-blank headers that collide after trimming are kept
    as-is.

    Returns:
        (cleaned headers, modification notes)
    """
    modifications: list[str] = []
    cleaned: list[str] = []
    for index, header in enumerate(headers, start=1):
        name = header.strip()
        if not name:
            name = f"Column_{index}"
            modifications.append(f'Empty header at position {index} renamed to "{name}"')
        cleaned.append(name)
    return cleaned, modifications


def _is_blank_row(row: Sequence[str]) -> bool:
    return all(cell.strip() == "" for cell in row)


def remove_empty_rows(rows: Sequence[Sequence[str]]) -> tuple[list[Sequence[str]], int]:
    """Drop rows whose cells are all blank after trimming; keep order."""
    kept = [row for row in rows if not _is_blank_row(row)]
    return kept, len(rows) - len(kept)


def trim_cells(rows: Sequence[Sequence[str]]) -> list[list[str]]:
    """Return new rows with every cell whitespace-trimmed."""
    return [[cell.strip() for cell in row] for row in rows]
