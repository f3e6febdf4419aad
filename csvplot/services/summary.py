from __future__ import annotations

from ..models.dataset import ParsedCSV

"""SUMMARY line and column table rendering.

Format (see tests/contract/test_summary_output_contract.py):
SUMMARY file={name} rows={rows} columns={columns} signature={signature}
modifications={count} elapsed_sec={elapsed}
"""

__all__ = [
    "format_elapsed",
    "render_summary_line",
    "render_column_table",
]


def format_elapsed(seconds: float) -> str:
    """Render seconds without scientific notation or trailing zeros."""
    if seconds <= 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(dataset: ParsedCSV, elapsed_seconds: float) -> str:
    """Render the SUMMARY line for a loaded dataset.

    Spaces in the file name are replaced with underscores so the line stays
    a flat list of key=value tokens.

    Examples:
        >>> render_summary_line(dataset, 1.5)  # doctest: +SKIP
        'SUMMARY file=sales.csv rows=3 columns=2 signature=1x2y3z modifications=0 elapsed_sec=1.5'
    """
    name = dataset.file_name.replace(" ", "_") or "-"
    return (
        f"SUMMARY file={name} "
        f"rows={dataset.row_count} "
        f"columns={dataset.column_count} "
        f"signature={dataset.signature} "
        f"modifications={len(dataset.modifications)} "
        f"elapsed_sec={format_elapsed(elapsed_seconds)}"
    )


def _fmt_stat(value: float | int | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_column_table(dataset: ParsedCSV) -> str:
    """Plain-text table of `name kind unique min max`, one line per column."""
    header = ("name", "kind", "unique", "min", "max")
    lines = [
        (col.name, col.kind.value, _fmt_stat(col.unique_count), _fmt_stat(col.min), _fmt_stat(col.max))
        for col in dataset.columns
    ]
    widths = [max(len(row[i]) for row in [header, *lines]) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in [header, *lines]
    )
