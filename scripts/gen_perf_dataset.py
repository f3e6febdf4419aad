#!/usr/bin/env python3
"""Synthetic CSV generator for performance testing.

Writes a CSV file with a header row followed by data rows whose columns cover
every column kind the type inferrer distinguishes: number, date, boolean,
text (low-cardinality categories and free text) and mixed.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def generate_synthetic_data(rows: int, cols: int, seed: int = 42) -> pd.DataFrame:
    """Generate a DataFrame of string-typed synthetic CSV data.

    Column mix: ~50% numeric, ~20% categories, ~10% boolean, ~10% dates, the
    remainder free text. Every numeric column gets a sprinkle of blank cells.

    Args:
        rows: Number of data rows to generate
        cols: Number of columns to generate
        seed: Random seed for reproducible data

    Returns:
        DataFrame with `cols` columns and `rows` rows
    """
    rng = np.random.default_rng(seed)
    data: dict[str, Any] = {}

    numeric_cols = max(1, int(cols * 0.5))
    category_cols = max(1, int(cols * 0.2))
    bool_cols = max(1, int(cols * 0.1))
    date_cols = max(1, int(cols * 0.1))
    text_cols = max(0, cols - numeric_cols - category_cols - bool_cols - date_cols)

    for i in range(numeric_cols):
        if i == 0:
            data["id"] = np.arange(1, rows + 1).astype(str)
            continue
        values = np.round(rng.uniform(0, 10_000, rows), 2).astype(str)
        blanks = rng.random(rows) < 0.02
        values[blanks] = ""
        data[f"amount_{i}"] = values

    categories = np.array(["Electronics", "Clothing", "Books", "Food", "Sports", "Home"])
    for i in range(category_cols):
        data[f"category_{i}"] = rng.choice(categories, rows)

    for i in range(bool_cols):
        data[f"flag_{i}"] = rng.choice(np.array(["true", "false", "yes", "no"]), rows)

    dates = pd.date_range("2023-01-01", "2024-12-31", periods=365).strftime("%Y-%m-%d").to_numpy()
    for i in range(date_cols):
        data[f"date_{i}"] = rng.choice(dates, rows)

    for i in range(text_cols):
        data[f"note_{i}"] = [f"Note {j + 1}, with a comma" for j in range(rows)]

    return pd.DataFrame(data).iloc[:, :cols]


def create_csv_file(output_path: Path, rows: int, cols: int, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_synthetic_data(rows, cols, seed)
    df.to_csv(output_path, index=False)

    size_mb = output_path.stat().st_size / (1024 * 1024)
    print(f"Created CSV file: {output_path}")
    print(f"  Rows: {rows:,} (+ 1 header row)")
    print(f"  Columns: {len(df.columns)}")
    print(f"  Size: {size_mb:.1f} MB")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic CSV datasets for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 100k rows, 20 columns
  %(prog)s output.csv

  # Generate a file near the row limit
  %(prog)s large.csv --rows 1000000 --cols 10
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--rows", type=int, default=100_000, help="Number of data rows (default: 100,000)")
    parser.add_argument("--cols", type=int, default=20, help="Number of columns (default: 20)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without creating files",
    )
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.cols < 4:
        print("Error: --cols must be at least 4", file=sys.stderr)
        return 1

    estimated_mb = args.rows * args.cols * 10 / (1024 * 1024)  # ~10 bytes per cell
    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Columns: {args.cols}")
    print(f"  Estimated size: ~{estimated_mb:.1f} MB")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate the file but not creating it.")
        return 0

    try:
        create_csv_file(args.output, args.rows, args.cols, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
