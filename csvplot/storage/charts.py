from __future__ import annotations

import secrets
from collections.abc import Callable
from dataclasses import asdict, fields, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..models.chart import ChartConfig, ChartSpec, ChartType
from .base import JsonFile, StorageError

"""Saved charts, keyed by dataset signature.

A chart list survives re-uploads: any dataset whose headers hash to the same
signature sees the same charts. Only chart configuration is stored, never
row data. With a `path` the whole mapping is rewritten after each mutation.
"""

__all__ = [
    "ChartRepository",
]

# ChartSpec fields callers may change through update()
_EDITABLE_FIELDS = frozenset(
    f.name for f in fields(ChartSpec) if f.name not in {"id", "created_at", "updated_at"}
)


def _now_ms() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def _new_chart_id() -> str:
    return secrets.token_urlsafe(16)


class ChartRepository:
    def __init__(self, path: Path | None = None, *, clock: Callable[[], int] = _now_ms) -> None:
        self._file = JsonFile(path) if path is not None else None
        self._clock = clock
        self._charts: dict[str, list[ChartSpec]] = {}
        if self._file is not None:
            self._load()

    def _load(self) -> None:
        assert self._file is not None
        raw = self._file.read(default={})
        if not isinstance(raw, dict):
            raise StorageError(f"charts file {self._file.path} must contain a JSON object")
        try:
            self._charts = {
                signature: [ChartSpec.from_dict(item) for item in items]
                for signature, items in raw.items()
            }
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"invalid chart entry in {self._file.path}: {e}") from e

    def _save(self) -> None:
        if self._file is None:
            return
        self._file.write(
            {signature: [c.to_dict() for c in charts] for signature, charts in self._charts.items()}
        )

    def add(self, signature: str, config: ChartConfig) -> ChartSpec:
        """Store a new chart; an id is generated when the config has none."""
        now = self._clock()
        values = asdict(config)
        values.pop("id")
        values["dataset_signature"] = signature
        values["y_columns"] = tuple(config.y_columns)
        spec = ChartSpec(
            id=config.id or _new_chart_id(),
            created_at=now,
            updated_at=now,
            **values,
        )
        self._charts.setdefault(signature, []).append(spec)
        self._save()
        return spec

    def update(self, signature: str, chart_id: str, **changes: Any) -> ChartSpec | None:
        """Apply `changes` to one chart and bump its updated_at.

        Returns the updated chart, or None when no chart has that id.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update chart fields: {sorted(unknown)}")
        if "type" in changes:
            changes["type"] = ChartType(changes["type"])
        if "y_columns" in changes:
            changes["y_columns"] = tuple(changes["y_columns"])

        charts = self._charts.get(signature, [])
        for i, chart in enumerate(charts):
            if chart.id == chart_id:
                updated = replace(chart, **changes, updated_at=self._clock())
                charts[i] = updated
                self._save()
                return updated
        return None

    def delete(self, signature: str, chart_id: str) -> bool:
        charts = self._charts.get(signature, [])
        kept = [c for c in charts if c.id != chart_id]
        if len(kept) == len(charts):
            return False
        self._charts[signature] = kept
        self._save()
        return True

    def get(self, signature: str) -> list[ChartSpec]:
        return list(self._charts.get(signature, []))

    def count(self, signature: str) -> int:
        return len(self._charts.get(signature, []))

    def clear(self, signature: str) -> None:
        if self._charts.pop(signature, None) is not None:
            self._save()
