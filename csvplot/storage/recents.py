from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from ..models.config_models import DEFAULT_CONFIG
from ..models.dataset import DatasetMetadata
from .base import JsonFile, StorageError

"""Recently opened datasets: newest first, one entry per signature."""

__all__ = [
    "RecentsRepository",
]


class RecentsRepository:
    def __init__(self, path: Path | None = None, limit: int = DEFAULT_CONFIG.recents_limit) -> None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self.limit = limit
        self._file = JsonFile(path) if path is not None else None
        self._recents: list[DatasetMetadata] = []
        if self._file is not None:
            raw = self._file.read(default=[])
            if not isinstance(raw, list):
                raise StorageError(f"recents file {self._file.path} must contain a JSON array")
            try:
                self._recents = [DatasetMetadata.from_dict(item) for item in raw][: self.limit]
            except (KeyError, TypeError, ValueError) as e:
                raise StorageError(f"invalid recents entry in {self._file.path}: {e}") from e

    def _save(self) -> None:
        if self._file is not None:
            self._file.write([m.to_dict() for m in self._recents])

    def add(self, metadata: DatasetMetadata) -> None:
        """Put `metadata` first, dropping an older entry with the same signature."""
        others = [m for m in self._recents if m.signature != metadata.signature]
        self._recents = [metadata, *others][: self.limit]
        self._save()

    def update_chart_count(self, signature: str, chart_count: int) -> None:
        self._recents = [
            replace(m, chart_count=chart_count) if m.signature == signature else m
            for m in self._recents
        ]
        self._save()

    def clear(self) -> None:
        self._recents = []
        self._save()

    def list(self) -> list[DatasetMetadata]:
        return list(self._recents)
