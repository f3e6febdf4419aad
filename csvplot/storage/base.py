from __future__ import annotations

import json
from pathlib import Path
from typing import Any

"""JSON file persistence shared by the chart and recents repositories.

Writes go to a temporary sibling first and are moved into place, so a crash
mid-write leaves the previous file intact.
"""

__all__ = [
    "StorageError",
    "JsonFile",
]


class StorageError(Exception):
    """Raised when a repository file cannot be read or written."""


class JsonFile:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self, default: Any) -> Any:
        """Return the decoded file content, or `default` when the file does not exist."""
        if not self.path.exists():
            return default
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"corrupt storage file {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"cannot read storage file {self.path}: {e}") from e

    def write(self, data: Any) -> None:
        tmp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"cannot write storage file {self.path}: {e}") from e
