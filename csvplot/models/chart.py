from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

"""Chart configuration models persisted per dataset signature.

A ChartSpec never references rows; it only names columns and carries the
signature of the dataset it was created for. Any later dataset whose headers
hash to the same signature gets the chart re-attached.
"""

__all__ = [
    "ChartType",
    "ChartConfig",
    "ChartSpec",
]


class ChartType(str, Enum):
    SCATTER = "scatter"
    LINE = "line"
    BAR = "bar"
    HISTOGRAM = "histogram"
    BOX = "box"
    VIOLIN = "violin"
    SCATTER3D = "scatter3d"
    SURFACE = "surface"


@dataclass(frozen=True)
class ChartConfig:
    """User-editable part of a chart."""
    type: ChartType
    title: str
    x_column: str
    y_columns: tuple[str, ...] = field(default_factory=tuple)
    dataset_signature: str = ""
    z_column: str | None = None
    color_by_column: str | None = None
    sampling_enabled: bool = False
    max_points: int | None = None
    id: str | None = None  # generated by the repository when missing


@dataclass(frozen=True)
class ChartSpec:
    """Persisted chart: the config plus identity and timestamps (epoch ms)."""
    id: str
    type: ChartType
    title: str
    x_column: str
    y_columns: tuple[str, ...]
    dataset_signature: str
    created_at: int
    updated_at: int
    z_column: str | None = None
    color_by_column: str | None = None
    sampling_enabled: bool = False
    max_points: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        data["y_columns"] = list(self.y_columns)
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ChartSpec:
        return ChartSpec(
            id=data["id"],
            type=ChartType(data["type"]),
            title=data.get("title", ""),
            x_column=data.get("x_column", ""),
            y_columns=tuple(data.get("y_columns", ())),
            dataset_signature=data["dataset_signature"],
            created_at=int(data["created_at"]),
            updated_at=int(data["updated_at"]),
            z_column=data.get("z_column"),
            color_by_column=data.get("color_by_column"),
            sampling_enabled=bool(data.get("sampling_enabled", False)),
            max_points=data.get("max_points"),
        )
