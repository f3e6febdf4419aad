"""Repositories for chart configurations and recently opened datasets."""

from .base import StorageError
from .charts import ChartRepository
from .recents import RecentsRepository

__all__ = ["StorageError", "ChartRepository", "RecentsRepository"]
