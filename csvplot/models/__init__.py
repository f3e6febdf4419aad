"""Domain models for the CSV ingestion core.

Messages exchanged with the parse worker live in csvplot.models.messages and
are not re-exported here.
"""

from .chart import ChartConfig, ChartSpec, ChartType
from .config_models import DEFAULT_CONFIG, PipelineConfig
from .dataset import ColumnKind, ColumnMetadata, DatasetMetadata, DateFormat, ParsedCSV
from .error_record import ErrorRecord
from .filters import ActiveFilter, BooleanFilter, CategoryFilter, DateFilter, Filter, NumberFilter

__all__ = [
    # Configuration
    "PipelineConfig",
    "DEFAULT_CONFIG",
    # Dataset
    "ColumnKind",
    "DateFormat",
    "ColumnMetadata",
    "DatasetMetadata",
    "ParsedCSV",
    # Filters
    "NumberFilter",
    "DateFilter",
    "BooleanFilter",
    "CategoryFilter",
    "Filter",
    "ActiveFilter",
    # Charts
    "ChartType",
    "ChartConfig",
    "ChartSpec",
    # Error log
    "ErrorRecord",
]
