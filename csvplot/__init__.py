"""CSV ingestion core: parse, clean, type and sign CSV files for charting."""

__version__ = "0.1.0"
