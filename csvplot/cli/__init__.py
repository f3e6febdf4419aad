"""Command line interface: `python -m csvplot.cli FILE`."""

from .__main__ import main

__all__ = ["main"]
