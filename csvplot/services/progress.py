from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.messages import ParseProgress

"""Parse progress display with tqdm (TTY only).

The parse worker reports percentages (0, 30, 60, 90) with a short step
message. The bar advances to the reported percentage and shows the step as
its description. In non-TTY environments (CI, pipes) no bar is created, so
logs stay free of ANSI control sequences.
"""

__all__ = [
    "ParseProgressBar",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if TTY output is enabled.

    Returns:
        True if stdout is a TTY and progress should be displayed, False otherwise
    """
    return sys.stdout.isatty()


class ParseProgressBar:
    """Percentage bar for one file; usable directly as the on_progress callback."""

    def __init__(self, *, description: str = "Parsing") -> None:
        self.description = description
        self.percent = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=100,
                desc=description,
                unit="%",
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def update_to(self, progress: int, message: str = "") -> None:
        """Advance to `progress` percent; never moves backwards."""
        progress = max(0, min(100, progress))
        if progress <= self.percent and not message:
            return
        delta = max(0, progress - self.percent)
        self.percent = max(self.percent, progress)
        if self.enabled and self.pbar is not None:
            if message:
                self.pbar.set_description(f"{self.description} ({message})")
            if delta:
                self.pbar.update(delta)

    def __call__(self, message: ParseProgress) -> None:
        self.update_to(message.progress, message.message)

    def finish(self) -> None:
        self.update_to(100)

    def close(self) -> None:
        """Close the progress bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ParseProgressBar:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
