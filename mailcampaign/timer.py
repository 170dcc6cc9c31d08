"""A wall-clock timer with millisecond precision."""

from __future__ import annotations

import time

__all__ = ["Timer"]


class Timer:
    """Measures elapsed milliseconds; it starts running when created."""

    def __init__(self) -> None:
        self._started = time.monotonic()

    def start(self) -> None:
        """Restart the timer from now."""
        self._started = time.monotonic()

    def stop(self) -> int:
        """Return whole milliseconds elapsed since the last start."""
        return int((time.monotonic() - self._started) * 1000)