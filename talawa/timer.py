"""Scope timing that prints how long a block took."""

from __future__ import annotations

import sys
import time
from typing import Callable, TextIO


def format_duration(elapsed_seconds: float) -> str:
    """Render a duration with three decimals, floored at 0.001.

    The unit is "ms" below one second and "s" from then on.
    """
    milliseconds = elapsed_seconds * 1000.0
    duration = max(int(milliseconds) / 1000.0, 0.001)
    unit = "ms" if elapsed_seconds < 1.0 else "s"
    return f"{duration:g} {unit}"


class ScopedTimer:
    """Context manager that prints ``[TIMER] name: duration`` on exit."""

    def __init__(
        self,
        name: str,
        out: TextIO | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.name = name
        self._out = out
        self._clock = clock
        self._start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> ScopedTimer:
        self._start = self._clock()
        return self

    def __exit__(self, *args) -> None:
        self.elapsed = self._clock() - self._start
        out = self._out if self._out is not None else sys.stdout
        out.write(f"[TIMER] {self.name}: {format_duration(self.elapsed)}\n")