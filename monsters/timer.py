"""Wall-clock timers."""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO


class Timer:
    """Measures seconds elapsed since creation or the last reset."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.perf_counter
        self._start = self._clock()

    def reset(self) -> None:
        self._start = self._clock()

    def elapsed(self) -> float:
        """Seconds since the start point."""
        return self._clock() - self._start

    def elapsed_millis(self) -> float:
        return self.elapsed() * 1000.0


class ScopedTimer:
    """Context manager that reports how long its block took."""

    def __init__(
        self,
        name: str,
        stream: Optional[TextIO] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.name = name
        self._stream = stream
        self._clock = clock
        self._timer: Optional[Timer] = None

    def __enter__(self) -> "ScopedTimer":
        self._timer = Timer(self._clock)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._timer is not None
        millis = self._timer.elapsed_millis()
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"[TIMER] {self.name} - {millis:g}ms\n")