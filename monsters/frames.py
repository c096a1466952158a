"""Per-frame deferred resource release and timestep clamping."""

from __future__ import annotations

from typing import Callable

MAX_TIMESTEP = 0.0333


def clamp_timestep(frame_time: float) -> float:
    """Limit a frame's duration to the largest step the simulation accepts."""
    return min(frame_time, MAX_TIMESTEP)


class ResourceFreeQueue:
    """Callbacks queued per frame in flight, run when that frame comes round again."""

    def __init__(self, image_count: int) -> None:
        self._frames: list[list[Callable[[], None]]] = []
        self.current_index = 0
        self.resize(image_count)

    @property
    def image_count(self) -> int:
        return len(self._frames)

    @property
    def pending(self) -> int:
        return sum(len(frame) for frame in self._frames)

    def submit(self, func: Callable[[], None]) -> None:
        """Queue a callback on the current frame."""
        self._frames[self.current_index].append(func)

    def advance(self) -> None:
        """Move to the next frame and run everything queued on it."""
        self.current_index = (self.current_index + 1) % len(self._frames)
        frame = self._frames[self.current_index]
        for func in frame:
            func()
        frame.clear()

    def flush_all(self) -> None:
        """Run every queued callback in frame order and empty the queue."""
        for frame in self._frames:
            for func in frame:
                func()
            frame.clear()

    def resize(self, image_count: int) -> None:
        """Change the number of frames; dropped frames lose their callbacks."""
        if image_count < 1:
            raise ValueError("image_count must be at least 1")
        del self._frames[image_count:]
        while len(self._frames) < image_count:
            self._frames.append([])
        self.current_index %= image_count