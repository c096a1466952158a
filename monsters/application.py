"""Application shell: a layer stack driven by a frame loop."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .frames import ResourceFreeQueue, clamp_timestep
from .input import Input

MIN_IMAGE_COUNT = 2


@dataclass
class ApplicationSpecification:
    """Window title and size requested by the application."""

    name: str = "Walnut App"
    width: int = 1600
    height: int = 900


class Layer:
    """Unit of behaviour the application calls into every frame."""

    def on_attach(self) -> None:
        """Called once when the layer is pushed onto the application."""

    def on_detach(self) -> None:
        """Called once when the application shuts down."""

    def on_update(self, timestep: float) -> None:
        """Advance the layer's state by ``timestep`` seconds."""

    def on_ui_render(self) -> None:
        """Draw the layer's interface for the current frame."""


class Application:
    """Runs attached layers frame by frame until closed."""

    def __init__(
        self,
        specification: Optional[ApplicationSpecification] = None,
        clock: Optional[Callable[[], float]] = None,
        input_state: Optional[Input] = None,
    ) -> None:
        self.specification = specification or ApplicationSpecification()
        self.input = input_state if input_state is not None else Input()
        self._clock = clock or _time.perf_counter
        self._start = self._clock()
        self._layers: list[Layer] = []
        self._menubar_callback: Optional[Callable[[], None]] = None
        self._resources = ResourceFreeQueue(MIN_IMAGE_COUNT)
        self._running = False
        self._shut_down = False
        self.timestep = 0.0
        self.frame_time = 0.0
        self._last_frame_time = 0.0

    @property
    def layers(self) -> tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending_resources(self) -> int:
        return self._resources.pending

    def push_layer(self, layer: Layer) -> Layer:
        """Append a layer to the stack and attach it."""
        if isinstance(layer, type):
            if not issubclass(layer, Layer):
                raise TypeError(f"{layer.__name__} is not a Layer")
            layer = layer()
        elif not isinstance(layer, Layer):
            raise TypeError(f"{type(layer).__name__} is not a Layer")
        self._layers.append(layer)
        layer.on_attach()
        return layer

    def set_menubar_callback(self, callback: Optional[Callable[[], None]]) -> None:
        self._menubar_callback = callback

    def submit_resource_free(self, func: Callable[[], None]) -> None:
        """Defer ``func`` until the current frame in flight comes round again."""
        self._resources.submit(func)

    def close(self) -> None:
        """Stop the frame loop after the current frame."""
        self._running = False

    def time(self) -> float:
        """Seconds since the application was created."""
        return self._clock() - self._start

    def run(self, max_frames: Optional[int] = None) -> int:
        """Run frames until closed or ``max_frames`` have run; return the count."""
        if self._shut_down:
            raise RuntimeError("application has been shut down")
        self._running = True
        frames = 0
        while self._running and (max_frames is None or frames < max_frames):
            for layer in list(self._layers):
                layer.on_update(self.timestep)

            if self._menubar_callback is not None:
                self._menubar_callback()

            for layer in list(self._layers):
                layer.on_ui_render()

            self._resources.advance()
            frames += 1

            now = self.time()
            self.frame_time = now - self._last_frame_time
            self.timestep = clamp_timestep(self.frame_time)
            self._last_frame_time = now
        self._running = False
        return frames

    def shutdown(self) -> None:
        """Detach every layer and release all deferred resources."""
        if self._shut_down:
            return
        for layer in self._layers:
            layer.on_detach()
        self._layers.clear()
        self._resources.flush_all()
        self._running = False
        self._shut_down = True


def run_application(
    factory: Callable[[Sequence[str]], Application],
    argv: Optional[Sequence[str]] = None,
) -> int:
    """Build an application with ``factory``, run it and shut it down."""
    app = factory(list(argv) if argv is not None else [])
    try:
        app.run()
    finally:
        app.shutdown()
    return 0