"""The application: window, layers, event routing and the main loop."""

from __future__ import annotations

import time
from typing import Callable, ClassVar

from janji import log, renderer
from janji.events import (
    Event,
    EventDispatcher,
    WindowCloseEvent,
    WindowMinimizedEvent,
    WindowResizeEvent,
)
from janji.layer import Layer, LayerStack
from janji.log import core_assert
from janji.memory import initialize_memory_stats, shutdown_memory_stats
from janji.timestep import Timestep
from janji.window import WindowBase, create_window


class Application:
    """Single running application owning a window and a stack of layers."""

    _instance: ClassVar[Application | None] = None

    def __init__(
        self,
        window: WindowBase | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        core_assert(
            Application._instance is None,
            "We already have instance, Application should be singleton",
        )
        Application._instance = self
        try:
            initialize_memory_stats()
            log.initialize()
            self.window = window if window is not None else create_window()
            self.window.set_event_callback(self.on_event)
            renderer.init()
        except BaseException:
            Application._instance = None
            raise
        self.layer_stack = LayerStack()
        self.running = True
        self.minimized = False
        self._clock = clock
        self._last_frame_time = clock()
        self._closed = False

    def on_event(self, event: Event) -> None:
        """Handle window events, then pass ``event`` down from the top layer."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowCloseEvent, self._on_window_close)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resize)
        dispatcher.dispatch(WindowMinimizedEvent, self._on_window_minimized)
        for layer in reversed(self.layer_stack):
            if event.handled:
                break
            layer.on_event(event)

    def push_layer(self, layer: Layer) -> None:
        self.layer_stack.push_layer(layer)

    def push_overlay(self, layer: Layer) -> None:
        self.layer_stack.push_overlay(layer)

    def run(self) -> None:
        """Run frames until the window is closed."""
        while self.running:
            now = self._clock()
            timestep = Timestep(now - self._last_frame_time)
            self._last_frame_time = now
            self.run_frame(timestep)

    def run_frame(self, timestep: Timestep) -> None:
        """Update and draw every layer unless minimised, then update the window."""
        if not self.minimized:
            for layer in self.layer_stack:
                layer.on_update(timestep)
            for layer in self.layer_stack:
                layer.on_imgui_render()
        self.window.on_update()

    def close(self) -> None:
        """Shut down the renderer, statistics, logger and window."""
        if self._closed:
            return
        self._closed = True
        self.running = False
        renderer.shutdown()
        shutdown_memory_stats()
        log.shutdown()
        close_window = getattr(self.window, "close", None)
        if callable(close_window):
            close_window()
        if Application._instance is self:
            Application._instance = None

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _on_window_close(self, event: WindowCloseEvent) -> bool:
        self.running = False
        return True

    def _on_window_resize(self, event: WindowResizeEvent) -> bool:
        if event.width == 0 or event.height == 0:
            self.minimized = True
            return False
        self.minimized = False
        renderer.on_window_resize(event.width, event.height)
        return False

    def _on_window_minimized(self, event: WindowMinimizedEvent) -> bool:
        self.minimized = bool(event.minimized)
        return False


def get_application() -> Application:
    """Return the running application."""
    if Application._instance is None:
        raise RuntimeError("no application is running")
    return Application._instance