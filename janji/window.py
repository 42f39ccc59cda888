"""Native window that turns windowing-system input into engine events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from janji.events import (
    Event,
    KeyPressedEvent,
    KeyReleasedEvent,
    MouseButtonPressedEvent,
    MouseButtonReleasedEvent,
    MouseMovedEvent,
    MouseScrolledEvent,
    NativeEvent,
    WindowCloseEvent,
    WindowMinimizedEvent,
    WindowResizeEvent,
)
from janji.input import Input, InputBase, Scancode, get_input
from janji.renderer_api import GraphicsDevice, RendererContext

EventCallback = Callable[[Event], None]


def _ignore(event: Event) -> None:
    """Default callback: drop the event."""


@dataclass
class WindowSettings:
    """Title and size of a window to create."""

    title: str = "Janji"
    width: int = 1280
    height: int = 720
    window_flags: int = 0


class WindowBase(ABC):
    """A window that reports its events to one callback."""

    def __init__(self) -> None:
        self._callback: EventCallback = _ignore

    @abstractmethod
    def on_update(self) -> None:
        """Process pending native events and present the frame."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Client width in pixels."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Client height in pixels."""

    def set_event_callback(self, callback: EventCallback) -> None:
        """Send every event of this window to ``callback``."""
        self._callback = callback

    def emit(self, event: Event) -> None:
        """Deliver ``event`` to the callback."""
        self._callback(event)


# Windowing key symbols (X11 keysym values) mapped to physical scancodes.
_KEY_TO_SCANCODE: dict[int, Scancode] = {
    ord(code.name.lower()): code for code in Scancode if len(code.name) == 1
}
_KEY_TO_SCANCODE.update(
    {
        0x20: Scancode.SPACE,
        0xFF08: Scancode.BACKSPACE,
        0xFF09: Scancode.TAB,
        0xFF0D: Scancode.RETURN,
        0xFF1B: Scancode.ESCAPE,
        0xFF51: Scancode.LEFT,
        0xFF52: Scancode.UP,
        0xFF53: Scancode.RIGHT,
        0xFF54: Scancode.DOWN,
    }
)

# Backend button bit masks mapped to buttons numbered from 1 (left, middle, right, ...).
_MOUSE_BUTTONS = {1: 1, 2: 2, 4: 3, 8: 4, 16: 5}


def _create_native(settings: WindowSettings) -> Any:
    import pyglet

    return pyglet.window.Window(
        settings.width,
        settings.height,
        caption=settings.title,
        resizable=True,
        visible=False,
    )


def _center(native: Any, width: int, height: int) -> None:
    screen = getattr(native, "screen", None)
    if screen is None:
        return
    x = getattr(screen, "x", 0) + (screen.width - width) // 2
    y = getattr(screen, "y", 0) + (screen.height - height) // 2
    native.set_location(x, y)


class Window(WindowBase):
    """Window backed by a native window with a graphics context.

    ``native`` must offer ``switch_to``, ``set_vsync``, ``set_visible``, ``flip``,
    ``push_handlers``, ``dispatch_events`` and ``close``; a new resizable window
    is created when it is omitted.
    """

    def __init__(
        self,
        settings: WindowSettings | None = None,
        native: Any = None,
        device: GraphicsDevice | None = None,
        input_backend: InputBase | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or WindowSettings()
        self._width = self.settings.width
        self._height = self.settings.height
        self._input = input_backend
        self._closed = False

        self.native = native if native is not None else _create_native(self.settings)
        self.context = RendererContext(self.native, device)
        _center(self.native, self._width, self._height)

        self.native.push_handlers(
            on_resize=self._on_resize,
            on_close=self._on_close,
            on_hide=self._on_hide,
            on_show=self._on_show,
            on_key_press=self._on_key_press,
            on_key_release=self._on_key_release,
            on_mouse_press=self._on_mouse_press,
            on_mouse_release=self._on_mouse_release,
            on_mouse_scroll=self._on_mouse_scroll,
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_drag=self._on_mouse_drag,
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def closed(self) -> bool:
        return self._closed

    def on_update(self) -> None:
        """Dispatch pending native events, then swap buffers."""
        if self._closed:
            return
        self.native.dispatch_events()
        self.context.swap_buffers()

    def close(self) -> None:
        """Destroy the native window; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.native.close()

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _tracked_input(self) -> Input | None:
        backend = self._input or get_input()
        return backend if isinstance(backend, Input) else None

    def _emit_both(self, event: Event, kind: str) -> None:
        self.emit(event)
        self.emit(NativeEvent(kind, event))

    def _on_resize(self, width: int, height: int) -> None:
        self._width, self._height = int(width), int(height)
        self._emit_both(WindowResizeEvent(width, height), "WINDOW_RESIZED")

    def _on_close(self) -> bool:
        self._emit_both(WindowCloseEvent(), "WINDOW_CLOSE_REQUESTED")
        return True

    def _on_hide(self) -> None:
        self._emit_both(WindowMinimizedEvent(True), "WINDOW_MINIMIZED")

    def _on_show(self) -> None:
        self._emit_both(WindowMinimizedEvent(False), "WINDOW_RESTORED")

    def _set_key(self, symbol: int, pressed: bool) -> None:
        backend = self._tracked_input()
        code = _KEY_TO_SCANCODE.get(symbol)
        if backend is not None and code is not None:
            backend.set_key(code, pressed)

    def _on_key_press(self, symbol: int, modifiers: int) -> None:
        self._set_key(symbol, True)
        self._emit_both(KeyPressedEvent(symbol, 0), "KEY_DOWN")

    def _on_key_release(self, symbol: int, modifiers: int) -> None:
        self._set_key(symbol, False)
        self._emit_both(KeyReleasedEvent(symbol), "KEY_UP")

    def _set_button(self, button: int, pressed: bool) -> int:
        number = _MOUSE_BUTTONS.get(button, button)
        backend = self._tracked_input()
        if backend is not None and number >= 1:
            backend.set_mouse_button(number, pressed)
        return number

    def _on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        number = self._set_button(button, True)
        self._emit_both(MouseButtonPressedEvent(number), "MOUSE_BUTTON_DOWN")

    def _on_mouse_release(self, x: float, y: float, button: int, modifiers: int) -> None:
        number = self._set_button(button, False)
        self._emit_both(MouseButtonReleasedEvent(number), "MOUSE_BUTTON_UP")

    def _on_mouse_scroll(self, x: float, y: float, scroll_x: float, scroll_y: float) -> None:
        self._emit_both(MouseScrolledEvent(scroll_x, scroll_y), "MOUSE_WHEEL")

    def _on_mouse_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        # Native coordinates grow upwards; events report them from the top edge.
        top_y = self._height - y
        backend = self._tracked_input()
        if backend is not None:
            backend.set_mouse_position(x, top_y)
        self._emit_both(MouseMovedEvent(x, top_y), "MOUSE_MOTION")

    def _on_mouse_drag(
        self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int
    ) -> None:
        self._on_mouse_motion(x, y, dx, dy)


def create_window(settings: WindowSettings | None = None) -> Window:
    """Create a native window with the given (or default) settings."""
    return Window(settings or WindowSettings())