"""Application, keyboard and mouse events and their dispatcher."""

from __future__ import annotations

from enum import Enum, IntFlag, auto
from typing import Any, Callable, ClassVar, TypeVar


def bit(x: int) -> int:
    """Return an integer with only bit ``x`` set."""
    return 1 << x


class EventType(Enum):
    """Concrete kind of an event."""

    NONE = 0
    WINDOW_CLOSE = auto()
    WINDOW_RESIZE = auto()
    WINDOW_MINIMIZED = auto()
    WINDOW_FOCUS = auto()
    WINDOW_LOST_FOCUS = auto()
    WINDOW_MOVED = auto()
    APP_TICK = auto()
    APP_UPDATE = auto()
    APP_RENDER = auto()
    KEY_PRESSED = auto()
    KEY_RELEASED = auto()
    MOUSE_BUTTON_PRESSED = auto()
    MOUSE_BUTTON_RELEASED = auto()
    MOUSE_MOVED = auto()
    MOUSE_SCROLLED = auto()
    TEST = auto()


class EventCategory(IntFlag):
    """Bit flags grouping event types."""

    NONE = 0
    APPLICATION = bit(0)
    INPUT = bit(1)
    KEYBOARD = bit(2)
    MOUSE = bit(3)
    MOUSE_BUTTON = bit(4)
    TEST = bit(5)


class Event:
    """Base of every event; ``handled`` stops further propagation."""

    static_type: ClassVar[EventType] = EventType.NONE
    name: ClassVar[str] = "None"
    category_flags: ClassVar[EventCategory] = EventCategory.NONE

    def __init__(self) -> None:
        self.handled = False

    @property
    def event_type(self) -> EventType:
        """Kind of this event."""
        return type(self).static_type

    def is_in_category(self, category: EventCategory) -> bool:
        """Return whether the event belongs to ``category``."""
        return bool(self.category_flags & category)

    def should_log(self) -> bool:
        """Return whether the event is worth logging."""
        return True

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self} handled={self.handled}>"


def _num(value: float) -> str:
    return f"{value:g}"


# Native windowing events recognised by NativeEvent.type_name.
NATIVE_EVENT_KINDS: frozenset[str] = frozenset(
    {
        "FIRST", "QUIT", "TERMINATING", "LOW_MEMORY", "WILL_ENTER_BACKGROUND",
        "DID_ENTER_BACKGROUND", "WILL_ENTER_FOREGROUND", "DID_ENTER_FOREGROUND",
        "LOCALE_CHANGED", "SYSTEM_THEME_CHANGED", "DISPLAY_ORIENTATION",
        "DISPLAY_ADDED", "DISPLAY_REMOVED", "DISPLAY_MOVED",
        "DISPLAY_CONTENT_SCALE_CHANGED", "DISPLAY_HDR_STATE_CHANGED",
        "WINDOW_SHOWN", "WINDOW_HIDDEN", "WINDOW_EXPOSED", "WINDOW_MOVED",
        "WINDOW_RESIZED", "WINDOW_PIXEL_SIZE_CHANGED", "WINDOW_MINIMIZED",
        "WINDOW_MAXIMIZED", "WINDOW_RESTORED", "WINDOW_MOUSE_ENTER",
        "WINDOW_MOUSE_LEAVE", "WINDOW_FOCUS_GAINED", "WINDOW_FOCUS_LOST",
        "WINDOW_CLOSE_REQUESTED", "WINDOW_TAKE_FOCUS", "WINDOW_HIT_TEST",
        "WINDOW_ICCPROF_CHANGED", "WINDOW_DISPLAY_CHANGED",
        "WINDOW_DISPLAY_SCALE_CHANGED", "WINDOW_OCCLUDED",
        "WINDOW_ENTER_FULLSCREEN", "WINDOW_LEAVE_FULLSCREEN", "WINDOW_DESTROYED",
        "WINDOW_PEN_ENTER", "WINDOW_PEN_LEAVE", "KEY_DOWN", "KEY_UP",
        "TEXT_EDITING", "TEXT_INPUT", "KEYMAP_CHANGED", "KEYBOARD_ADDED",
        "KEYBOARD_REMOVED", "MOUSE_MOTION", "MOUSE_BUTTON_DOWN", "MOUSE_BUTTON_UP",
        "MOUSE_WHEEL", "MOUSE_ADDED", "MOUSE_REMOVED", "JOYSTICK_AXIS_MOTION",
        "JOYSTICK_BALL_MOTION", "JOYSTICK_HAT_MOTION", "JOYSTICK_BUTTON_DOWN",
        "JOYSTICK_BUTTON_UP", "JOYSTICK_ADDED", "JOYSTICK_REMOVED",
        "JOYSTICK_BATTERY_UPDATED", "JOYSTICK_UPDATE_COMPLETE",
        "GAMEPAD_AXIS_MOTION", "GAMEPAD_BUTTON_DOWN", "GAMEPAD_BUTTON_UP",
        "GAMEPAD_ADDED", "GAMEPAD_REMOVED", "GAMEPAD_REMAPPED",
        "GAMEPAD_TOUCHPAD_DOWN", "GAMEPAD_TOUCHPAD_MOTION", "GAMEPAD_TOUCHPAD_UP",
        "GAMEPAD_SENSOR_UPDATE", "GAMEPAD_UPDATE_COMPLETE",
        "GAMEPAD_STEAM_HANDLE_UPDATED", "FINGER_DOWN", "FINGER_UP",
        "FINGER_MOTION", "CLIPBOARD_UPDATE", "DROP_FILE", "DROP_TEXT",
        "DROP_BEGIN", "DROP_COMPLETE", "DROP_POSITION", "AUDIO_DEVICE_ADDED",
        "AUDIO_DEVICE_REMOVED", "AUDIO_DEVICE_FORMAT_CHANGED", "SENSOR_UPDATE",
        "PEN_DOWN", "PEN_UP", "PEN_MOTION", "PEN_BUTTON_DOWN", "PEN_BUTTON_UP",
        "CAMERA_DEVICE_ADDED", "CAMERA_DEVICE_REMOVED", "CAMERA_DEVICE_APPROVED",
        "CAMERA_DEVICE_DENIED", "RENDER_TARGETS_RESET", "RENDER_DEVICE_RESET",
        "POLL_SENTINEL", "USER", "LAST", "ENUM_PADDING",
    }
)


class NativeEvent(Event):
    """Wraps a raw event from the windowing backend."""

    static_type = EventType.TEST
    name = "Test"
    category_flags = EventCategory.TEST

    def __init__(self, kind: str, payload: Any = None) -> None:
        super().__init__()
        self.kind = kind
        self.payload = payload

    def type_name(self) -> str:
        """Name of the native event kind, or ``UNDEFINED`` when unknown."""
        return f"EVENT_{self.kind}" if self.kind in NATIVE_EVENT_KINDS else "UNDEFINED"

    def should_log(self) -> bool:
        return self.kind != "POLL_SENTINEL"

    def __str__(self) -> str:
        return f"NativeEvent: {self.type_name()}"


E = TypeVar("E", bound=Event)


class EventDispatcher:
    """Routes an event to a handler when the event is of a given class's type."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: type[E], func: Callable[[E], bool]) -> bool:
        """Call ``func`` if the event matches; its result marks the event handled."""
        if self.event.event_type is event_class.static_type:
            self.event.handled = bool(func(self.event))  # type: ignore[arg-type]
            return True
        return False


class WindowResizeEvent(Event):
    """The window's client area changed size."""

    static_type = EventType.WINDOW_RESIZE
    name = "WindowResize"
    category_flags = EventCategory.APPLICATION

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        self.width = int(width)
        self.height = int(height)

    def __str__(self) -> str:
        return f"WindowResizeEvent: {self.width}, {self.height}"


class WindowMinimizedEvent(Event):
    """The window was minimised or restored."""

    static_type = EventType.WINDOW_MINIMIZED
    name = "WindowMinimized"
    category_flags = EventCategory.APPLICATION

    def __init__(self, minimized: bool) -> None:
        super().__init__()
        self.minimized = bool(minimized)

    def __str__(self) -> str:
        return f"WindowMinimizedEvent: {int(self.minimized)}"


class WindowCloseEvent(Event):
    """The window was asked to close."""

    static_type = EventType.WINDOW_CLOSE
    name = "WindowClose"
    category_flags = EventCategory.APPLICATION


class AppTickEvent(Event):
    """Application tick."""

    static_type = EventType.APP_TICK
    name = "AppTick"
    category_flags = EventCategory.APPLICATION


class AppUpdateEvent(Event):
    """Application update."""

    static_type = EventType.APP_UPDATE
    name = "AppUpdate"
    category_flags = EventCategory.APPLICATION


class AppRenderEvent(Event):
    """Application render."""

    static_type = EventType.APP_RENDER
    name = "AppRender"
    category_flags = EventCategory.APPLICATION


class KeyEvent(Event):
    """Base of keyboard events."""

    category_flags = EventCategory.KEYBOARD | EventCategory.INPUT

    def __init__(self, key_code: int) -> None:
        super().__init__()
        self.key_code = int(key_code)


class KeyPressedEvent(KeyEvent):
    """A key went down, possibly as an auto-repeat."""

    static_type = EventType.KEY_PRESSED
    name = "KeyPressed"

    def __init__(self, key_code: int, repeat_count: int) -> None:
        super().__init__(key_code)
        self.repeat_count = int(repeat_count)

    def __str__(self) -> str:
        return f"KeyPressedEvent: {self.key_code} ({self.repeat_count} repeats)"


class KeyReleasedEvent(KeyEvent):
    """A key went up."""

    static_type = EventType.KEY_RELEASED
    name = "KeyReleased"

    def __str__(self) -> str:
        return f"KeyReleasedEvent: {self.key_code}"


class MouseMovedEvent(Event):
    """The mouse pointer moved."""

    static_type = EventType.MOUSE_MOVED
    name = "MouseMoved"
    category_flags = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, x: float, y: float) -> None:
        super().__init__()
        self.x = float(x)
        self.y = float(y)

    def __str__(self) -> str:
        return f"MouseMovedEvent: {_num(self.x)}, {_num(self.y)}"


class MouseScrolledEvent(Event):
    """The mouse wheel scrolled."""

    static_type = EventType.MOUSE_SCROLLED
    name = "MouseScrolled"
    category_flags = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, x_offset: float, y_offset: float) -> None:
        super().__init__()
        self.x_offset = float(x_offset)
        self.y_offset = float(y_offset)

    def __str__(self) -> str:
        return f"MouseScrolledEvent: {_num(self.x_offset)}, {_num(self.y_offset)}"


class MouseButtonEvent(Event):
    """Base of mouse button events."""

    category_flags = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, button: int) -> None:
        super().__init__()
        self.button = int(button)


class MouseButtonPressedEvent(MouseButtonEvent):
    """A mouse button went down."""

    static_type = EventType.MOUSE_BUTTON_PRESSED
    name = "MouseButtonPressed"

    def __str__(self) -> str:
        return f"MouseButtonPressedEvent: {self.button}"


class MouseButtonReleasedEvent(MouseButtonEvent):
    """A mouse button went up."""

    static_type = EventType.MOUSE_BUTTON_RELEASED
    name = "MouseButtonReleased"

    def __str__(self) -> str:
        return f"MouseButtonReleasedEvent: {self.button}"