import pytest

from janji import renderer_api
from janji.events import (
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
from janji.input import Input, Scancode
from janji.renderer_api import RecordingDevice
from janji.window import Window, WindowSettings


class FakeNative:
    def __init__(self):
        self.handlers = {}
        self.visible = False
        self.vsync = None
        self.flips = 0
        self.dispatched = 0
        self.closed = 0
        self.switched = 0

    def switch_to(self):
        self.switched += 1

    def set_vsync(self, value):
        self.vsync = value

    def set_visible(self, value=True):
        self.visible = value

    def flip(self):
        self.flips += 1

    def push_handlers(self, **handlers):
        self.handlers.update(handlers)

    def dispatch_events(self):
        self.dispatched += 1

    def close(self):
        self.closed += 1


@pytest.fixture(autouse=True)
def restore_device():
    previous = renderer_api.get_device()
    yield
    renderer_api.set_device(previous)


@pytest.fixture
def setup():
    native = FakeNative()
    device = RecordingDevice()
    backend = Input()
    window = Window(WindowSettings(), native=native, device=device, input_backend=backend)
    events = []
    window.set_event_callback(events.append)
    return window, native, device, backend, events


def test_settings_defaults():
    settings = WindowSettings()
    assert settings.title == "Janji"
    assert (settings.width, settings.height) == (1280, 720)
    assert settings.window_flags == 0


def test_construction_shows_window_and_installs_device(setup):
    window, native, device, _, _ = setup
    assert native.visible is True
    assert native.vsync is True
    assert native.switched == 1
    assert renderer_api.get_device() is device
    assert (window.width, window.height) == (window.settings.width, window.settings.height)


def test_resize_emits_typed_then_native_event(setup):
    window, native, _, _, events = setup
    native.handlers["on_resize"](800, 600)
    assert [type(e) for e in events] == [WindowResizeEvent, NativeEvent]
    assert (events[0].width, events[0].height) == (800, 600)
    assert events[1].kind == "WINDOW_RESIZED"
    assert (window.width, window.height) == (800, 600)


def test_close_request_is_consumed(setup):
    _, native, _, _, events = setup
    assert native.handlers["on_close"]() is True
    assert isinstance(events[0], WindowCloseEvent)
    assert events[1].kind == "WINDOW_CLOSE_REQUESTED"
    assert native.closed == 0


def test_hide_and_show_report_minimized(setup):
    _, native, _, _, events = setup
    native.handlers["on_hide"]()
    native.handlers["on_show"]()
    minimized = [e for e in events if isinstance(e, WindowMinimizedEvent)]
    assert [e.minimized for e in minimized] == [True, False]


def test_key_press_and_release_feed_input(setup):
    _, native, _, backend, events = setup
    native.handlers["on_key_press"](ord("a"), 0)
    assert backend.is_key_pressed(Scancode.A)
    assert isinstance(events[0], KeyPressedEvent)
    assert events[0].key_code == ord("a")
    native.handlers["on_key_release"](ord("a"), 0)
    assert not backend.is_key_pressed(Scancode.A)
    assert isinstance(events[2], KeyReleasedEvent)


def test_mouse_buttons_are_numbered_from_left(setup):
    _, native, _, backend, events = setup
    native.handlers["on_mouse_press"](0, 0, 4, 0)
    assert isinstance(events[0], MouseButtonPressedEvent)
    assert events[0].button == 3
    assert backend.is_mouse_button_pressed(3)
    native.handlers["on_mouse_release"](0, 0, 4, 0)
    assert isinstance(events[2], MouseButtonReleasedEvent)
    assert not backend.is_mouse_button_pressed(3)


def test_mouse_motion_is_measured_from_top(setup):
    window, native, _, backend, events = setup
    native.handlers["on_mouse_motion"](10, 20, 0, 0)
    assert isinstance(events[0], MouseMovedEvent)
    assert events[0].y == window.height - 20
    assert backend.mouse_position() == (10.0, float(window.height - 20))


def test_scroll_reports_offsets(setup):
    _, native, _, _, events = setup
    native.handlers["on_mouse_scroll"](0, 0, 0.0, -2.0)
    assert isinstance(events[0], MouseScrolledEvent)
    assert (events[0].x_offset, events[0].y_offset) == (0.0, -2.0)
    assert events[1].kind == "MOUSE_WHEEL"


def test_on_update_dispatches_and_swaps(setup):
    window, native, _, _, _ = setup
    window.on_update()
    window.on_update()
    assert native.dispatched == 2
    assert native.flips == 2


def test_close_is_idempotent_and_stops_updates(setup):
    window, native, _, _, _ = setup
    window.close()
    window.close()
    window.on_update()
    assert native.closed == 1
    assert window.closed is True
    assert native.flips == 0


def test_emit_reaches_callback(setup):
    window, _, _, _, events = setup
    event = WindowCloseEvent()
    window.emit(event)
    assert events == [event]