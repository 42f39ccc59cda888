import pytest

from janji import renderer
from janji.application import Application, get_application
from janji.events import (
    KeyPressedEvent,
    WindowCloseEvent,
    WindowMinimizedEvent,
    WindowResizeEvent,
)
from janji.layer import Layer
from janji.log import CoreAssertionError
from janji.renderer_api import RecordingDevice, get_device, set_device
from janji.timestep import Timestep
from janji.window import WindowBase


class FakeWindow(WindowBase):
    def __init__(self):
        super().__init__()
        self.updates = 0
        self.closed = False

    def on_update(self):
        self.updates += 1

    @property
    def width(self):
        return 1280

    @property
    def height(self):
        return 720

    def close(self):
        self.closed = True


class RecordingLayer(Layer):
    def __init__(self, name="rec", journal=None):
        super().__init__(name)
        self.journal = journal if journal is not None else []
        self.updates = []
        self.ui_passes = 0
        self.attached = 0

    def on_attach(self):
        self.attached += 1

    def on_update(self, timestep):
        self.updates.append(float(timestep))

    def on_imgui_render(self):
        self.ui_passes += 1

    def on_event(self, event):
        self.journal.append((self.name, event))


@pytest.fixture
def device():
    original = get_device()
    recording = RecordingDevice()
    set_device(recording)
    yield recording
    set_device(original)


@pytest.fixture
def app(device):
    application = Application(window=FakeWindow())
    yield application
    application.close()


def test_singleton(app):
    assert get_application() is app
    with pytest.raises(CoreAssertionError):
        Application(window=FakeWindow())


def test_close_releases_everything(device):
    window = FakeWindow()
    application = Application(window=window)
    assert renderer.get_renderer_2d() is not None
    application.close()
    assert window.closed is True
    with pytest.raises(RuntimeError):
        get_application()
    with pytest.raises(RuntimeError):
        renderer.get_renderer_2d()


def test_push_layer_attaches(app):
    layer = RecordingLayer()
    app.push_layer(layer)
    assert layer.attached == 1
    assert list(app.layer_stack) == [layer]


def test_close_event_stops_and_is_not_passed_on(app):
    layer = RecordingLayer()
    app.push_layer(layer)
    event = WindowCloseEvent()
    app.window.emit(event)
    assert app.running is False
    assert event.handled is True
    assert layer.journal == []


def test_events_reach_overlays_first(app):
    journal = []
    app.push_layer(RecordingLayer("base", journal))
    app.push_overlay(RecordingLayer("overlay", journal))
    app.on_event(KeyPressedEvent(4, 0))
    assert [name for name, _ in journal] == ["overlay", "base"]


def test_handled_event_stops_propagation(app):
    class Consumer(Layer):
        def on_event(self, event):
            event.handled = True

    base = RecordingLayer("base")
    app.push_layer(base)
    app.push_overlay(Consumer("consumer"))
    app.on_event(KeyPressedEvent(4, 0))
    assert base.journal == []


def test_zero_size_minimises(app):
    layer = RecordingLayer()
    app.push_layer(layer)
    app.on_event(WindowResizeEvent(0, 720))
    assert app.minimized is True
    app.run_frame(Timestep(0.1))
    assert layer.updates == []
    assert app.window.updates == 1


def test_resize_sets_viewport(app, device):
    app.on_event(WindowResizeEvent(0, 0))
    app.on_event(WindowResizeEvent(800, 600))
    assert app.minimized is False
    assert ("set_viewport", 0, 0, 800, 600) in device.calls


def test_minimised_event(app):
    app.on_event(WindowMinimizedEvent(True))
    assert app.minimized is True
    app.on_event(WindowMinimizedEvent(False))
    assert app.minimized is False


def test_run_frame_updates_and_renders(app):
    layer = RecordingLayer()
    app.push_layer(layer)
    app.run_frame(Timestep(0.25))
    assert layer.updates == [0.25]
    assert layer.ui_passes == 1
    assert app.window.updates == 1


def test_run_until_closed(device):
    times = iter([0.0, 0.5, 1.25])
    application = Application(window=FakeWindow(), clock=lambda: next(times))

    class Closer(RecordingLayer):
        def on_update(self, timestep):
            super().on_update(timestep)
            if len(self.updates) == 2:
                application.window.emit(WindowCloseEvent())

    layer = Closer()
    try:
        application.push_layer(layer)
        application.run()
        assert layer.updates == pytest.approx([0.5, 0.75])
        assert application.window.updates == 2
    finally:
        application.close()