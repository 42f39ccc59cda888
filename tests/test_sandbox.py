import pytest

from janji.application import get_application
from janji.events import KeyPressedEvent
from janji.renderer_api import RecordingDevice, get_device, set_device
from janji.sandbox import Sandbox, SandboxLayer, create_application, main
from janji.timestep import Timestep
from janji.window import WindowBase


class FakeWindow(WindowBase):
    def __init__(self):
        super().__init__()
        self.updates = 0

    def on_update(self):
        self.updates += 1

    @property
    def width(self):
        return 1280

    @property
    def height(self):
        return 720

    def close(self):
        pass


@pytest.fixture
def sandbox():
    original = get_device()
    set_device(RecordingDevice())
    app = create_application(FakeWindow())
    yield app
    app.close()
    set_device(original)


def test_sandbox_has_testing_layer(sandbox):
    assert isinstance(sandbox, Sandbox)
    assert get_application() is sandbox
    layers = list(sandbox.layer_stack)
    assert layers == [sandbox.layer]
    assert isinstance(layers[0], SandboxLayer)
    assert layers[0].name == "Testing"


def test_frames_are_counted(sandbox):
    sandbox.run_frame(Timestep(0.25))
    sandbox.run_frame(Timestep(0.5))
    assert sandbox.layer.frames == 2
    assert sandbox.layer.elapsed == pytest.approx(0.75)
    assert sandbox.window.updates == 2


def test_events_reach_layer(sandbox):
    sandbox.window.emit(KeyPressedEvent(4, 0))
    assert sandbox.layer.events_seen == 1


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--bogus"])


def test_main_rejects_zero_width():
    with pytest.raises(SystemExit):
        main(["--width", "0"])