import pytest

from janji import input as core_input
from janji.input import Input, InputBase, Scancode


@pytest.fixture
def installed():
    previous = core_input.get_input()
    backend = Input()
    core_input.set_input(backend)
    yield backend
    core_input.set_input(previous)


def test_scancodes_follow_usb_hid_numbering():
    state = Input()
    state.set_key(Scancode.A, True)
    state.set_key(Scancode.RIGHT, True)
    state.set_key(Scancode.UP, True)
    assert state.is_key_pressed(4)
    assert state.is_key_pressed(79)
    assert state.is_key_pressed(82)
    assert not state.is_key_pressed(5)


def test_input_base_is_abstract():
    with pytest.raises(TypeError):
        InputBase()


def test_key_press_and_release():
    state = Input()
    assert state.is_key_pressed(Scancode.W) is False
    state.set_key(Scancode.W, True)
    assert state.is_key_pressed(Scancode.W) is True
    assert state.is_key_pressed(Scancode.S) is False
    state.set_key(Scancode.W, False)
    assert state.is_key_pressed(Scancode.W) is False


def test_mouse_buttons_are_independent():
    state = Input()
    state.set_mouse_button(1, True)
    state.set_mouse_button(3, True)
    assert state.is_mouse_button_pressed(1)
    assert not state.is_mouse_button_pressed(2)
    assert state.is_mouse_button_pressed(3)
    state.set_mouse_button(1, False)
    assert not state.is_mouse_button_pressed(1)
    assert state.is_mouse_button_pressed(3)


def test_mouse_button_zero_rejected():
    with pytest.raises(ValueError):
        Input().is_mouse_button_pressed(0)


def test_mouse_position_round_trip():
    state = Input()
    state.set_mouse_position(12.5, 40)
    assert state.mouse_position() == (12.5, 40.0)
    assert state.mouse_x() == 12.5
    assert state.mouse_y() == 40.0


def test_module_functions_use_installed_backend(installed):
    installed.set_key(Scancode.A, True)
    installed.set_mouse_button(2, True)
    installed.set_mouse_position(3.0, 7.0)
    assert core_input.get_input() is installed
    assert core_input.is_key_pressed(Scancode.A)
    assert core_input.is_mouse_button_pressed(2)
    assert core_input.get_mouse_position() == (3.0, 7.0)
    assert core_input.get_mouse_x() == 3.0
    assert core_input.get_mouse_y() == 7.0