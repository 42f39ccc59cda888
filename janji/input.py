"""Polled keyboard and mouse state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum


class Scancode(IntEnum):
    """Physical key positions, numbered as USB HID usage codes."""

    A = 4
    B = 5
    C = 6
    D = 7
    E = 8
    F = 9
    G = 10
    H = 11
    I = 12  # noqa: E741
    J = 13
    K = 14
    L = 15
    M = 16
    N = 17
    O = 18  # noqa: E741
    P = 19
    Q = 20
    R = 21
    S = 22
    T = 23
    U = 24
    V = 25
    W = 26
    X = 27
    Y = 28
    Z = 29
    RETURN = 40
    ESCAPE = 41
    BACKSPACE = 42
    TAB = 43
    SPACE = 44
    RIGHT = 79
    LEFT = 80
    DOWN = 81
    UP = 82


class InputBase(ABC):
    """Source of current keyboard and mouse state."""

    @abstractmethod
    def is_key_pressed(self, keycode: int) -> bool:
        """Return whether the key with scancode ``keycode`` is held down."""

    @abstractmethod
    def is_mouse_button_pressed(self, button: int) -> bool:
        """Return whether mouse ``button`` (1 = left) is held down."""

    @abstractmethod
    def mouse_position(self) -> tuple[float, float]:
        """Return the pointer position in window coordinates."""

    def mouse_x(self) -> float:
        """Return the pointer's horizontal position."""
        return self.mouse_position()[0]

    def mouse_y(self) -> float:
        """Return the pointer's vertical position."""
        return self.mouse_position()[1]


def _button_mask(button: int) -> int:
    if button < 1:
        raise ValueError(f"mouse buttons are numbered from 1, got {button}")
    return 1 << (button - 1)


class Input(InputBase):
    """Input state fed by the windowing backend's events."""

    def __init__(self) -> None:
        self._keys: set[int] = set()
        self._buttons = 0
        self._position = (0.0, 0.0)

    def set_key(self, keycode: int, pressed: bool) -> None:
        """Record key ``keycode`` as held or released."""
        if pressed:
            self._keys.add(int(keycode))
        else:
            self._keys.discard(int(keycode))

    def set_mouse_button(self, button: int, pressed: bool) -> None:
        """Record mouse ``button`` as held or released."""
        mask = _button_mask(button)
        if pressed:
            self._buttons |= mask
        else:
            self._buttons &= ~mask

    def set_mouse_position(self, x: float, y: float) -> None:
        """Record the pointer position."""
        self._position = (float(x), float(y))

    def is_key_pressed(self, keycode: int) -> bool:
        return int(keycode) in self._keys

    def is_mouse_button_pressed(self, button: int) -> bool:
        return bool(self._buttons & _button_mask(button))

    def mouse_position(self) -> tuple[float, float]:
        return self._position


_backend: InputBase = Input()


def set_input(backend: InputBase) -> None:
    """Replace the process-wide input source."""
    global _backend
    _backend = backend


def get_input() -> InputBase:
    """Return the process-wide input source."""
    return _backend


def is_key_pressed(keycode: int) -> bool:
    """Query the process-wide input source for a key."""
    return _backend.is_key_pressed(keycode)


def is_mouse_button_pressed(button: int) -> bool:
    """Query the process-wide input source for a mouse button."""
    return _backend.is_mouse_button_pressed(button)


def get_mouse_position() -> tuple[float, float]:
    """Return the pointer position from the process-wide input source."""
    return _backend.mouse_position()


def get_mouse_x() -> float:
    """Return the pointer's horizontal position."""
    return _backend.mouse_x()


def get_mouse_y() -> float:
    """Return the pointer's vertical position."""
    return _backend.mouse_y()