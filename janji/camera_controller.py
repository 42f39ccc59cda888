"""Keyboard- and mouse-driven controller for an orthographic camera."""

from __future__ import annotations

import math

from janji.camera import OrthographicCamera
from janji.events import Event, EventDispatcher, MouseScrolledEvent, WindowResizeEvent
from janji.input import InputBase, Scancode, get_input
from janji.timestep import Timestep

_MIN_ZOOM = 0.25
_ZOOM_STEP = 0.25


class OrthographicCameraController:
    """Moves with WASD/arrows, optionally rotates with Q/E, zooms with the wheel."""

    def __init__(
        self,
        aspect_ratio: float,
        rotation: bool = False,
        input_backend: InputBase | None = None,
    ) -> None:
        self.aspect_ratio = float(aspect_ratio)
        self.zoom_level = 1.0
        self.camera = OrthographicCamera(*self._bounds())
        self.rotation = rotation
        self.camera_rotation = 0.0
        self.translation_speed = 5.0
        self.rotation_speed = 180.0
        self._position = [0.0, 0.0, 0.0]
        self._input = input_backend

    @property
    def camera_position(self) -> tuple[float, float, float]:
        return (self._position[0], self._position[1], self._position[2])

    def _bounds(self) -> tuple[float, float, float, float]:
        extent = self.aspect_ratio * self.zoom_level
        return (-extent, extent, -self.zoom_level, self.zoom_level)

    def _pressed(self, *codes: Scancode) -> bool:
        backend = self._input or get_input()
        return any(backend.is_key_pressed(code) for code in codes)

    def on_update(self, timestep: Timestep | float) -> None:
        """Apply held keys for one frame of length ``timestep``."""
        dt = float(timestep)
        radians = math.radians(self.camera_rotation)
        cos, sin = math.cos(radians), math.sin(radians)
        step = self.translation_speed * dt

        if self._pressed(Scancode.LEFT, Scancode.A):
            self._position[0] -= cos * step
            self._position[1] -= sin * step
        elif self._pressed(Scancode.RIGHT, Scancode.D):
            self._position[0] += cos * step
            self._position[1] += sin * step

        if self._pressed(Scancode.UP, Scancode.W):
            self._position[0] += -sin * step
            self._position[1] += cos * step
        elif self._pressed(Scancode.DOWN, Scancode.S):
            self._position[0] -= -sin * step
            self._position[1] -= cos * step

        if self.rotation:
            if self._pressed(Scancode.Q):
                self.camera_rotation += self.rotation_speed * dt
            if self._pressed(Scancode.E):
                self.camera_rotation -= self.rotation_speed * dt
            if self.camera_rotation > 180.0:
                self.camera_rotation -= 360.0
            elif self.camera_rotation <= -180.0:
                self.camera_rotation += 360.0
            self.camera.rotation = self.camera_rotation

        self.camera.position = self._position
        self.translation_speed = self.zoom_level

    def on_event(self, event: Event) -> None:
        """React to scroll and window resize events."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(MouseScrolledEvent, self._on_mouse_scrolled)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resized)

    def _on_mouse_scrolled(self, event: MouseScrolledEvent) -> bool:
        self.zoom_level = max(self.zoom_level - event.y_offset * _ZOOM_STEP, _MIN_ZOOM)
        self.camera.set_projection(*self._bounds())
        return False

    def _on_window_resized(self, event: WindowResizeEvent) -> bool:
        if event.height == 0:
            return False
        self.aspect_ratio = event.width / event.height
        self.camera.set_projection(*self._bounds())
        return False