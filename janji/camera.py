"""Orthographic camera and the 4x4 transforms it is built from."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

_DTYPE = np.float32


def _identity() -> np.ndarray:
    return np.identity(4, dtype=_DTYPE)


def _frozen(matrix: np.ndarray) -> np.ndarray:
    matrix = np.asarray(matrix, dtype=_DTYPE)
    matrix.flags.writeable = False
    return matrix


def ortho(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float = -1.0,
    far: float = 1.0,
) -> np.ndarray:
    """Orthographic projection mapping the given box onto clip space."""
    matrix = _identity()
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def translation(offset: Sequence[float]) -> np.ndarray:
    """Translation by a 2- or 3-component offset."""
    matrix = _identity()
    values = [float(v) for v in offset]
    matrix[: len(values), 3] = values
    return matrix


def rotation_z(degrees: float) -> np.ndarray:
    """Counter-clockwise rotation about the z axis."""
    radians = math.radians(degrees)
    cos, sin = math.cos(radians), math.sin(radians)
    matrix = _identity()
    matrix[0, 0] = cos
    matrix[0, 1] = -sin
    matrix[1, 0] = sin
    matrix[1, 1] = cos
    return matrix


def scaling(x: float, y: float, z: float = 1.0) -> np.ndarray:
    """Axis-aligned scale."""
    return np.diag([x, y, z, 1.0]).astype(_DTYPE)


class OrthographicCamera:
    """2D camera with position, rotation about z and zoom."""

    def __init__(self, left: float, right: float, bottom: float, top: float) -> None:
        self._position = np.zeros(3, dtype=_DTYPE)
        self._rotation = 0.0
        self._zoom = 1.0
        self._projection = _frozen(ortho(left, right, bottom, top, -1.0, 1.0))
        self._view = _frozen(_identity())
        self._view_projection = _frozen(self._projection @ self._view)

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        position = np.zeros(3, dtype=_DTYPE)
        values = [float(v) for v in value]
        position[: len(values)] = values
        self._position = position
        self._recalculate_view_matrix()

    @property
    def rotation(self) -> float:
        """Rotation about z, in degrees."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate_view_matrix()

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        self._zoom = float(value)
        self._recalculate_view_matrix()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection

    def set_projection(self, left: float, right: float, bottom: float, top: float) -> None:
        """Replace the projection box, keeping the view."""
        self._projection = _frozen(ortho(left, right, bottom, top, -1.0, 1.0))
        self._view_projection = _frozen(self._projection @ self._view)

    def _recalculate_view_matrix(self) -> None:
        transform = (
            scaling(self._zoom, self._zoom, 1.0)
            @ rotation_z(self._rotation)
            @ translation(self._position)
        )
        self._view = _frozen(np.linalg.inv(transform))
        self._view_projection = _frozen(self._projection @ self._view)