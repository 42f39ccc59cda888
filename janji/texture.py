"""Two-dimensional textures held as RGBA pixel arrays."""

from __future__ import annotations

import itertools
from enum import Enum
from pathlib import Path

import numpy as np

from janji.log import core_assert


class PixelFormat(Enum):
    """Pixel layout of a texture's storage or of its upload data."""

    RGB8 = "rgb8"
    RGBA8 = "rgba8"
    RGB = "rgb"
    RGBA = "rgba"


_texture_ids = itertools.count(1)
_bound_units: dict[int, int] = {}


def bound_texture(slot: int = 0) -> int:
    """Renderer id of the texture bound to unit ``slot``, 0 when none."""
    return _bound_units.get(slot, 0)


class Texture2D:
    """A width-by-height texture; pixel rows start at the bottom of the image."""

    def __init__(
        self,
        width: int,
        height: int,
        path: str = "",
        internal_format: PixelFormat = PixelFormat.RGBA8,
        data_format: PixelFormat = PixelFormat.RGBA,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"texture size must not be negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.path = path
        self.internal_format = internal_format
        self.data_format = data_format
        self.renderer_id = next(_texture_ids)
        self._pixels = np.zeros((self.height, self.width, self.bytes_per_pixel), dtype=np.uint8)

    @property
    def bytes_per_pixel(self) -> int:
        return 4 if self.data_format is PixelFormat.RGBA else 3

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the pixel data, shape (height, width, channels)."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def set_data(self, data: bytes | bytearray | memoryview | np.ndarray) -> None:
        """Replace the whole texture's pixels with ``data``."""
        if isinstance(data, np.ndarray):
            raw = np.ascontiguousarray(data, dtype=np.uint8).tobytes()
        else:
            raw = bytes(data)
        expected = self.width * self.height * self.bytes_per_pixel
        core_assert(len(raw) == expected, "Data must be entire texture!")
        self._pixels = (
            np.frombuffer(raw, dtype=np.uint8)
            .reshape(self.height, self.width, self.bytes_per_pixel)
            .copy()
        )

    def bind(self, slot: int = 0) -> None:
        """Bind the texture to texture unit ``slot``."""
        _bound_units[int(slot)] = self.renderer_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Texture2D):
            return NotImplemented
        return self.renderer_id == other.renderer_id

    def __hash__(self) -> int:
        return hash(self.renderer_id)

    def __repr__(self) -> str:
        source = f" {self.path!r}" if self.path else ""
        return f"<Texture2D{source} {self.width}x{self.height} id={self.renderer_id}>"


def load_texture(path: str | Path) -> Texture2D:
    """Load an image file as an RGBA texture, flipped so row 0 is the bottom."""
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(path) as image:
            rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError):
        rgba = None
    core_assert(rgba is not None, "Failed to load image!")

    height, width = rgba.shape[:2]
    texture = Texture2D(
        width,
        height,
        path=str(path),
        internal_format=PixelFormat.RGB8,
        data_format=PixelFormat.RGBA,
    )
    texture.set_data(rgba[::-1])
    return texture