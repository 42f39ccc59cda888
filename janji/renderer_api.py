"""Low-level drawing commands and the graphics context of a window."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Sequence
from typing import Any

from janji.log import CORE_LOGGER_NAME, core_assert, get_core_logger


def _logger() -> logging.Logger:
    return get_core_logger() or logging.getLogger(CORE_LOGGER_NAME)


class GraphicsDevice(ABC):
    """The handful of graphics operations the renderer needs."""

    @abstractmethod
    def enable_blending(self) -> None:
        """Enable source-alpha blending."""

    @abstractmethod
    def enable_depth_test(self) -> None:
        """Enable depth testing."""

    @abstractmethod
    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        """Set the drawable rectangle."""

    @abstractmethod
    def set_clear_color(self, r: float, g: float, b: float, a: float) -> None:
        """Set the colour used by clear."""

    @abstractmethod
    def clear(self) -> None:
        """Clear colour and depth."""

    @abstractmethod
    def draw_triangles(self, count: int) -> None:
        """Draw ``count`` indices of the bound index buffer as triangles."""

    @abstractmethod
    def unbind_texture(self) -> None:
        """Unbind the 2D texture target."""

    def info(self) -> dict[str, str]:
        """Describe the device; empty when there is nothing to report."""
        return {}


class RecordingDevice(GraphicsDevice):
    """Headless device that keeps a log of the commands it receives."""

    def __init__(self, max_calls: int | None = None) -> None:
        self.calls: deque[tuple[Any, ...]] = deque(maxlen=max_calls)

    def enable_blending(self) -> None:
        self.calls.append(("enable_blending",))

    def enable_depth_test(self) -> None:
        self.calls.append(("enable_depth_test",))

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.calls.append(("set_viewport", x, y, width, height))

    def set_clear_color(self, r: float, g: float, b: float, a: float) -> None:
        self.calls.append(("set_clear_color", r, g, b, a))

    def clear(self) -> None:
        self.calls.append(("clear",))

    def draw_triangles(self, count: int) -> None:
        self.calls.append(("draw_triangles", count))

    def unbind_texture(self) -> None:
        self.calls.append(("unbind_texture",))

    def info(self) -> dict[str, str]:
        return {"vendor": "none", "renderer": "recording", "version": "0"}


class _OpenGLDevice(GraphicsDevice):
    """Device issuing OpenGL calls in the current context."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def enable_blending(self) -> None:
        gl = self._gl
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

    def enable_depth_test(self) -> None:
        self._gl.glEnable(self._gl.GL_DEPTH_TEST)

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self._gl.glViewport(int(x), int(y), int(width), int(height))

    def set_clear_color(self, r: float, g: float, b: float, a: float) -> None:
        self._gl.glClearColor(r, g, b, a)

    def clear(self) -> None:
        gl = self._gl
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def draw_triangles(self, count: int) -> None:
        gl = self._gl
        gl.glDrawElements(gl.GL_TRIANGLES, int(count), gl.GL_UNSIGNED_INT, None)

    def unbind_texture(self) -> None:
        self._gl.glBindTexture(self._gl.GL_TEXTURE_2D, 0)

    def info(self) -> dict[str, str]:
        from pyglet.gl import gl_info

        return {
            "vendor": str(gl_info.get_vendor()),
            "renderer": str(gl_info.get_renderer()),
            "version": str(gl_info.get_version()),
        }


_device: GraphicsDevice = RecordingDevice(max_calls=4096)


def set_device(device: GraphicsDevice) -> None:
    """Make ``device`` the target of every drawing command."""
    global _device
    _device = device


def get_device() -> GraphicsDevice:
    """Return the device drawing commands go to."""
    return _device


class RendererAPI:
    """Drawing commands sent to a device (the current one unless given)."""

    def __init__(self, device: GraphicsDevice | None = None) -> None:
        self._device = device

    @property
    def device(self) -> GraphicsDevice:
        return self._device or get_device()

    def init(self) -> None:
        """Enable alpha blending and depth testing."""
        self.device.enable_blending()
        self.device.enable_depth_test()

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.device.set_viewport(x, y, width, height)

    def set_clear_color(self, color: Sequence[float]) -> None:
        r, g, b, a = (float(c) for c in color)
        self.device.set_clear_color(r, g, b, a)

    def clear(self) -> None:
        self.device.clear()

    def draw_indexed(self, vertex_array: Any, index_count: int = 0) -> int:
        """Draw ``index_count`` indices, or the whole index buffer when 0."""
        count = index_count or vertex_array.index_buffer.count
        self.device.draw_triangles(count)
        self.device.unbind_texture()
        return count


_api = RendererAPI()


def init() -> None:
    """Prepare the current device for rendering."""
    _api.init()


def set_viewport(x: int, y: int, width: int, height: int) -> None:
    _api.set_viewport(x, y, width, height)


def set_clear_color(color: Sequence[float]) -> None:
    _api.set_clear_color(color)


def clear() -> None:
    _api.clear()


def draw_indexed(vertex_array: Any, count: int = 0) -> int:
    """Draw indexed triangles of ``vertex_array`` on the current device."""
    return _api.draw_indexed(vertex_array, count)


class RendererContext:
    """Graphics context of a native window; installs its device as current.

    The window must offer ``switch_to()``, ``set_vsync(bool)``,
    ``set_visible(bool)`` and ``flip()``.
    """

    def __init__(self, window: Any, device: GraphicsDevice | None = None) -> None:
        core_assert(window is not None, "Window is nullptr!")
        self.window = window
        window.switch_to()
        self.device = device if device is not None else _OpenGLDevice()
        self.opengl_context = getattr(window, "context", None)
        set_device(self.device)

        logger = _logger()
        details = self.device.info()
        logger.info("Graphics Info:")
        for key in ("vendor", "renderer", "version"):
            if key in details:
                logger.info("  %s: %s", key.capitalize(), details[key])

        window.set_vsync(True)
        window.set_visible(True)

    def swap_buffers(self) -> None:
        """Present the back buffer."""
        self.window.flip()