"""Scene submission and a batching renderer for 2D quads."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from janji import renderer_api
from janji.buffer import BufferLayout, IndexBuffer, ShaderDataType, VertexBuffer
from janji.camera import OrthographicCamera, rotation_z, scaling, translation
from janji.shader import Shader, create_shader
from janji.texture import Texture2D
from janji.vertex_array import VertexArray

MAX_QUADS = 20000
MAX_VERTICES = MAX_QUADS * 4
MAX_INDICES = MAX_QUADS * 6
MAX_TEXTURE_SLOTS = 32
TEXTURE_SHADER_PATH = "Assets/Shaders/Texture.glsl"

SPRITE_SHEET_WIDTH = 1536.0
SPRITE_SHEET_HEIGHT = 2304.0
SPRITE_WIDTH = 48.0
SPRITE_HEIGHT = 48.0

QUAD_VERTEX_DTYPE = np.dtype(
    [
        ("position", np.float32, (3,)),
        ("color", np.float32, (4,)),
        ("tex_coord", np.float32, (2,)),
        ("tex_index", np.float32),
        ("tiling_factor", np.float32),
    ]
)

_QUAD_POSITIONS = np.array(
    [
        [-0.5, -0.5, 0.0, 1.0],
        [0.5, -0.5, 0.0, 1.0],
        [0.5, 0.5, 0.0, 1.0],
        [-0.5, 0.5, 0.0, 1.0],
    ],
    dtype=np.float32,
)
_TEX_COORDS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))
_WHITE = (1.0, 1.0, 1.0, 1.0)
_QUAD_INDICES = np.array([0, 1, 2, 2, 3, 0], dtype=np.uint32)


@dataclass(frozen=True)
class QuadVertex:
    """One vertex of a batched quad."""

    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    tex_coord: tuple[float, float]
    tex_index: float
    tiling_factor: float

    @classmethod
    def from_record(cls, record: Any) -> QuadVertex:
        return cls(
            position=tuple(float(v) for v in record["position"]),
            color=tuple(float(v) for v in record["color"]),
            tex_coord=tuple(float(v) for v in record["tex_coord"]),
            tex_index=float(record["tex_index"]),
            tiling_factor=float(record["tiling_factor"]),
        )


@dataclass
class Statistics:
    """Counters of the 2D renderer since the last reset."""

    draw_calls: int = 0
    quad_count: int = 0

    def total_vertex_count(self) -> int:
        return self.quad_count * 4

    def total_index_count(self) -> int:
        return self.quad_count * 6


def _vector(value: Sequence[float], length: int, name: str) -> tuple[float, ...]:
    values = tuple(float(v) for v in value)
    if len(values) != length:
        raise ValueError(f"{name} needs {length} components, got {len(values)}")
    return values


def _position(value: Sequence[float]) -> tuple[float, float, float]:
    values = tuple(float(v) for v in value)
    if len(values) == 2:
        return (values[0], values[1], 0.0)
    if len(values) == 3:
        return values  # type: ignore[return-value]
    raise ValueError(f"position needs 2 or 3 components, got {len(values)}")


def _scale(size: Sequence[float]) -> np.ndarray:
    width, height = _vector(size, 2, "size")
    return scaling(width, height, 1.0)


def _sprite_coords(sprite_index: Sequence[float]) -> tuple[tuple[float, float], ...]:
    x, y = _vector(sprite_index, 2, "sprite_index")
    left = x * SPRITE_WIDTH / SPRITE_SHEET_WIDTH
    right = (x + 1) * SPRITE_WIDTH / SPRITE_SHEET_WIDTH
    bottom = y * SPRITE_HEIGHT / SPRITE_SHEET_HEIGHT
    top = (y + 1) * SPRITE_HEIGHT / SPRITE_SHEET_HEIGHT
    return ((left, bottom), (right, bottom), (right, top), (left, top))


class SceneRenderer:
    """Submits whole vertex arrays with a shader under one camera."""

    def __init__(self) -> None:
        self.view_projection_matrix = np.identity(4, dtype=np.float32)

    def begin_scene(self, camera: OrthographicCamera) -> None:
        self.view_projection_matrix = np.array(camera.view_projection_matrix, dtype=np.float32)

    def end_scene(self) -> None:
        """Close the scene; submissions are drawn immediately."""

    def submit(self, shader: Shader, vertex_array: VertexArray, transform: Any = None) -> int:
        """Draw ``vertex_array`` with ``shader``; return the number of indices drawn."""
        if transform is None:
            transform = np.identity(4, dtype=np.float32)
        shader.bind()
        shader.set_mat4("u_ViewProjection", self.view_projection_matrix)
        shader.set_mat4("u_Transform", transform)
        vertex_array.bind()
        return renderer_api.draw_indexed(vertex_array)


class Renderer2D:
    """Collects quads into one vertex buffer and draws them in as few calls as it can."""

    def __init__(self, shader: Shader | None = None, shader_path: str = TEXTURE_SHADER_PATH) -> None:
        self.vertex_array = VertexArray()
        self.vertex_buffer = VertexBuffer(MAX_VERTICES * QUAD_VERTEX_DTYPE.itemsize)
        self.vertex_buffer.layout = BufferLayout(
            [
                (ShaderDataType.FLOAT3, "a_Position"),
                (ShaderDataType.FLOAT4, "a_Color"),
                (ShaderDataType.FLOAT2, "a_TexCoord"),
                (ShaderDataType.FLOAT, "a_TexIndex"),
                (ShaderDataType.FLOAT, "a_TilingFactor"),
            ]
        )
        self.vertex_array.add_vertex_buffer(self.vertex_buffer)
        self._vertices: np.ndarray | None = np.zeros(MAX_VERTICES, dtype=QUAD_VERTEX_DTYPE)

        offsets = np.arange(MAX_QUADS, dtype=np.uint32)[:, None] * 4
        self.vertex_array.set_index_buffer(IndexBuffer((offsets + _QUAD_INDICES).ravel()))

        self.white_texture = Texture2D(1, 1)
        self.white_texture.set_data(b"\xff\xff\xff\xff")

        self.texture_shader = shader if shader is not None else create_shader("TextureShader", shader_path)
        self.texture_shader.bind()
        self.texture_shader.set_int_array("u_Textures", range(MAX_TEXTURE_SLOTS))

        self._texture_slots: list[Texture2D | None] = [self.white_texture] + [None] * (
            MAX_TEXTURE_SLOTS - 1
        )
        self._texture_slot_index = 1
        self._vertex_count = 0
        self._index_count = 0
        self._stats = Statistics()

    @property
    def index_count(self) -> int:
        """Indices queued in the current batch."""
        return self._index_count

    @property
    def texture_slots(self) -> tuple[Texture2D, ...]:
        """Textures used by the current batch; slot 0 is the white texture."""
        return tuple(t for t in self._texture_slots[: self._texture_slot_index] if t is not None)

    @property
    def stats(self) -> Statistics:
        """A copy of the counters."""
        return replace(self._stats)

    def vertices(self) -> list[QuadVertex]:
        """Vertices queued in the current batch."""
        storage = self._storage()
        return [QuadVertex.from_record(r) for r in storage[: self._vertex_count]]

    def _storage(self) -> np.ndarray:
        if self._vertices is None:
            raise RuntimeError("the 2D renderer has been shut down")
        return self._vertices

    def shutdown(self) -> None:
        """Release the vertex storage; the renderer cannot draw afterwards."""
        self._vertices = None
        self._vertex_count = 0
        self._index_count = 0

    def _reset_batch(self) -> None:
        self._vertex_count = 0
        self._index_count = 0
        self._texture_slot_index = 1

    def begin_scene(self, camera: OrthographicCamera) -> None:
        self._storage()
        self.texture_shader.bind()
        self.texture_shader.set_mat4("u_ViewProjection", camera.view_projection_matrix)
        self._reset_batch()

    def end_scene(self) -> None:
        """Upload the batch and draw it."""
        storage = self._storage()
        self.vertex_buffer.set_data(storage[: self._vertex_count])
        self.flush()

    def flush(self) -> None:
        """Draw the queued indices, if any."""
        if self._index_count == 0:
            return
        for slot, texture in enumerate(self._texture_slots[: self._texture_slot_index]):
            if texture is not None:
                texture.bind(slot)
        renderer_api.draw_indexed(self.vertex_array, self._index_count)
        self._stats.draw_calls += 1

    def _flush_and_reset(self) -> None:
        self.end_scene()
        self._reset_batch()

    def _reserve(self) -> None:
        self._storage()
        if self._index_count >= MAX_INDICES:
            self._flush_and_reset()

    def _texture_index(self, texture: Texture2D) -> float:
        for slot in range(1, self._texture_slot_index):
            if self._texture_slots[slot] == texture:
                return float(slot)
        if self._texture_slot_index >= MAX_TEXTURE_SLOTS:
            self._flush_and_reset()
        slot = self._texture_slot_index
        self._texture_slots[slot] = texture
        self._texture_slot_index += 1
        return float(slot)

    def _write_quad(
        self,
        transform: np.ndarray,
        color: Sequence[float],
        tex_coords: Iterable[Sequence[float]],
        tex_index: float,
        tiling_factor: float,
    ) -> None:
        storage = self._storage()
        corners = (transform @ _QUAD_POSITIONS.T).T[:, :3]
        block = storage[self._vertex_count : self._vertex_count + 4]
        block["position"] = corners
        block["color"] = color
        block["tex_coord"] = np.array(list(tex_coords), dtype=np.float32)
        block["tex_index"] = tex_index
        block["tiling_factor"] = tiling_factor
        self._vertex_count += 4
        self._index_count += 6
        self._stats.quad_count += 1

    def _textured(
        self,
        transform_of: Any,
        texture: Texture2D,
        tiling_factor: float,
        tint_color: Sequence[float],
        tex_coords: Iterable[Sequence[float]],
    ) -> None:
        tint = _vector(tint_color, 4, "tint_color")
        self._reserve()
        index = self._texture_index(texture)
        self._write_quad(transform_of(), tint, tex_coords, index, float(tiling_factor))

    def draw_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        color: Sequence[float] | None = None,
        texture: Texture2D | None = None,
        tiling_factor: float = 1.0,
        tint_color: Sequence[float] = _WHITE,
        sprite_index: Sequence[float] | None = None,
    ) -> None:
        """Queue an axis-aligned quad, filled with ``color`` or with ``texture``."""
        pos = _position(position)
        if texture is None:
            if color is None:
                raise TypeError("draw_quad needs a color or a texture")
            if sprite_index is not None:
                raise TypeError("sprite_index needs a texture")
            fill = _vector(color, 4, "color")
            self._reserve()
            self._write_quad(translation(pos) @ _scale(size), fill, _TEX_COORDS, 0.0, 1.0)
            return
        if color is not None:
            raise TypeError("a textured quad takes tint_color, not color")
        coords = _TEX_COORDS if sprite_index is None else _sprite_coords(sprite_index)
        self._textured(
            lambda: translation(pos) @ _scale(size), texture, tiling_factor, tint_color, coords
        )

    def draw_rotated_quad(
        self,
        position: Sequence[float],
        size: Sequence[float],
        rotation: float,
        color: Sequence[float] | None = None,
        texture: Texture2D | None = None,
        tiling_factor: float = 1.0,
        tint_color: Sequence[float] = _WHITE,
    ) -> None:
        """Queue a quad rotated by ``rotation`` degrees about its centre."""
        pos = _position(position)

        def transform() -> np.ndarray:
            return translation(pos) @ rotation_z(float(rotation)) @ _scale(size)

        if texture is None:
            if color is None:
                raise TypeError("draw_rotated_quad needs a color or a texture")
            fill = _vector(color, 4, "color")
            self._reserve()
            self._write_quad(transform(), fill, _TEX_COORDS, 0.0, 1.0)
            return
        if color is not None:
            raise TypeError("a textured quad takes tint_color, not color")
        self._textured(transform, texture, tiling_factor, tint_color, _TEX_COORDS)

    def reset_stats(self) -> None:
        self._stats = Statistics()


_scene_renderer = SceneRenderer()
_renderer_2d: Renderer2D | None = None


def init() -> None:
    """Prepare the graphics device and create the 2D renderer."""
    global _renderer_2d
    renderer_api.init()
    _renderer_2d = Renderer2D()


def shutdown() -> None:
    """Shut the 2D renderer down."""
    global _renderer_2d
    if _renderer_2d is not None:
        _renderer_2d.shutdown()
    _renderer_2d = None


def on_window_resize(width: int, height: int) -> None:
    renderer_api.set_viewport(0, 0, width, height)


def get_renderer() -> SceneRenderer:
    return _scene_renderer


def get_renderer_2d() -> Renderer2D:
    """Return the 2D renderer created by ``init``."""
    if _renderer_2d is None:
        raise RuntimeError("the renderer has not been initialised")
    return _renderer_2d