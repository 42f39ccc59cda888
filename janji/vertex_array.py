"""Vertex arrays: vertex buffers, their attribute bindings and an index buffer."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum

from janji.buffer import IndexBuffer, ShaderDataType, VertexBuffer
from janji.log import core_assert


class BaseType(Enum):
    """Scalar type a shader attribute is made of."""

    FLOAT = "float"
    INT = "int"
    BOOL = "bool"


_BASE_TYPES = {
    ShaderDataType.FLOAT: BaseType.FLOAT,
    ShaderDataType.FLOAT2: BaseType.FLOAT,
    ShaderDataType.FLOAT3: BaseType.FLOAT,
    ShaderDataType.FLOAT4: BaseType.FLOAT,
    ShaderDataType.MAT3: BaseType.FLOAT,
    ShaderDataType.MAT4: BaseType.FLOAT,
    ShaderDataType.INT: BaseType.INT,
    ShaderDataType.INT2: BaseType.INT,
    ShaderDataType.INT3: BaseType.INT,
    ShaderDataType.INT4: BaseType.INT,
    ShaderDataType.BOOL: BaseType.BOOL,
}

_MATRIX_TYPES = frozenset({ShaderDataType.MAT3, ShaderDataType.MAT4})
_FLOAT_SIZE = 4


def shader_data_type_to_base_type(data_type: ShaderDataType) -> BaseType:
    """Scalar type of ``data_type``."""
    base = _BASE_TYPES.get(data_type)
    core_assert(base is not None, "Undefined Shader Data Type")
    return base


@dataclass(frozen=True)
class VertexAttribute:
    """One enabled attribute slot of a vertex array."""

    index: int
    component_count: int
    base_type: BaseType
    normalized: bool
    stride: int
    offset: int
    divisor: int = 0


_array_ids = itertools.count(1)
_bound = 0


def bound_vertex_array() -> int:
    """Renderer id of the bound vertex array, 0 when none."""
    return _bound


class VertexArray:
    """Ties vertex buffers' layouts to attribute slots and holds an index buffer."""

    def __init__(self) -> None:
        self.renderer_id = next(_array_ids)
        self._vertex_buffers: list[VertexBuffer] = []
        self._attributes: list[VertexAttribute] = []
        self._index_buffer: IndexBuffer | None = None

    @property
    def vertex_buffers(self) -> tuple[VertexBuffer, ...]:
        return tuple(self._vertex_buffers)

    @property
    def index_buffer(self) -> IndexBuffer | None:
        return self._index_buffer

    @property
    def attributes(self) -> tuple[VertexAttribute, ...]:
        return tuple(self._attributes)

    def bind(self) -> None:
        global _bound
        _bound = self.renderer_id

    def unbind(self) -> None:
        global _bound
        _bound = 0

    def add_vertex_buffer(self, vertex_buffer: VertexBuffer) -> None:
        """Enable one attribute slot per element (per row, for matrices)."""
        layout = vertex_buffer.layout
        core_assert(len(layout) > 0, "Vertex Buffer has no layout!")

        self.bind()
        vertex_buffer.bind()

        for element in layout:
            base = shader_data_type_to_base_type(element.data_type)
            count = element.component_count()
            if element.data_type in _MATRIX_TYPES:
                # Matrix rows are laid out from the start of the vertex, one slot each.
                for row in range(count):
                    self._attributes.append(
                        VertexAttribute(
                            index=len(self._attributes),
                            component_count=count,
                            base_type=base,
                            normalized=element.normalized,
                            stride=layout.stride,
                            offset=_FLOAT_SIZE * count * row,
                            divisor=1,
                        )
                    )
            else:
                self._attributes.append(
                    VertexAttribute(
                        index=len(self._attributes),
                        component_count=count,
                        base_type=base,
                        normalized=element.normalized,
                        stride=layout.stride,
                        offset=element.offset,
                    )
                )

        self._vertex_buffers.append(vertex_buffer)

    def set_index_buffer(self, index_buffer: IndexBuffer) -> None:
        """Attach the indices drawn from this array."""
        self.bind()
        index_buffer.bind()
        self._index_buffer = index_buffer