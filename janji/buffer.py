"""Vertex and index buffers and the layout of the attributes they hold."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Union

import numpy as np

from janji.log import core_assert


class ShaderDataType(Enum):
    """Type of one vertex attribute as seen by a shader."""

    NONE = 0
    FLOAT = auto()
    FLOAT2 = auto()
    FLOAT3 = auto()
    FLOAT4 = auto()
    MAT3 = auto()
    MAT4 = auto()
    INT = auto()
    INT2 = auto()
    INT3 = auto()
    INT4 = auto()
    BOOL = auto()


_SIZES = {
    ShaderDataType.FLOAT: 4,
    ShaderDataType.FLOAT2: 4 * 2,
    ShaderDataType.FLOAT3: 4 * 3,
    ShaderDataType.FLOAT4: 4 * 4,
    ShaderDataType.MAT3: 4 * 3 * 3,
    ShaderDataType.MAT4: 4 * 4 * 4,
    ShaderDataType.INT: 4,
    ShaderDataType.INT2: 4 * 2,
    ShaderDataType.INT3: 4 * 3,
    ShaderDataType.INT4: 4 * 4,
    ShaderDataType.BOOL: 1,
}

_COMPONENTS = {
    ShaderDataType.FLOAT: 1,
    ShaderDataType.FLOAT2: 2,
    ShaderDataType.FLOAT3: 3,
    ShaderDataType.FLOAT4: 4,
    ShaderDataType.MAT3: 3,
    ShaderDataType.MAT4: 4,
    ShaderDataType.INT: 1,
    ShaderDataType.INT2: 2,
    ShaderDataType.INT3: 3,
    ShaderDataType.INT4: 4,
    ShaderDataType.BOOL: 1,
}


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of one attribute of ``data_type``."""
    size = _SIZES.get(data_type)
    core_assert(size is not None, "Undefined Shader Data Type")
    return size


class BufferTarget(Enum):
    """Binding point a buffer is bound to."""

    ARRAY = "array"
    ELEMENT_ARRAY = "element_array"


_bindings: dict[BufferTarget, int] = dict.fromkeys(BufferTarget, 0)
_buffer_ids = itertools.count(1)


def bound_buffer(target: BufferTarget) -> int:
    """Renderer id of the buffer bound to ``target``, 0 when none."""
    return _bindings[target]


@dataclass
class BufferElement:
    """One named attribute of a vertex."""

    data_type: ShaderDataType
    name: str
    normalized: bool = False
    size: int = field(init=False)
    offset: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.size = shader_data_type_size(self.data_type)

    def component_count(self) -> int:
        """Number of scalar components (rows, for matrices)."""
        count = _COMPONENTS.get(self.data_type)
        core_assert(count is not None, "Undefined Shader Data Type")
        return count


ElementSpec = Union[BufferElement, Sequence]


class BufferLayout:
    """Ordered attributes of a vertex with their byte offsets and stride."""

    def __init__(self, elements: Iterable[ElementSpec] = ()) -> None:
        self._elements = [
            replace(spec) if isinstance(spec, BufferElement) else BufferElement(*spec)
            for spec in elements
        ]
        offset = 0
        for element in self._elements:
            element.offset = offset
            offset += element.size
        self._stride = offset

    @property
    def stride(self) -> int:
        """Size in bytes of one whole vertex."""
        return self._stride

    @property
    def elements(self) -> tuple[BufferElement, ...]:
        return tuple(self._elements)

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        names = ", ".join(element.name for element in self._elements)
        return f"<BufferLayout [{names}] stride={self._stride}>"


def _to_bytes(data: object) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, np.ndarray):
        return data.tobytes()
    return np.asarray(data, dtype=np.float32).tobytes()


class VertexBuffer:
    """Vertex data store: a zeroed dynamic buffer of a byte size, or static vertices."""

    def __init__(self, source: int | Sequence[float] | np.ndarray) -> None:
        self.renderer_id = next(_buffer_ids)
        if isinstance(source, (int, np.integer)):
            if source < 0:
                raise ValueError(f"buffer size must not be negative, got {source}")
            self._storage = bytearray(int(source))
            self.dynamic = True
        else:
            self._storage = bytearray(_to_bytes(source))
            self.dynamic = False
        self.layout = BufferLayout()
        self.bind()

    @property
    def size(self) -> int:
        """Capacity in bytes."""
        return len(self._storage)

    @property
    def data(self) -> bytes:
        """Current contents."""
        return bytes(self._storage)

    def set_data(self, data: object) -> int:
        """Overwrite the start of the buffer with ``data``; return bytes written."""
        payload = _to_bytes(data)
        if len(payload) > len(self._storage):
            raise ValueError(
                f"{len(payload)} bytes do not fit in a buffer of {len(self._storage)} bytes"
            )
        self.bind()
        self._storage[: len(payload)] = payload
        return len(payload)

    def bind(self) -> None:
        _bindings[BufferTarget.ARRAY] = self.renderer_id

    def unbind(self) -> None:
        _bindings[BufferTarget.ARRAY] = 0


class IndexBuffer:
    """Unsigned 32-bit indices into a vertex buffer."""

    def __init__(self, indices: Iterable[int] | np.ndarray) -> None:
        values = np.asarray(list(indices) if not isinstance(indices, np.ndarray) else indices)
        values = values.astype(np.int64).ravel()
        if values.size and values.min() < 0:
            raise ValueError("indices must not be negative")
        self._indices = values.astype(np.uint32)
        self._indices.flags.writeable = False
        self.renderer_id = next(_buffer_ids)

    @property
    def count(self) -> int:
        """Number of indices."""
        return int(self._indices.size)

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    def bind(self) -> None:
        _bindings[BufferTarget.ELEMENT_ARRAY] = self.renderer_id

    def unbind(self) -> None:
        _bindings[BufferTarget.ELEMENT_ARRAY] = 0