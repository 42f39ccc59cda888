import numpy as np
import pytest

from janji.buffer import (
    BufferElement,
    BufferLayout,
    BufferTarget,
    IndexBuffer,
    ShaderDataType,
    VertexBuffer,
    bound_buffer,
    shader_data_type_size,
)
from janji.log import CoreAssertionError


@pytest.mark.parametrize(
    ("data_type", "size"),
    [(ShaderDataType.FLOAT3, 12), (ShaderDataType.MAT4, 64), (ShaderDataType.BOOL, 1)],
)
def test_shader_data_type_size(data_type, size):
    assert shader_data_type_size(data_type) == size


def test_size_of_none_type_fails():
    with pytest.raises(CoreAssertionError):
        shader_data_type_size(ShaderDataType.NONE)


def test_element_takes_size_of_its_type():
    element = BufferElement(ShaderDataType.FLOAT4, "a_Color")
    assert element.size == shader_data_type_size(ShaderDataType.FLOAT4)
    assert element.offset == 0
    assert element.normalized is False


def test_component_count_matches_vector_width():
    assert BufferElement(ShaderDataType.FLOAT2, "a").component_count() == 2
    assert BufferElement(ShaderDataType.INT3, "b").component_count() == 3
    assert BufferElement(ShaderDataType.FLOAT, "c").component_count() == 1


def test_element_of_none_type_fails():
    with pytest.raises(CoreAssertionError):
        BufferElement(ShaderDataType.NONE, "broken")


def test_layout_offsets_are_cumulative_and_stride_is_total():
    layout = BufferLayout(
        [
            (ShaderDataType.FLOAT3, "a_Position"),
            (ShaderDataType.FLOAT4, "a_Color"),
            (ShaderDataType.FLOAT2, "a_TexCoord"),
            (ShaderDataType.FLOAT, "a_TexIndex"),
        ]
    )
    running = 0
    for element in layout:
        assert element.offset == running
        running += element.size
    assert layout.stride == running
    assert len(layout) == 4
    assert [e.name for e in layout.elements] == ["a_Position", "a_Color", "a_TexCoord", "a_TexIndex"]


def test_layout_does_not_mutate_shared_elements():
    shared = BufferElement(ShaderDataType.FLOAT3, "a_Position")
    BufferLayout([BufferElement(ShaderDataType.FLOAT4, "a_Color"), shared])
    assert shared.offset == 0


def test_empty_layout():
    layout = BufferLayout()
    assert len(layout) == 0
    assert layout.stride == 0


def test_sized_vertex_buffer_is_zeroed_and_dynamic():
    buffer = VertexBuffer(32)
    assert buffer.size == 32
    assert buffer.data == bytes(32)
    assert buffer.dynamic is True


def test_vertex_buffer_from_vertices_holds_float32_bytes():
    vertices = [-0.5, -0.5, 0.0, 0.5, -0.5, 0.0]
    buffer = VertexBuffer(vertices)
    assert buffer.data == np.asarray(vertices, dtype=np.float32).tobytes()
    assert buffer.dynamic is False


def test_set_data_round_trip_keeps_tail():
    buffer = VertexBuffer(16)
    written = buffer.set_data([1.0, 2.0])
    assert written == 8
    assert np.frombuffer(buffer.data[:8], dtype=np.float32).tolist() == [1.0, 2.0]
    assert buffer.data[8:] == bytes(8)


def test_set_data_accepts_raw_bytes():
    buffer = VertexBuffer(4)
    buffer.set_data(b"\x01\x02\x03\x04")
    assert buffer.data == b"\x01\x02\x03\x04"


def test_set_data_too_large_raises():
    buffer = VertexBuffer(4)
    with pytest.raises(ValueError):
        buffer.set_data([1.0, 2.0])


def test_negative_size_raises():
    with pytest.raises(ValueError):
        VertexBuffer(-1)


def test_vertex_buffer_bind_and_unbind():
    buffer = VertexBuffer(8)
    other = VertexBuffer(8)
    buffer.bind()
    assert bound_buffer(BufferTarget.ARRAY) == buffer.renderer_id
    other.bind()
    assert bound_buffer(BufferTarget.ARRAY) == other.renderer_id
    other.unbind()
    assert bound_buffer(BufferTarget.ARRAY) == 0


def test_index_buffer_count_and_values():
    indices = [0, 1, 2, 2, 3, 0]
    buffer = IndexBuffer(indices)
    assert buffer.count == len(indices)
    assert buffer.indices.tolist() == indices
    assert buffer.indices.dtype == np.uint32


def test_index_buffer_rejects_negative_indices():
    with pytest.raises(ValueError):
        IndexBuffer([0, -1, 2])


def test_index_buffer_bind_targets_element_array():
    buffer = IndexBuffer([0, 1, 2])
    buffer.bind()
    assert bound_buffer(BufferTarget.ELEMENT_ARRAY) == buffer.renderer_id
    buffer.unbind()
    assert bound_buffer(BufferTarget.ELEMENT_ARRAY) == 0