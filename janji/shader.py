"""Shader programs, their sources and uniforms, and a library of named shaders."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

import numpy as np

from janji.log import CORE_LOGGER_NAME, core_assert, get_core_logger

TYPE_TOKEN = "#type"
_LINE_BREAKS = "\r\n"


def _logger() -> logging.Logger:
    return get_core_logger() or logging.getLogger(CORE_LOGGER_NAME)


class ShaderType(Enum):
    """Pipeline stage a shader source belongs to."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"


def shader_type_from_string(type_name: str) -> ShaderType:
    """Stage named by ``type_name``; ``pixel`` is an alias of ``fragment``."""
    if type_name == "vertex":
        return ShaderType.VERTEX
    if type_name in ("fragment", "pixel"):
        return ShaderType.FRAGMENT
    core_assert(False, "Unknown type")
    raise AssertionError("unreachable")


def read_file(filepath: str | Path) -> str:
    """Return the whole file as text, or an empty string after logging an error."""
    try:
        with open(filepath, "rb") as handle:
            return handle.read().decode("utf-8")
    except OSError:
        _logger().error("Could not open file '%s'", filepath)
    except UnicodeDecodeError:
        _logger().error("Could not read from file '%s'", filepath)
    return ""


def _find_first_of(source: str, chars: str, start: int) -> int:
    return next((i for i in range(start, len(source)) if source[i] in chars), -1)


def _find_first_not_of(source: str, chars: str, start: int) -> int:
    return next((i for i in range(start, len(source)) if source[i] not in chars), -1)


def preprocess(source: str) -> dict[ShaderType, str]:
    """Split a combined source into stages marked by ``#type <stage>`` lines."""
    sources: dict[ShaderType, str] = {}
    pos = source.find(TYPE_TOKEN)
    while pos != -1:
        eol = _find_first_of(source, _LINE_BREAKS, pos)
        core_assert(eol != -1, "Syntax error")

        begin = pos + len(TYPE_TOKEN) + 1
        stage = shader_type_from_string(source[begin:eol])

        next_line = _find_first_not_of(source, _LINE_BREAKS, eol)
        core_assert(next_line != -1, "Syntax error")

        pos = source.find(TYPE_TOKEN, next_line)
        sources[stage] = source[next_line:] if pos == -1 else source[next_line:pos]
    return sources


_program_ids = itertools.count(1)
_bound_program = 0


def bound_program() -> int:
    """Renderer id of the program in use, 0 when none."""
    return _bound_program


def _vector(value: Sequence[float], length: int, name: str) -> tuple[float, ...]:
    values = tuple(float(v) for v in value)
    if len(values) != length:
        raise ValueError(f"uniform '{name}' needs {length} components, got {len(values)}")
    return values


def _matrix(value: Any, size: int, name: str) -> np.ndarray:
    matrix = np.array(value, dtype=np.float32)
    if matrix.shape != (size, size):
        raise ValueError(f"uniform '{name}' needs a {size}x{size} matrix, got {matrix.shape}")
    matrix.flags.writeable = False
    return matrix


class Shader:
    """A named program made of a vertex and a fragment stage, with its uniforms."""

    def __init__(self, name: str, sources: Mapping[ShaderType, str]) -> None:
        self.name = name
        self._sources: dict[ShaderType, str] = {}
        self._uniforms: dict[str, Any] = {}
        self.renderer_id = 0
        self._compile(sources)

    def _compile(self, sources: Mapping[ShaderType, str]) -> None:
        core_assert(len(sources) <= 2, "We only support two shaders for now")
        for stage, text in sources.items():
            self._sources[ShaderType(stage)] = str(text)
        self.renderer_id = next(_program_ids)

    @property
    def sources(self) -> Mapping[ShaderType, str]:
        """Source text of each stage."""
        return MappingProxyType(self._sources)

    @property
    def uniforms(self) -> Mapping[str, Any]:
        """Values last set on each uniform."""
        return MappingProxyType(self._uniforms)

    def bind(self) -> None:
        global _bound_program
        _bound_program = self.renderer_id

    def unbind(self) -> None:
        global _bound_program
        _bound_program = 0

    def set_int(self, name: str, value: int) -> None:
        self._uniforms[name] = int(value)

    def set_int_array(self, name: str, values: Sequence[int]) -> None:
        self._uniforms[name] = tuple(int(v) for v in values)

    def set_float(self, name: str, value: float) -> None:
        self._uniforms[name] = float(value)

    def set_float2(self, name: str, value: Sequence[float]) -> None:
        self._uniforms[name] = _vector(value, 2, name)

    def set_float3(self, name: str, value: Sequence[float]) -> None:
        self._uniforms[name] = _vector(value, 3, name)

    def set_float4(self, name: str, value: Sequence[float]) -> None:
        self._uniforms[name] = _vector(value, 4, name)

    def set_mat3(self, name: str, value: Any) -> None:
        self._uniforms[name] = _matrix(value, 3, name)

    def set_mat4(self, name: str, value: Any) -> None:
        self._uniforms[name] = _matrix(value, 4, name)

    def __repr__(self) -> str:
        return f"<Shader {self.name!r} id={self.renderer_id}>"


def create_shader(name: str, filepath: str | Path) -> Shader:
    """Build a shader from one file holding every stage after ``#type`` lines."""
    return Shader(name, preprocess(read_file(filepath)))


def create_shader_from_files(
    name: str, vertex_filepath: str | Path, fragment_filepath: str | Path
) -> Shader:
    """Build a shader from a vertex file and a fragment file."""
    return Shader(
        name,
        {
            ShaderType.VERTEX: read_file(vertex_filepath),
            ShaderType.FRAGMENT: read_file(fragment_filepath),
        },
    )


def create_shader_with_source(name: str, vertex_src: str, fragment_src: str) -> Shader:
    """Build a shader from vertex and fragment source text."""
    return Shader(name, {ShaderType.VERTEX: vertex_src, ShaderType.FRAGMENT: fragment_src})


class ShaderLibrary:
    """Shaders looked up by name."""

    def __init__(self) -> None:
        self._shaders: dict[str, Shader] = {}

    def add(self, shader: Shader) -> None:
        """Register ``shader`` under its name, which must be new."""
        core_assert(not self.exists(shader.name), "Shader already exists!")
        self._shaders[shader.name] = shader

    def load(self, name: str, *args: str | Path) -> Shader:
        """Load and register a shader from one combined file or from two stage files."""
        if len(args) == 1:
            shader = create_shader(name, args[0])
        elif len(args) == 2:
            shader = create_shader_from_files(name, args[0], args[1])
        else:
            raise TypeError(f"load takes one or two file paths, got {len(args)}")
        self.add(shader)
        return shader

    def get(self, name: str) -> Shader:
        """Return the shader registered as ``name``."""
        core_assert(self.exists(name), "Shader not found!")
        return self._shaders[name]

    def exists(self, name: str) -> bool:
        return name in self._shaders

    def __contains__(self, name: object) -> bool:
        return name in self._shaders

    def __len__(self) -> int:
        return len(self._shaders)