"""Tagged accounting of allocated memory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from janji.log import CORE_LOGGER_NAME, get_core_logger

_GIB = 1024 * 1024 * 1024
_MIB = 1024 * 1024
_KIB = 1024


class MemoryTag(IntEnum):
    """Category an allocation is accounted under."""

    UNKNOWN = 0
    ARRAY = 1
    DARRAY = 2
    DICT = 3
    RING_QUEUE = 4
    BST = 5
    STRING = 6
    APPLICATION = 7
    JOB = 8
    TEXTURE = 9
    MATERIAL_INSTANCE = 10
    RENDERER = 11
    GAME = 12
    TRANSFORM = 13
    ENTITY = 14
    ENTITY_NODE = 15
    SCENE = 16

    @property
    def label(self) -> str:
        """Fixed-width label used in usage reports."""
        return _LABELS[self]


_LABELS = {
    MemoryTag.UNKNOWN: "UNKNOWN    ",
    MemoryTag.ARRAY: "ARRAY      ",
    MemoryTag.DARRAY: "DARRAY     ",
    MemoryTag.DICT: "DICT       ",
    MemoryTag.RING_QUEUE: "RING_QUEUE ",
    MemoryTag.BST: "BST        ",
    MemoryTag.STRING: "STRING     ",
    MemoryTag.APPLICATION: "APPLICATION",
    MemoryTag.JOB: "JOB        ",
    MemoryTag.TEXTURE: "TEXTURE    ",
    MemoryTag.MATERIAL_INSTANCE: "MAT_INST   ",
    MemoryTag.RENDERER: "RENDERER   ",
    MemoryTag.GAME: "GAME       ",
    MemoryTag.TRANSFORM: "TRANSFORM  ",
    MemoryTag.ENTITY: "ENTITY     ",
    MemoryTag.ENTITY_NODE: "ENTITY_NODE",
    MemoryTag.SCENE: "SCENE      ",
}


def _warn(message: str) -> None:
    logger = get_core_logger() or logging.getLogger(CORE_LOGGER_NAME)
    logger.warning(message)


def _human_amount(size: int) -> tuple[float, str]:
    if size >= _GIB:
        return size / _GIB, "GiB"
    if size >= _MIB:
        return size / _MIB, "MiB"
    if size >= _KIB:
        return size / _KIB, "KiB"
    return float(size), "B"


@dataclass
class MemoryTracker:
    """Keeps running totals of allocated bytes, overall and per tag."""

    total_allocated: int = 0
    tagged_allocations: dict[MemoryTag, int] = field(
        default_factory=lambda: dict.fromkeys(MemoryTag, 0)
    )

    def allocate(self, size: int, tag: MemoryTag) -> bytearray:
        """Account ``size`` bytes under ``tag`` and return a zeroed block."""
        tag = MemoryTag(tag)
        if tag is MemoryTag.UNKNOWN:
            _warn("allocate called using MemoryTag.UNKNOWN")
        self.total_allocated += size
        self.tagged_allocations[tag] += size
        return bytearray(size)

    def free(self, block: bytearray | None, size: int, tag: MemoryTag) -> None:
        """Remove ``size`` bytes of ``tag`` from the totals and clear the block."""
        tag = MemoryTag(tag)
        if tag is MemoryTag.UNKNOWN:
            _warn("free called using MemoryTag.UNKNOWN")
        self.total_allocated -= size
        self.tagged_allocations[tag] -= size
        if isinstance(block, bytearray):
            block.clear()

    def reset(self) -> None:
        """Zero every total."""
        self.total_allocated = 0
        self.tagged_allocations = dict.fromkeys(MemoryTag, 0)

    def usage_report(self) -> str:
        """Return a multi-line report of memory in use per tag."""
        lines = ["System memory use (tagged):\n"]
        for tag in MemoryTag:
            amount, unit = _human_amount(self.tagged_allocations[tag])
            lines.append(f"  {tag.label}: {amount:.2f}{unit}\n")
        return "".join(lines)


_stats = MemoryTracker()


def initialize_memory_stats() -> None:
    """Clear the process-wide memory statistics."""
    _stats.reset()


def shutdown_memory_stats() -> None:
    """Discard the process-wide memory statistics."""
    _stats.reset()


def allocate(size: int, tag: MemoryTag) -> bytearray:
    """Allocate a zeroed block, accounted in the process-wide statistics."""
    return _stats.allocate(size, tag)


def free(block: bytearray | None, size: int, tag: MemoryTag) -> None:
    """Release a block from the process-wide statistics."""
    _stats.free(block, size, tag)


def get_memory_usage() -> str:
    """Return the usage report of the process-wide statistics."""
    return _stats.usage_report()