"""Frame time step."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Timestep:
    """Time elapsed between two frames, in seconds."""

    time: float = 0.0

    def __float__(self) -> float:
        return float(self.time)

    @property
    def seconds(self) -> float:
        """Elapsed time in seconds."""
        return float(self.time)

    @property
    def milliseconds(self) -> float:
        """Elapsed time in milliseconds."""
        return self.time * 1000.0

    def __mul__(self, other: float) -> float:
        return self.time * float(other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> float:
        return self.time / float(other)

    def __add__(self, other: float) -> float:
        return self.time + float(other)

    __radd__ = __add__

    def __sub__(self, other: float) -> float:
        return self.time - float(other)

    def __rsub__(self, other: float) -> float:
        return float(other) - self.time

    def __neg__(self) -> float:
        return -self.time