"""Layered 2D application framework: events, layers, window, camera, batched quad renderer and profiling."""

__version__ = "0.1.0"