"""Sandbox application and the command that starts it."""

from __future__ import annotations

import argparse
import logging

from janji.application import Application
from janji.events import Event
from janji.layer import Layer
from janji.log import CORE_LOGGER_NAME, TRACE, get_core_logger
from janji.timestep import Timestep
from janji.window import WindowBase, WindowSettings, create_window


class SandboxLayer(Layer):
    """Layer that keeps count of frames, elapsed time and events."""

    def __init__(self) -> None:
        super().__init__("Testing")
        self.frames = 0
        self.elapsed = 0.0
        self.events_seen = 0

    def on_update(self, timestep: Timestep) -> None:
        self.frames += 1
        self.elapsed += float(timestep)

    def on_event(self, event: Event) -> None:
        self.events_seen += 1
        logger = get_core_logger() or logging.getLogger(CORE_LOGGER_NAME)
        logger.log(TRACE, "%s %s", self.name, event)


class Sandbox(Application):
    """Application with a single sandbox layer."""

    def __init__(self, window: WindowBase | None = None) -> None:
        super().__init__(window)
        self.layer = SandboxLayer()
        self.push_layer(self.layer)


def create_application(window: WindowBase | None = None) -> Sandbox:
    return Sandbox(window)


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def main(argv: list[str] | None = None) -> int:
    """Open a window and run the sandbox until it is closed."""
    defaults = WindowSettings()
    parser = argparse.ArgumentParser(prog="janji", description="Run the sandbox application.")
    parser.add_argument("--title", default=defaults.title)
    parser.add_argument("--width", type=_positive_int, default=defaults.width)
    parser.add_argument("--height", type=_positive_int, default=defaults.height)
    args = parser.parse_args(argv)

    window = create_window(WindowSettings(args.title, args.width, args.height))
    app = create_application(window)
    try:
        app.run()
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())