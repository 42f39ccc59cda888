"""Core logger setup and assertion reporting."""

from __future__ import annotations

import inspect
import logging
import sys

CORE_LOGGER_NAME = "CORE"
TRACE = 5

logging.addLevelName(TRACE, "TRACE")

_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"

_core_logger: logging.Logger | None = None
_handler: logging.Handler | None = None


class CoreAssertionError(AssertionError):
    """Raised when a core assertion does not hold."""

    def __init__(self, expression: str, message: str, file: str, line: int) -> None:
        super().__init__(_format_failure(expression, message, file, line))
        self.expression = expression
        self.message = message
        self.file = file
        self.line = line


def _format_failure(expression: str, message: str, file: str, line: int) -> str:
    return f"Assertion Failure: {expression}, Message: '{message}', in File: {file}, Line: {line}"


def initialize() -> logging.Logger:
    """Configure the core logger to write every level to standard output."""
    global _core_logger, _handler
    logger = logging.getLogger(CORE_LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(_handler)
    logger.setLevel(TRACE)
    logger.propagate = False
    _core_logger = logger
    return logger


def shutdown() -> None:
    """Detach the console handler and forget the core logger."""
    global _core_logger, _handler
    logger = logging.getLogger(CORE_LOGGER_NAME)
    if _handler is not None:
        _handler.flush()
        logger.removeHandler(_handler)
        _handler = None
    logger.propagate = True
    _core_logger = None


def get_core_logger() -> logging.Logger | None:
    """Return the core logger, or None when logging has not been initialised."""
    return _core_logger


def report_assertion_failure(expression: str, message: str, file: str, line: int) -> str:
    """Log an assertion failure at critical level and return the logged text."""
    text = _format_failure(expression, message, file, line)
    logging.getLogger(CORE_LOGGER_NAME).critical("%s", text)
    return text


def core_assert(condition: object, message: str = "") -> None:
    """Report and raise CoreAssertionError when ``condition`` is false."""
    if condition:
        return
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        info = inspect.getframeinfo(caller)
        file, line = info.filename, info.lineno
        context = info.code_context
        expression = context[0].strip() if context else repr(condition)
    else:
        file, line, expression = "<unknown>", 0, repr(condition)
    del frame, caller
    report_assertion_failure(expression, message, file, line)
    raise CoreAssertionError(expression, message, file, line)