"""Chrome-trace style profiling sessions and scoped timers."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from typing import TextIO

from janji.log import get_core_logger

_HEADER = '{"otherData": {},"traceEvents":[{}'
_FOOTER = "]}"


@dataclass(frozen=True)
class ProfileResult:
    """One timed scope: start in microseconds, elapsed whole microseconds."""

    name: str
    start: float
    elapsed_time: int
    thread_id: int


class Instrumentor:
    """Writes profile results of one session at a time to a JSON trace file."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._session: str | None = None
        self._stream: TextIO | None = None

    @property
    def session_name(self) -> str | None:
        """Name of the open session, or None."""
        return self._session

    def begin_session(self, name: str, filepath: str = "results.json") -> None:
        """Open a trace file; an already open session is closed first."""
        with self._lock:
            if self._session is not None:
                logger = get_core_logger()
                if logger is not None:
                    logger.error(
                        "Instrumentor.begin_session('%s') when session '%s' already open.",
                        name,
                        self._session,
                    )
                self._internal_end_session()
            try:
                self._stream = open(filepath, "w", encoding="utf-8")
            except OSError:
                logger = get_core_logger()
                if logger is not None:
                    logger.error("Instrumentor could not open results file '%s'.", filepath)
                return
            self._session = name
            self._stream.write(_HEADER)
            self._stream.flush()

    def end_session(self) -> None:
        """Close the open session, if any, completing its trace file."""
        with self._lock:
            self._internal_end_session()

    def write_profile(self, result: ProfileResult) -> None:
        """Append one result to the open session; ignored without a session."""
        entry = (
            ",{"
            '"cat":"function",'
            f'"dur":{int(result.elapsed_time)},'
            f'"name":{json.dumps(result.name)},'
            '"ph":"X",'
            '"pid":0,'
            f'"tid":{result.thread_id},'
            f'"ts":{result.start:.3f}'
            "}"
        )
        with self._lock:
            if self._session is not None and self._stream is not None:
                self._stream.write(entry)
                self._stream.flush()

    def _internal_end_session(self) -> None:
        if self._session is None or self._stream is None:
            return
        self._stream.write(_FOOTER)
        self._stream.flush()
        self._stream.close()
        self._stream = None
        self._session = None


_instance = Instrumentor()


def get_instrumentor() -> Instrumentor:
    """Return the process-wide instrumentor."""
    return _instance


class InstrumentationTimer:
    """Times a scope and reports it to an instrumentor when stopped."""

    def __init__(self, name: str, instrumentor: Instrumentor | None = None) -> None:
        self.name = name
        self.stopped = False
        self._instrumentor = instrumentor
        self._start_ns = time.perf_counter_ns()

    def stop(self) -> ProfileResult:
        """Record the elapsed time and write it to the instrumentor."""
        end_ns = time.perf_counter_ns()
        result = ProfileResult(
            name=self.name,
            start=self._start_ns / 1000.0,
            elapsed_time=end_ns // 1000 - self._start_ns // 1000,
            thread_id=threading.get_ident(),
        )
        (self._instrumentor or get_instrumentor()).write_profile(result)
        self.stopped = True
        return result

    def __enter__(self) -> InstrumentationTimer:
        return self

    def __exit__(self, *args: object) -> None:
        if not self.stopped:
            self.stop()


def cleanup_output_string(expr: str, remove: str) -> str:
    """Drop occurrences of ``remove`` and turn double quotes into single ones."""
    out: list[str] = []
    position = 0
    length = len(expr)
    while position < length:
        if remove and expr.startswith(remove, position):
            position += len(remove)
            if position >= length:
                break
        char = expr[position]
        out.append("'" if char == '"' else char)
        position += 1
    return "".join(out)