"""Optional observability sink for informational events and trace markers.

The solver never depends on a sink: every entry point accepts `None`, and a
sink that fails is reported through this module's logger and otherwise
ignored.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ObservabilitySink(Protocol):
    """Interface for receiving structured events and start/end markers."""

    def log_event(self, event_name: str, annotations: Mapping[str, Any]) -> None:
        """Record one informational event."""

    def start_marker(self, name: str) -> None:
        """Mark the start of a named unit of work."""

    def end_marker(self, name: str) -> None:
        """Mark the end of a named unit of work."""


class NullSink:
    """Sink that discards everything."""

    def log_event(self, event_name: str, annotations: Mapping[str, Any]) -> None:
        return None

    def start_marker(self, name: str) -> None:
        return None

    def end_marker(self, name: str) -> None:
        return None


class LoggingSink:
    """Sink backed by the standard `logging` module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        """Initialize with a logger, defaulting to `solarclock.events`."""
        self._log = log or logging.getLogger("solarclock.events")
        self._local = threading.local()

    def log_event(self, event_name: str, annotations: Mapping[str, Any]) -> None:
        self._log.info("[%s] - [%s]", event_name, dict(annotations))

    def _started(self) -> dict[str, float]:
        started = getattr(self._local, "started", None)
        if started is None:
            started = {}
            self._local.started = started
        return started

    def start_marker(self, name: str) -> None:
        self._started()[name] = time.perf_counter()
        self._log.debug("begin %s", name)

    def end_marker(self, name: str) -> None:
        started = self._started().pop(name, None)
        if started is None:
            self._log.debug("end %s", name)
            return
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        self._log.debug("end %s elapsed_ms=%.3f", name, elapsed_ms)


def emit(sink: ObservabilitySink | None, event_name: str, **annotations: Any) -> None:
    """Send one event to `sink` if present. Sink failures never propagate."""
    if sink is None:
        return
    try:
        sink.log_event(event_name, annotations)
    except Exception:
        logger.warning("observability sink failed on event %s", event_name, exc_info=True)


def _marker(sink: ObservabilitySink, method: str, name: str) -> None:
    try:
        getattr(sink, method)(name)
    except Exception:
        logger.warning("observability sink failed on %s %s", method, name, exc_info=True)


@contextmanager
def trace(sink: ObservabilitySink | None, name: str) -> Iterator[None]:
    """Bracket a block with start/end markers on `sink`."""
    if sink is None:
        yield
        return
    _marker(sink, "start_marker", name)
    try:
        yield
    finally:
        _marker(sink, "end_marker", name)
