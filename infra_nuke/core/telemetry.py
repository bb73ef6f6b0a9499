"""
Telemetry sinks.

Telemetry is best effort: :meth:`TelemetrySink.emit` never raises, whatever
the concrete sink does. Sinks implement :meth:`TelemetrySink.track_event`.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TelemetrySink(ABC):
    """Fire-and-forget event emitter."""

    @abstractmethod
    def track_event(self, event_name: str, attributes: Dict[str, Any]) -> None:
        """Deliver one event."""

    def emit(self, event_name: str, attributes: Optional[Dict[str, Any]] = None) -> None:
        """Deliver one event, logging instead of raising if delivery fails."""
        try:
            self.track_event(event_name, dict(attributes or {}))
        except Exception as e:
            logger.debug(f"Dropped telemetry event '{event_name}': {e}")


class NullTelemetry(TelemetrySink):
    """Discards every event."""

    def track_event(self, event_name: str, attributes: Dict[str, Any]) -> None:
        pass


class LoggingTelemetry(TelemetrySink):
    """Writes events to the ``infra_nuke.telemetry`` logger."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level
        self._logger = logging.getLogger("infra_nuke.telemetry")

    def track_event(self, event_name: str, attributes: Dict[str, Any]) -> None:
        self._logger.log(self.level, f"[telemetry] {event_name} {attributes}")


class MemoryTelemetry(TelemetrySink):
    """Keeps events in memory. Used by tests and for end-of-run summaries."""

    def __init__(self) -> None:
        self._events: List[Tuple[str, Dict[str, Any]]] = []
        self._lock = threading.Lock()

    def track_event(self, event_name: str, attributes: Dict[str, Any]) -> None:
        with self._lock:
            self._events.append((event_name, attributes))

    @property
    def events(self) -> List[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            return list(self._events)
