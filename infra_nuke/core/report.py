"""
Deletion Report
===============

Append-only audit trail of every deletion attempt.

One :class:`ReportEntry` is recorded per attempted identifier, successful
or not, in the order the attempts finished. :class:`Report` is safe to
record into from many worker threads at once.

Example
-------
>>> report = Report()
>>> deleter = BulkDeleter(resource, report=report)
>>> deleter.nuke_all(["a1b2c3", "d4e5f6"])
>>> for entry in report.entries:
...     print(entry.identifier, entry.status)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ReportEntry:
    """
    Result of one deletion attempt, as recorded in the report.

    Attributes:
        identifier: Resource identifier
        resource_type: Resource type (e.g. "apigateway")
        error: The error if the deletion failed, else None
        region: AWS region
        timestamp: When the attempt finished
    """

    identifier: str
    resource_type: str
    error: Optional[Exception] = None
    region: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        return "deleted" if self.succeeded else "failed"

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return getattr(self.error, "message", None) or str(self.error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "identifier": self.identifier,
            "resource_type": self.resource_type,
            "region": self.region,
            "status": self.status,
            "error": self.error_message,
            "timestamp": self.timestamp.isoformat(),
        }


class Report:
    """Thread-safe, append-only recorder of :class:`ReportEntry` objects."""

    def __init__(self) -> None:
        self._entries: List[ReportEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: ReportEntry) -> None:
        """Append one entry. Safe to call concurrently."""
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> List[ReportEntry]:
        """Snapshot of all entries in completion order."""
        with self._lock:
            return list(self._entries)

    @property
    def failures(self) -> List[ReportEntry]:
        return [e for e in self.entries if not e.succeeded]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def to_dict(self) -> Dict[str, Any]:
        entries = self.entries
        failed = sum(1 for e in entries if not e.succeeded)
        return {
            "total": len(entries),
            "deleted": len(entries) - failed,
            "failed": failed,
            "entries": [e.to_dict() for e in entries],
        }

    def __repr__(self) -> str:
        return f"Report(entries={len(self)})"
