"""
Bulk Deletion Orchestrator
==========================

Deletes a batch of identifiers of one resource type concurrently and
folds the per-item results into a single outcome.

For one call to :meth:`BulkDeleter.nuke_all`:

1. An empty batch is a no-op.
2. A batch larger than the safety ceiling raises
   :class:`~infra_nuke.core.exceptions.TooManyResourcesError` before any
   delete is sent.
3. Every identifier gets its own worker thread which calls
   ``delete_one`` exactly once and records a report entry.
4. The call waits for every worker, then emits one telemetry event per
   failure and either returns a :class:`NukeSummary` or raises
   :class:`~infra_nuke.core.exceptions.NukeBatchError` carrying every cause.

Per identifier the lifecycle is ``PENDING -> DELETING -> SUCCEEDED | FAILED``.
Both end states are final; there is no retry and no cancellation.

Example
-------
>>> deleter = BulkDeleter(ApiGateway(client), report=report, safety_ceiling=50)
>>> try:
...     summary = deleter.nuke_all(identifiers)
... except NukeBatchError as e:
...     print(e)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from infra_nuke.core.base_resource import BaseResource
from infra_nuke.core.config import DEFAULT_SAFETY_CEILING
from infra_nuke.core.exceptions import (
    DeleteError,
    NukeBatchError,
    TooManyResourcesError,
)
from infra_nuke.core.report import Report, ReportEntry
from infra_nuke.core.telemetry import LoggingTelemetry, TelemetrySink

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeletionState(Enum):
    """Lifecycle of one identifier within a batch."""

    PENDING = "pending"
    DELETING = "deleting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class DeletionOutcome:
    """
    Result of one delete attempt.

    Attributes:
        identifier: Resource identifier
        error: DeleteError if the attempt failed, else None
        completed_at: When the attempt finished
    """

    identifier: str
    error: Optional[DeleteError] = None
    completed_at: datetime = field(default_factory=_utcnow)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def state(self) -> DeletionState:
        return DeletionState.SUCCEEDED if self.succeeded else DeletionState.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "state": self.state.value,
            "error": self.error.message if self.error else None,
            "completed_at": self.completed_at.isoformat(),
        }


@dataclass
class NukeSummary:
    """
    Summary of one batch.

    Attributes:
        resource_type: Resource type of the batch
        region: AWS region of the batch
        outcomes: One outcome per identifier, in submission order
        start_time: When the batch started
        end_time: When the last worker finished
    """

    resource_type: str
    region: str
    outcomes: List[DeletionOutcome] = field(default_factory=list)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def deleted(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.deleted

    @property
    def errors(self) -> List[DeleteError]:
        return [o.error for o in self.outcomes if o.error is not None]

    def complete(self) -> None:
        """Mark the batch as complete."""
        self.end_time = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "resource_type": self.resource_type,
            "region": self.region,
            "total": self.total,
            "deleted": self.deleted,
            "failed": self.failed,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }


class BulkDeleter:
    """
    Concurrent, all-or-report deletion of one batch of resources.

    Parameters
    ----------
    resource : BaseResource
        Provider client for one resource type in one region.
    report : Report, optional
        Audit sink; receives one entry per attempt. A private report is
        created when omitted.
    telemetry : TelemetrySink, optional
        Receives one event per failed deletion. Defaults to
        :class:`LoggingTelemetry`.
    safety_ceiling : int, default=100
        Largest batch accepted by :meth:`nuke_all`.
    """

    def __init__(
        self,
        resource: BaseResource,
        report: Optional[Report] = None,
        telemetry: Optional[TelemetrySink] = None,
        safety_ceiling: int = DEFAULT_SAFETY_CEILING,
    ) -> None:
        self.resource = resource
        self.report = report if report is not None else Report()
        self.telemetry = telemetry or LoggingTelemetry()
        self.safety_ceiling = safety_ceiling

    @property
    def region(self) -> str:
        return self.resource.region

    @property
    def label(self) -> str:
        return self.resource.display_name or self.resource.resource_type

    def nuke_all(self, identifiers: Sequence[str]) -> NukeSummary:
        """
        Delete every identifier in the batch concurrently.

        Returns
        -------
        NukeSummary
            When every deletion succeeded (including an empty batch).

        Raises
        ------
        TooManyResourcesError
            If the batch exceeds the safety ceiling. Nothing is deleted.
        NukeBatchError
            If any deletion failed, after all of them finished. ``errors``
            holds one DeleteError per failed identifier.
        """
        identifiers = list(identifiers)
        summary = NukeSummary(
            resource_type=self.resource.resource_type,
            region=self.region,
        )

        if not identifiers:
            logger.debug(f"No {self.label} to nuke in region {self.region}")
            summary.complete()
            return summary

        if len(identifiers) > self.safety_ceiling:
            logger.error(
                f"Nuking too many {self.label} at once ({self.safety_ceiling}): "
                "halting to avoid hitting AWS API rate limiting"
            )
            raise TooManyResourcesError(
                count=len(identifiers),
                ceiling=self.safety_ceiling,
                resource_type=self.resource.resource_type,
                region=self.region,
            )

        # There is no bulk delete API, so each identifier gets its own worker
        logger.debug(f"Deleting {len(identifiers)} {self.label} in region {self.region}")
        with ThreadPoolExecutor(
            max_workers=len(identifiers),
            thread_name_prefix=f"nuke-{self.resource.resource_type}",
        ) as executor:
            futures = [executor.submit(self._nuke_one, i) for i in identifiers]
            wait(futures)

        summary.outcomes = [future.result() for future in futures]
        summary.complete()

        for outcome in summary.outcomes:
            if outcome.error is None:
                continue
            logger.debug(f"[Failed] {outcome.error.message}")
            self.telemetry.emit(
                f"Error Nuking {self.label}",
                {
                    "region": self.region,
                    "resource_type": self.resource.resource_type,
                },
            )

        errors = summary.errors
        if errors:
            raise NukeBatchError(
                errors,
                resource_type=self.resource.resource_type,
                region=self.region,
                summary=summary,
            )

        logger.info(
            f"Nuked {summary.deleted} {self.label} in region {self.region}"
        )
        return summary

    def _nuke_one(self, identifier: str) -> DeletionOutcome:
        """Worker: delete one identifier, record it, never raise."""
        error: Optional[DeleteError] = None
        try:
            self.resource.delete_one(identifier)
        except Exception as e:
            error = DeleteError(
                f"Error deleting {self.label} {identifier} in {self.region}: "
                f"{self.resource.describe_error(e)}",
                resource_id=identifier,
                resource_type=self.resource.resource_type,
                region=self.region,
            )
            error.__cause__ = e

        outcome = DeletionOutcome(identifier=identifier, error=error)
        self.report.record(
            ReportEntry(
                identifier=identifier,
                resource_type=self.resource.resource_type,
                error=error,
                region=self.region,
                timestamp=outcome.completed_at,
            )
        )

        if error is None:
            logger.debug(f"[OK] {self.label} {identifier} deleted in {self.region}")
        else:
            logger.debug(
                f"[Failed] Error deleting {self.label} {identifier} in {self.region}"
            )
        return outcome

    def __repr__(self) -> str:
        return (
            f"BulkDeleter(resource={self.resource!r}, "
            f"safety_ceiling={self.safety_ceiling})"
        )
