"""
Region Manager Module
=====================

Runs selection and deletion for several resource types across many AWS
regions in parallel and aggregates the results.

Within a region, resource types are processed one after the other; each
type is one call to the selector followed by one call to the bulk
deletion orchestrator. Regions run concurrently in a thread pool, each
with its own :class:`AWSClient`.

Classes
-------
ResourceTypeResult
    Outcome of one resource type in one region.
MultiRegionNukeResult
    Aggregated outcome of a whole run.
RegionManager
    Orchestrates multi-region runs.

Example
-------
>>> from infra_nuke.core.config import NukeConfig
>>> from infra_nuke.core.filters import ResourceFilter
>>> from infra_nuke.resources import ApiGateway
>>>
>>> manager = RegionManager(NukeConfig(profile="sandbox"))
>>> result = manager.nuke_regions(
...     [ApiGateway],
...     regions=["us-east-1", "eu-west-1"],
...     resource_filter=ResourceFilter(include_names=["^test-"]),
... )
>>> print(f"Deleted {result.total_deleted}, failed {result.total_failed}")
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from infra_nuke.core.aws_client import AWSClient
from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
from infra_nuke.core.config import NukeConfig
from infra_nuke.core.exceptions import (
    AWSClientError,
    InfraNukeError,
    NukeBatchError,
)
from infra_nuke.core.filters import InclusionFilter
from infra_nuke.core.orchestrator import BulkDeleter, NukeSummary
from infra_nuke.core.report import Report
from infra_nuke.core.selector import list_matching
from infra_nuke.core.telemetry import LoggingTelemetry, TelemetrySink

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]


@dataclass
class ResourceTypeResult:
    """
    Outcome of one resource type in one region.

    Attributes:
        resource_type: Resource type
        region: AWS region
        candidates: Resources selected for deletion
        summary: Deletion summary, None for dry runs or when deletion did not start
        error: Error message if listing or deletion failed
    """

    resource_type: str
    region: str
    candidates: List[ResourceDescriptor] = field(default_factory=list)
    summary: Optional[NukeSummary] = None
    error: Optional[str] = None

    @property
    def deleted(self) -> int:
        return self.summary.deleted if self.summary else 0

    @property
    def failed(self) -> int:
        return self.summary.failed if self.summary else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_type": self.resource_type,
            "region": self.region,
            "candidates": [c.to_dict() for c in self.candidates],
            "summary": self.summary.to_dict() if self.summary else None,
            "error": self.error,
        }


@dataclass
class MultiRegionNukeResult:
    """
    Aggregated results of a nuke (or inspect) run across regions.

    Attributes:
        regions: Regions that were processed
        results: One entry per (region, resource type)
        report: Audit report shared by every batch of the run
        dry_run: True if nothing was deleted
        start_time: When the run started
    """

    regions: List[str]
    results: List[ResourceTypeResult] = field(default_factory=list)
    report: Report = field(default_factory=Report)
    dry_run: bool = False
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def resource_types(self) -> List[str]:
        seen: List[str] = []
        for r in self.results:
            if r.resource_type not in seen:
                seen.append(r.resource_type)
        return seen

    @property
    def total_candidates(self) -> int:
        return sum(len(r.candidates) for r in self.results)

    @property
    def total_deleted(self) -> int:
        return sum(r.deleted for r in self.results)

    @property
    def total_failed(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def errors(self) -> Dict[str, List[str]]:
        """Mapping of region to error messages."""
        errors: Dict[str, List[str]] = {}
        for r in self.results:
            if r.error:
                errors.setdefault(r.region, []).append(r.error)
        return errors

    @property
    def has_errors(self) -> bool:
        return any(r.error for r in self.results)

    def get_all_candidates(self) -> List[Dict[str, Any]]:
        """Every selected resource, with region and resource type."""
        candidates = []
        for r in self.results:
            for c in r.candidates:
                data = c.to_dict()
                data["region"] = r.region
                data["resource_type"] = r.resource_type
                candidates.append(data)
        return candidates

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regions": self.regions,
            "dry_run": self.dry_run,
            "start_time": self.start_time.isoformat(),
            "total_candidates": self.total_candidates,
            "total_deleted": self.total_deleted,
            "total_failed": self.total_failed,
            "errors": self.errors,
            "results": [r.to_dict() for r in self.results],
            "report": self.report.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"MultiRegionNukeResult(regions={len(self.regions)}, "
            f"candidates={self.total_candidates}, "
            f"deleted={self.total_deleted}, failed={self.total_failed})"
        )


class RegionManager:
    """
    Manages multi-region nuke runs.

    Parameters
    ----------
    config : NukeConfig, optional
        Run settings (profile, ceilings, parallelism, AWS retries).
    telemetry : TelemetrySink, optional
        Receives one event per failed deletion.

    Notes
    -----
    Each region gets a dedicated AWS client. All batches of a run record
    into the same :class:`Report`.
    """

    def __init__(
        self,
        config: Optional[NukeConfig] = None,
        telemetry: Optional[TelemetrySink] = None,
    ) -> None:
        self.config = config or NukeConfig()
        self.telemetry = telemetry or LoggingTelemetry()

        # us-east-1 is always available for the region list
        self._base_client = AWSClient(
            region="us-east-1",
            profile=self.config.profile,
            max_retries=self.config.max_retries,
            timeout=self.config.timeout,
        )

        logger.debug(
            f"Initialized RegionManager with max_workers={self.config.max_workers}"
        )

    @property
    def profile(self) -> Optional[str]:
        return self.config.profile

    def get_all_regions(self) -> List[str]:
        """
        Fetch all enabled AWS regions, sorted.

        Raises
        ------
        AWSClientError
            If unable to fetch the region list.
        """
        try:
            ec2 = self._base_client.get_ec2_client()
            response = ec2.describe_regions(AllRegions=False)
        except InfraNukeError:
            raise
        except Exception as e:
            logger.debug(f"describe_regions failed: {e}")
            raise AWSClientError(f"Failed to fetch AWS regions: {e}", service="ec2") from e

        regions = sorted(r["RegionName"] for r in response["Regions"])
        logger.info(f"Discovered {len(regions)} enabled AWS regions")
        return regions

    def get_client_for_region(self, region: str) -> AWSClient:
        """New client for ``region`` with the run's profile, retries and timeout."""
        return self._base_client.with_region(region)

    def _process_resource_type(
        self,
        resource: BaseResource,
        resource_filter: Optional[InclusionFilter],
        report: Report,
        dry_run: bool,
    ) -> ResourceTypeResult:
        result = ResourceTypeResult(
            resource_type=resource.resource_type,
            region=resource.region,
        )

        try:
            result.candidates = list_matching(resource, resource_filter)
        except InfraNukeError as e:
            logger.error(str(e))
            result.error = e.message
            return result

        if not dry_run:
            self._delete_candidates(resource, result, report)
        return result

    def _delete_candidates(
        self,
        resource: BaseResource,
        result: ResourceTypeResult,
        report: Report,
    ) -> None:
        """Run one orchestrator batch for ``result.candidates`` and record the outcome."""
        if not result.candidates:
            return

        deleter = BulkDeleter(
            resource,
            report=report,
            telemetry=self.telemetry,
            safety_ceiling=self.config.ceiling_for(resource.resource_type),
        )
        try:
            result.summary = deleter.nuke_all([c.identifier for c in result.candidates])
        except NukeBatchError as e:
            logger.error(str(e))
            result.summary = e.summary
            result.error = e.message
        except InfraNukeError as e:
            logger.error(e.message)
            result.error = e.message

    def _process_region(
        self,
        region: str,
        resource_classes: Sequence[Type[BaseResource]],
        resource_filter: Optional[InclusionFilter],
        report: Report,
        dry_run: bool,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[ResourceTypeResult]:
        if progress_callback:
            progress_callback(region, "started")

        client = self.get_client_for_region(region)
        results = [
            self._process_resource_type(cls(client), resource_filter, report, dry_run)
            for cls in resource_classes
        ]

        if progress_callback:
            failed = any(r.error for r in results)
            progress_callback(region, "error" if failed else "complete")

        logger.debug(f"Completed {region}")
        return results

    def nuke_regions(
        self,
        resource_classes: Sequence[Type[BaseResource]],
        regions: Optional[List[str]] = None,
        resource_filter: Optional[InclusionFilter] = None,
        dry_run: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> MultiRegionNukeResult:
        """
        Select and delete resources across regions in parallel.

        Parameters
        ----------
        resource_classes : sequence of BaseResource subclasses
            Resource types to process, in order, within each region.
        regions : list of str, optional
            Regions to process. If None, all enabled regions.
        resource_filter : InclusionFilter, optional
            Inclusion rules; None selects everything.
        dry_run : bool, default=False
            Only select; never delete.
        progress_callback : callable, optional
            Called with (region, status); status is 'started', 'complete'
            or 'error'.

        Returns
        -------
        MultiRegionNukeResult
            Per region and type results plus the shared report. Failures
            are recorded in the result, never raised.
        """
        if regions is None:
            regions = self.get_all_regions()

        action = "Inspecting" if dry_run else "Nuking"
        logger.info(
            f"{action} {len(resource_classes)} resource type(s) "
            f"across {len(regions)} region(s)"
        )

        run = MultiRegionNukeResult(regions=list(regions), dry_run=dry_run)
        by_region: Dict[str, List[ResourceTypeResult]] = {}

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(
                    self._process_region,
                    region,
                    resource_classes,
                    resource_filter,
                    run.report,
                    dry_run,
                    progress_callback,
                ): region
                for region in regions
            }

            for future in as_completed(futures):
                region = futures[future]
                try:
                    by_region[region] = future.result()
                except Exception as e:
                    logger.error(f"Error processing {region}: {e}")
                    by_region[region] = [
                        ResourceTypeResult(cls.resource_type, region, error=str(e))
                        for cls in resource_classes
                    ]
                    if progress_callback:
                        progress_callback(region, "error")

        for region in regions:
            run.results.extend(by_region.get(region, []))

        logger.info(
            f"Run complete: {run.total_candidates} selected, "
            f"{run.total_deleted} deleted, {run.total_failed} failed"
        )
        return run

    def inspect_regions(
        self,
        resource_classes: Sequence[Type[BaseResource]],
        regions: Optional[List[str]] = None,
        resource_filter: Optional[InclusionFilter] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> MultiRegionNukeResult:
        """Select candidates across regions without deleting anything."""
        return self.nuke_regions(
            resource_classes,
            regions=regions,
            resource_filter=resource_filter,
            dry_run=True,
            progress_callback=progress_callback,
        )

    def delete_selected(
        self,
        selection: MultiRegionNukeResult,
        resource_classes: Sequence[Type[BaseResource]],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> MultiRegionNukeResult:
        """
        Delete exactly the candidates of an earlier inspect run.

        Lets a caller show the selection, ask for confirmation, and then
        delete what was confirmed without listing again. Results whose
        listing failed are carried over unchanged.

        Parameters
        ----------
        selection : MultiRegionNukeResult
            Result of :meth:`inspect_regions`.
        resource_classes : sequence of BaseResource subclasses
            Classes for the resource types in ``selection``.
        progress_callback : callable, optional
            Called with (region, status).
        """
        classes = {cls.resource_type: cls for cls in resource_classes}
        run = MultiRegionNukeResult(regions=list(selection.regions))

        by_region: Dict[str, List[ResourceTypeResult]] = {}
        for selected in selection.results:
            by_region.setdefault(selected.region, []).append(selected)

        def process(region: str) -> List[ResourceTypeResult]:
            if progress_callback:
                progress_callback(region, "started")
            client = self.get_client_for_region(region)
            results = []
            for selected in by_region[region]:
                result = ResourceTypeResult(
                    resource_type=selected.resource_type,
                    region=region,
                    candidates=list(selected.candidates),
                    error=selected.error,
                )
                if result.error is None:
                    resource = classes[result.resource_type](client)
                    self._delete_candidates(resource, result, run.report)
                results.append(result)
            if progress_callback:
                failed = any(r.error for r in results)
                progress_callback(region, "error" if failed else "complete")
            return results

        processed: Dict[str, List[ResourceTypeResult]] = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {executor.submit(process, region): region for region in by_region}
            for future in as_completed(futures):
                region = futures[future]
                try:
                    processed[region] = future.result()
                except Exception as e:
                    logger.error(f"Error processing {region}: {e}")
                    processed[region] = [
                        ResourceTypeResult(
                            selected.resource_type,
                            region,
                            candidates=list(selected.candidates),
                            error=selected.error or str(e),
                        )
                        for selected in by_region[region]
                    ]
                    if progress_callback:
                        progress_callback(region, "error")

        for region in run.regions:
            run.results.extend(processed.get(region, []))

        logger.info(
            f"Run complete: {run.total_deleted} deleted, {run.total_failed} failed"
        )
        return run

    def __repr__(self) -> str:
        return (
            f"RegionManager(profile={self.profile!r}, "
            f"max_workers={self.config.max_workers})"
        )
