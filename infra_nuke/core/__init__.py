"""
Core Components
===============

- :func:`select_candidates` - list one resource type and apply the inclusion filter
- :class:`BulkDeleter` - delete a batch concurrently under a safety ceiling
- :class:`Report` - thread-safe audit trail of every deletion attempt
- :class:`RegionManager` - run selection and deletion across regions
- :class:`AWSClient` - boto3 session and client management
- Exception hierarchy for error handling

Example
-------
>>> from infra_nuke.core import AWSClient, BulkDeleter, select_candidates
>>> from infra_nuke.resources import ApiGateway
>>>
>>> resource = ApiGateway(AWSClient(region="us-east-1"))
>>> ids = select_candidates(resource)
>>> BulkDeleter(resource).nuke_all(ids)
"""

from infra_nuke.core.aws_client import AWSClient
from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
from infra_nuke.core.config import DEFAULT_SAFETY_CEILING, NukeConfig, parse_duration
from infra_nuke.core.exceptions import (
    AWSClientError,
    ConfigError,
    CredentialsError,
    DeleteError,
    InfraNukeError,
    NukeBatchError,
    NukeError,
    RegionError,
    ResourceFetchError,
    SelectorError,
    ServiceError,
    TooManyResourcesError,
)
from infra_nuke.core.filters import IncludeAll, InclusionFilter, ResourceFilter
from infra_nuke.core.orchestrator import (
    BulkDeleter,
    DeletionOutcome,
    DeletionState,
    NukeSummary,
)
from infra_nuke.core.region_manager import (
    MultiRegionNukeResult,
    RegionManager,
    ResourceTypeResult,
)
from infra_nuke.core.report import Report, ReportEntry
from infra_nuke.core.selector import list_matching, select_candidates
from infra_nuke.core.telemetry import (
    LoggingTelemetry,
    MemoryTelemetry,
    NullTelemetry,
    TelemetrySink,
)

__all__ = [
    # Client
    "AWSClient",
    # Resources
    "BaseResource",
    "ResourceDescriptor",
    # Configuration
    "DEFAULT_SAFETY_CEILING",
    "NukeConfig",
    "parse_duration",
    # Filters
    "InclusionFilter",
    "IncludeAll",
    "ResourceFilter",
    # Selection and deletion
    "select_candidates",
    "list_matching",
    "BulkDeleter",
    "DeletionOutcome",
    "DeletionState",
    "NukeSummary",
    # Reporting and telemetry
    "Report",
    "ReportEntry",
    "TelemetrySink",
    "LoggingTelemetry",
    "MemoryTelemetry",
    "NullTelemetry",
    # Multi-region
    "RegionManager",
    "MultiRegionNukeResult",
    "ResourceTypeResult",
    # Exceptions
    "InfraNukeError",
    "AWSClientError",
    "CredentialsError",
    "RegionError",
    "ServiceError",
    "SelectorError",
    "ResourceFetchError",
    "NukeError",
    "TooManyResourcesError",
    "DeleteError",
    "NukeBatchError",
    "ConfigError",
]
