"""
Infra-Nuke: Bulk AWS Resource Deletion
======================================

Finds AWS resources of a given type that match a filter and deletes all
of them, concurrently, with a safety ceiling and a full audit report.

Modules
-------
core
    Selector, bulk deletion orchestrator, report, telemetry, AWS client
resources
    Resource type implementations (API Gateway, key pairs, security groups)
reporters
    Output formatters (CLI, CSV, JSON)

Example
-------
>>> from infra_nuke.core import AWSClient, BulkDeleter, ResourceFilter, select_candidates
>>> from infra_nuke.resources import ApiGateway
>>>
>>> resource = ApiGateway(AWSClient(region="us-east-1"))
>>> ids = select_candidates(resource, ResourceFilter(include_names=["^test-"]))
>>> summary = BulkDeleter(resource).nuke_all(ids)
>>> print(f"Deleted {summary.deleted} API Gateways")

Notes
-----
Requires AWS credentials configured via:
- Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)
- AWS credentials file (~/.aws/credentials)
- IAM role (when running on AWS infrastructure)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from infra_nuke.core.aws_client import AWSClient
from infra_nuke.core.exceptions import InfraNukeError
from infra_nuke.core.orchestrator import BulkDeleter, NukeSummary
from infra_nuke.core.region_manager import MultiRegionNukeResult, RegionManager
from infra_nuke.core.selector import select_candidates

__all__ = [
    "__version__",
    "__license__",
    "AWSClient",
    "InfraNukeError",
    "BulkDeleter",
    "NukeSummary",
    "RegionManager",
    "MultiRegionNukeResult",
    "select_candidates",
]
