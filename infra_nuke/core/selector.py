"""
Candidate Selector
==================

Lists the resources of one type in one region and keeps the ones the
inclusion filter accepts.

Example
-------
>>> from infra_nuke.core.selector import select_candidates
>>> from infra_nuke.core.filters import ResourceFilter
>>>
>>> resource = ApiGateway(AWSClient(region="us-east-1"))
>>> ids = select_candidates(resource, ResourceFilter(include_names=["^test-"]))
"""

from __future__ import annotations

import logging
from typing import List, Optional

from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
from infra_nuke.core.exceptions import ResourceFetchError
from infra_nuke.core.filters import IncludeAll, InclusionFilter

logger = logging.getLogger(__name__)


def list_matching(
    resource: BaseResource,
    resource_filter: Optional[InclusionFilter] = None,
) -> List[ResourceDescriptor]:
    """
    Return the descriptors accepted by ``resource_filter``, in listing order.

    Calls :meth:`BaseResource.list_candidates` exactly once.

    Raises
    ------
    ResourceFetchError
        If listing fails. The provider error is chained as ``__cause__``
        and nothing is returned.
    """
    resource_filter = resource_filter or IncludeAll()

    try:
        descriptors = resource.list_candidates()
    except Exception as e:
        raise ResourceFetchError(
            f"Failed to list {resource.display_name or resource.resource_type}: "
            f"{resource.describe_error(e)}",
            resource_type=resource.resource_type,
            region=resource.region,
        ) from e

    matching = [d for d in descriptors if resource_filter.should_include(d)]

    logger.debug(
        f"Selected {len(matching)} of {len(descriptors)} "
        f"{resource.display_name} in {resource.region}"
    )
    return matching


def select_candidates(
    resource: BaseResource,
    resource_filter: Optional[InclusionFilter] = None,
) -> List[str]:
    """
    Return the identifiers of all resources eligible for deletion.

    Parameters
    ----------
    resource : BaseResource
        Provider client for one resource type in one region.
    resource_filter : InclusionFilter, optional
        Inclusion rules; ``None`` selects everything.

    Returns
    -------
    list of str
        Identifiers in provider listing order.

    Raises
    ------
    ResourceFetchError
        If the listing call fails.
    """
    return [d.identifier for d in list_matching(resource, resource_filter)]
