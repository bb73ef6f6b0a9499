"""
Base Resource Module
====================

Provides the abstract base class for every nukeable resource type.

A resource type is a thin provider client: it knows how to list the
resources of one kind in one region and how to delete a single one of
them. Filtering, fan-out, aggregation and reporting all live in the core
(:mod:`infra_nuke.core.selector` and :mod:`infra_nuke.core.orchestrator`)
and are shared by every resource type.

Classes
-------
ResourceDescriptor
    Minimal view of a listed resource that the inclusion filter evaluates.
BaseResource
    Abstract base class for resource types.

Example
-------
>>> from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
>>>
>>> class LogGroups(BaseResource):
...     resource_type = "cloudwatch-loggroup"
...     display_name = "CloudWatch Log Groups"
...
...     def list_candidates(self):
...         logs = self.aws_client.session.client("logs")
...         return [
...             ResourceDescriptor(g["logGroupName"], g["logGroupName"])
...             for g in logs.describe_log_groups()["logGroups"]
...         ]
...
...     def delete_one(self, identifier):
...         logs = self.aws_client.session.client("logs")
...         logs.delete_log_group(logGroupName=identifier)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    A single listed resource, as seen by the inclusion filter.

    Parameters
    ----------
    identifier : str
        Opaque provider identifier, unique within the region.
    display_name : str, optional
        Human readable name, when the provider has one.
    creation_time : datetime, optional
        When the resource was created, when the provider reports it.
    """

    identifier: str
    display_name: Optional[str] = None
    creation_time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "display_name": self.display_name,
            "creation_time": (
                self.creation_time.isoformat() if self.creation_time else None
            ),
        }


class BaseResource(ABC):
    """
    Abstract base class for all nukeable resource types.

    Parameters
    ----------
    aws_client : AWSClient
        Instance of AWSClient for AWS API access.

    Attributes
    ----------
    resource_type : str
        Short identifier used in reports and on the command line
        (e.g. ``"apigateway"``).
    display_name : str
        Plural human readable name used in log lines and telemetry.
    ERROR_MESSAGES : dict
        Known AWS error codes mapped to user-friendly messages.

    Notes
    -----
    ``delete_one`` is called concurrently from many worker threads against
    the same instance. Implementations must not keep per-call state on
    ``self``.
    """

    resource_type: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    ERROR_MESSAGES: ClassVar[Dict[str, str]] = {}

    def __init__(self, aws_client) -> None:
        self.aws_client = aws_client
        self.region = aws_client.region
        logger.debug(
            f"Initialized {self.__class__.__name__} for region {self.region}"
        )

    @abstractmethod
    def list_candidates(self) -> List[ResourceDescriptor]:
        """
        List every resource of this type in the region.

        Pagination is handled here. Provider errors are raised as-is; the
        selector wraps them.

        Returns
        -------
        list of ResourceDescriptor
            Resources in provider listing order.
        """

    @abstractmethod
    def delete_one(self, identifier: str) -> None:
        """
        Delete a single resource.

        Called exactly once per identifier per batch, without retries.

        Raises
        ------
        Exception
            Any provider error; the orchestrator records it as the outcome.
        """

    def describe_error(self, error: Exception) -> str:
        """
        Turn a provider exception into a short user-friendly message.

        Uses :attr:`ERROR_MESSAGES` for known botocore error codes and
        falls back to the AWS message or ``str(error)``.
        """
        if isinstance(error, ClientError):
            aws_error = error.response.get("Error", {})
            code = aws_error.get("Code", "Unknown")
            return self.ERROR_MESSAGES.get(code, aws_error.get("Message") or str(error))
        return str(error) or error.__class__.__name__

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"region='{self.region}', "
            f"resource_type='{self.resource_type}')"
        )
