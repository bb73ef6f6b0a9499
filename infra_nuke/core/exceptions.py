"""
Custom Exceptions for Infra-Nuke
================================

This module defines a hierarchy of custom exceptions used throughout
the application for consistent error handling and reporting.

Exception Hierarchy
-------------------
::

    InfraNukeError (base)
    ├── AWSClientError
    │   ├── CredentialsError
    │   ├── RegionError
    │   └── ServiceError
    ├── SelectorError
    │   └── ResourceFetchError
    ├── NukeError
    │   ├── TooManyResourcesError
    │   ├── DeleteError
    │   └── NukeBatchError
    └── ConfigError

Example
-------
>>> from infra_nuke.core.exceptions import NukeBatchError, TooManyResourcesError
>>>
>>> try:
...     deleter.nuke_all(identifiers)
... except TooManyResourcesError as e:
...     print(f"Batch refused: {e}")
... except NukeBatchError as e:
...     for cause in e.errors:
...         print(f"{cause.resource_id}: {cause.message}")
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class InfraNukeError(Exception):
    """
    Base exception for all Infra-Nuke errors.

    All custom exceptions in the application inherit from this class,
    allowing for broad exception catching when needed.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.

    Example
    -------
    >>> raise InfraNukeError("Something went wrong", details={"code": 500})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation of the error.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# AWS Client Exceptions
# =============================================================================


class AWSClientError(InfraNukeError):
    """
    Base exception for AWS client-related errors.

    Raised when there's an issue with AWS connectivity, authentication,
    or service access.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The AWS service that caused the error.
    region : str, optional
        The AWS region where the error occurred.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.region = region
        full_details = details or {}
        if service:
            full_details["service"] = service
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class CredentialsError(AWSClientError):
    """Raised when AWS credentials are invalid, missing, or expired."""

    pass


class RegionError(AWSClientError):
    """Raised when there's an issue with the specified AWS region."""

    pass


class ServiceError(AWSClientError):
    """
    Raised when there's an error accessing a specific AWS service.

    Example
    -------
    >>> raise ServiceError(
    ...     "Failed to access API Gateway service",
    ...     service="apigateway",
    ...     region="us-east-1"
    ... )
    """

    pass


# =============================================================================
# Selector Exceptions
# =============================================================================


class SelectorError(InfraNukeError):
    """
    Base exception for candidate selection errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The type of resource being listed.
    region : str, optional
        The AWS region being listed.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        self.region = region
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class ResourceFetchError(SelectorError):
    """
    Raised when the provider listing call fails.

    The original provider exception is always chained as ``__cause__``.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to list API Gateways",
    ...     resource_type="apigateway",
    ...     region="us-east-1"
    ... )
    """

    pass


# =============================================================================
# Nuke Exceptions
# =============================================================================


class NukeError(InfraNukeError):
    """
    Base exception for deletion errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_id : str, optional
        The ID of the resource being deleted.
    resource_type : str, optional
        The type of resource being deleted.
    region : str, optional
        The AWS region of the resource.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_id: Optional[str] = None,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_id = resource_id
        self.resource_type = resource_type
        self.region = region
        full_details = details or {}
        if resource_id:
            full_details["resource_id"] = resource_id
        if resource_type:
            full_details["resource_type"] = resource_type
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class TooManyResourcesError(NukeError):
    """
    Raised when a batch exceeds the safety ceiling.

    No deletion is attempted when this is raised. Retrying with a
    smaller batch is safe.

    Parameters
    ----------
    count : int
        Number of identifiers in the refused batch.
    ceiling : int
        The safety ceiling that was exceeded.
    resource_type : str, optional
        The type of resource in the batch.
    region : str, optional
        The AWS region of the batch.
    """

    def __init__(
        self,
        count: int,
        ceiling: int,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
    ) -> None:
        self.count = count
        self.ceiling = ceiling
        super().__init__(
            f"Refusing to nuke {count} resources at once (limit {ceiling}): "
            "halting to avoid hitting AWS API rate limiting",
            resource_type=resource_type,
            region=region,
            details={"count": count, "ceiling": ceiling},
        )


class DeleteError(NukeError):
    """
    Raised when unable to delete a single resource.

    Example
    -------
    >>> raise DeleteError(
    ...     "Failed to delete API Gateway",
    ...     resource_id="a1b2c3d4e5",
    ...     resource_type="apigateway"
    ... )
    """

    pass


class NukeBatchError(NukeError):
    """
    Aggregated error for a batch where one or more deletions failed.

    Parameters
    ----------
    errors : list of DeleteError
        Every per-identifier failure in the batch, in submission order.
    resource_type : str, optional
        The type of resource in the batch.
    region : str, optional
        The AWS region of the batch.
    summary : NukeSummary, optional
        Summary of the whole batch, including successful outcomes.

    Attributes
    ----------
    errors : list of DeleteError
        The individual causes.
    summary : NukeSummary or None
        The batch summary.
    """

    def __init__(
        self,
        errors: List[DeleteError],
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        summary: Any = None,
    ) -> None:
        self.errors = list(errors)
        self.summary = summary
        super().__init__(
            f"{len(self.errors)} error(s) occurred while nuking "
            f"{resource_type or 'resources'}",
            resource_type=resource_type,
            region=region,
        )

    def __str__(self) -> str:
        lines = [self.message + ":"]
        for error in self.errors:
            lines.append(f"  * {error.resource_id}: {error.message}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception and all causes to a dictionary."""
        data = super().to_dict()
        data["errors"] = [error.to_dict() for error in self.errors]
        return data


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(InfraNukeError):
    """
    Raised when user-supplied configuration is invalid.

    Example
    -------
    >>> raise ConfigError(
    ...     "Unknown resource type",
    ...     details={"resource_type": "s3-bucket"}
    ... )
    """

    pass
