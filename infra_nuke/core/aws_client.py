"""
AWS Client Module
=================

Provides a thread-safe wrapper around boto3 for managing AWS connections
with built-in retry logic, credential validation, and multi-region support.

Every resource type talks to AWS through an :class:`AWSClient`. Service
clients are created lazily and cached; boto3 clients are safe to share
between the worker threads of a single deletion batch.

Example
-------
>>> from infra_nuke.core.aws_client import AWSClient
>>>
>>> client = AWSClient(region="us-east-1", profile="sandbox")
>>> client.validate_credentials()
>>> apigateway = client.get_apigateway_client()

Notes
-----
The retry and timeout settings here are the only time bound on a single
delete request; the orchestrator itself never cancels a running delete.

See Also
--------
boto3 : AWS SDK for Python
botocore : Low-level AWS client library
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    ClientError,
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)

from infra_nuke.core.exceptions import (
    AWSClientError,
    CredentialsError,
    RegionError,
    ServiceError,
)

logger = logging.getLogger(__name__)


class AWSClient:
    """
    Thread-safe AWS client wrapper with retry logic and credential management.

    Parameters
    ----------
    region : str, default="us-east-1"
        AWS region to connect to.
    profile : str, optional
        AWS profile name from ~/.aws/credentials.
    max_retries : int, default=3
        Maximum number of attempts for failed API calls.
    timeout : int, default=30
        Connect and read timeout in seconds.

    Examples
    --------
    >>> client = AWSClient(region="us-east-1")
    >>> client.validate_credentials()
    True

    >>> eu_client = client.with_region("eu-west-1")

    Raises
    ------
    CredentialsError
        If AWS credentials are not found or invalid.
    RegionError
        If the specified region is invalid.
    ServiceError
        If unable to create a service client.
    """

    SUPPORTED_SERVICES = {
        "apigateway": "Amazon API Gateway",
        "ec2": "Amazon EC2",
        "sts": "AWS Security Token Service",
    }

    def __init__(
        self,
        region: str = "us-east-1",
        profile: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
    ) -> None:
        self.region = region
        self.profile = profile
        self.max_retries = max_retries
        self.timeout = timeout

        self._session: Optional[boto3.Session] = None
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._config = self._create_config()

        logger.debug(
            "Initialized AWSClient",
            extra={"region": region, "profile": profile},
        )

    def _create_config(self) -> Config:
        """
        Create botocore configuration with retry and timeout settings.

        Uses adaptive retry mode, which also rate-limits the client side
        when AWS starts throttling a burst of deletes.
        """
        return Config(
            retries={
                "max_attempts": self.max_retries,
                "mode": "adaptive",
            },
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
        )

    @property
    def session(self) -> boto3.Session:
        """Get or create the boto3 session (lazy initialization)."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> boto3.Session:
        try:
            session_kwargs = {"region_name": self.region}
            if self.profile:
                session_kwargs["profile_name"] = self.profile

            session = boto3.Session(**session_kwargs)
            logger.debug(f"Created boto3 session for region {self.region}")
            return session

        except ProfileNotFound:
            raise CredentialsError(
                f"AWS profile '{self.profile}' not found",
                details={
                    "profile": self.profile,
                    "hint": "Check ~/.aws/credentials for available profiles",
                },
            )
        except NoRegionError:
            raise RegionError(
                f"Invalid or missing region: {self.region}",
                region=self.region,
            )
        except Exception as e:
            logger.exception("Failed to create AWS session")
            raise AWSClientError(
                f"Failed to create AWS session: {e}",
                region=self.region,
            ) from e

    def _get_client(self, service_name: str) -> Any:
        """
        Get or create a boto3 client for the specified service.

        Creation is guarded by a lock because the first delete workers of
        a batch can ask for the same client at the same moment.

        Raises
        ------
        CredentialsError
            If credentials are not found.
        ServiceError
            If the service is not supported or the client cannot be created.
        """
        if service_name not in self.SUPPORTED_SERVICES:
            raise ServiceError(
                f"Unsupported service: {service_name}",
                service=service_name,
                details={"supported": sorted(self.SUPPORTED_SERVICES)},
            )

        with self._lock:
            if service_name in self._clients:
                return self._clients[service_name]

            try:
                client = self.session.client(service_name, config=self._config)
            except NoCredentialsError:
                raise CredentialsError(
                    "AWS credentials not found",
                    details={
                        "hint": (
                            "Configure credentials using 'aws configure' or set "
                            "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY"
                        ),
                    },
                )
            except AWSClientError:
                raise
            except Exception as e:
                logger.exception(f"Failed to create {service_name} client")
                raise ServiceError(
                    f"Failed to create {service_name} client: {e}",
                    service=service_name,
                    region=self.region,
                ) from e

            self._clients[service_name] = client
            logger.debug(f"Created {service_name} client for {self.region}")
            return client

    # =========================================================================
    # Service Client Accessors
    # =========================================================================

    def get_apigateway_client(self) -> Any:
        """Get the API Gateway (REST APIs, v1) client."""
        return self._get_client("apigateway")

    def get_ec2_client(self) -> Any:
        """Get the EC2 client."""
        return self._get_client("ec2")

    # =========================================================================
    # Credential and Account Operations
    # =========================================================================

    def validate_credentials(self) -> bool:
        """
        Validate AWS credentials by calling STS GetCallerIdentity.

        Returns
        -------
        bool
            True if credentials are valid.

        Raises
        ------
        CredentialsError
            If credentials are invalid, expired, or missing.
        """
        try:
            identity = self.get_caller_identity()
            logger.info(
                "Credentials validated",
                extra={"account": identity["Account"], "arn": identity["Arn"]},
            )
            return True
        except AWSClientError as e:
            cause = e.__cause__
            if isinstance(cause, ClientError):
                error_code = cause.response.get("Error", {}).get("Code", "Unknown")
                if error_code in ("InvalidClientTokenId", "SignatureDoesNotMatch"):
                    raise CredentialsError(
                        "Invalid AWS credentials",
                        details={
                            "error_code": error_code,
                            "hint": "Check your access key and secret key",
                        },
                    ) from cause
            raise CredentialsError(f"Failed to validate credentials: {e.message}") from e

    def get_account_id(self) -> str:
        """Get the 12-digit AWS account ID for the current credentials."""
        return self.get_caller_identity()["Account"]

    def get_caller_identity(self) -> Dict[str, str]:
        """
        Get full caller identity information.

        Returns
        -------
        dict
            Dictionary containing 'Account', 'Arn', and 'UserId'.
        """
        try:
            sts = self._get_client("sts")
            return sts.get_caller_identity()
        except AWSClientError:
            raise
        except Exception as e:
            logger.debug(f"Failed to get caller identity: {e}")
            raise AWSClientError(
                f"Failed to get caller identity: {e}",
                service="sts",
                region=self.region,
            ) from e

    # =========================================================================
    # Factory Methods
    # =========================================================================

    def with_region(self, region: str) -> AWSClient:
        """
        Create a new AWSClient for a different region.

        The new client inherits profile, retries and timeout.
        """
        return AWSClient(
            region=region,
            profile=self.profile,
            max_retries=self.max_retries,
            timeout=self.timeout,
        )

    def __enter__(self) -> AWSClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._clients.clear()
        self._session = None

    def __repr__(self) -> str:
        return (
            f"AWSClient(region='{self.region}', "
            f"profile={self.profile!r}, "
            f"max_retries={self.max_retries})"
        )
