"""
Pytest configuration and shared fixtures for testing.
"""

import logging
import threading
import time
from typing import Dict, List, Optional

import boto3
import pytest
from moto import mock_aws

from infra_nuke.core.aws_client import AWSClient
from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
from infra_nuke.core.report import Report
from infra_nuke.core.telemetry import MemoryTelemetry


class FakeAWSClient:
    """Stand-in for AWSClient; resources only read ``region`` in tests."""

    def __init__(self, region: str = "us-east-1") -> None:
        self.region = region


class FakeResource(BaseResource):
    """
    In-memory resource type.

    ``failures`` maps identifiers to the exception ``delete_one`` raises
    for them. Every call is recorded in ``calls``.
    """

    resource_type = "fake"
    display_name = "Fake Resources"

    def __init__(
        self,
        descriptors: Optional[List[ResourceDescriptor]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        list_error: Optional[Exception] = None,
        delay: float = 0.0,
        region: str = "us-east-1",
    ) -> None:
        super().__init__(FakeAWSClient(region))
        self.descriptors = list(descriptors or [])
        self.failures = dict(failures or {})
        self.list_error = list_error
        self.delay = delay
        self.calls: List[str] = []
        self.list_calls = 0
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def list_candidates(self) -> List[ResourceDescriptor]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.descriptors)

    def delete_one(self, identifier: str) -> None:
        with self._lock:
            self.calls.append(identifier)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if identifier in self.failures:
                raise self.failures[identifier]
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def fake_resource():
    """Factory for FakeResource instances."""
    return FakeResource


@pytest.fixture
def report():
    return Report()


@pytest.fixture
def telemetry():
    return MemoryTelemetry()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mock_aws_environment(aws_credentials):
    """Create a mocked AWS environment."""
    with mock_aws():
        yield


@pytest.fixture
def aws_client(mock_aws_environment):
    """Create an AWSClient instance for testing."""
    return AWSClient(region="us-east-1")


@pytest.fixture
def ec2_client(mock_aws_environment):
    """Create a boto3 EC2 client for setting up test resources."""
    return boto3.client("ec2", region_name="us-east-1")


@pytest.fixture
def apigateway_client(mock_aws_environment):
    """Create a boto3 API Gateway client for setting up test resources."""
    return boto3.client("apigateway", region_name="us-east-1")


@pytest.fixture
def vpc(ec2_client):
    """Create a VPC for testing."""
    response = ec2_client.create_vpc(CidrBlock="10.0.0.0/16")
    return response["Vpc"]["VpcId"]


@pytest.fixture
def rest_apis(apigateway_client):
    """Create three REST APIs, two of them prefixed with 'drop-'."""
    ids = {}
    for name in ("keep-api", "drop-api-1", "drop-api-2"):
        response = apigateway_client.create_rest_api(name=name)
        ids[name] = response["id"]
    return ids


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
