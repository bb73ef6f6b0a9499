"""
Tests for the Region Manager module.
"""

import boto3
import pytest

from infra_nuke.core.base_resource import BaseResource, ResourceDescriptor
from infra_nuke.core.config import NukeConfig
from infra_nuke.core.filters import ResourceFilter
from infra_nuke.core.region_manager import (
    MultiRegionNukeResult,
    RegionManager,
    ResourceTypeResult,
)
from infra_nuke.core.telemetry import MemoryTelemetry
from infra_nuke.resources import ApiGateway

DROP = ResourceFilter(include_names=["^drop-"])


class BrokenResource(BaseResource):
    """Resource type whose listing always fails."""

    resource_type = "broken"
    display_name = "Broken Things"

    def list_candidates(self):
        raise RuntimeError("listing exploded")

    def delete_one(self, identifier):
        raise AssertionError("never called")


def create_apis(region, names):
    client = boto3.client("apigateway", region_name=region)
    return {name: client.create_rest_api(name=name)["id"] for name in names}


def api_names(region):
    client = boto3.client("apigateway", region_name=region)
    return sorted(api["name"] for api in client.get_rest_apis()["items"])


class TestRegionManager:
    """Tests for RegionManager class."""

    def test_initialization(self, mock_aws_environment):
        """Test basic initialization."""
        manager = RegionManager()
        assert manager.profile is None
        assert manager.config.max_workers == 10

    def test_initialization_with_options(self, mock_aws_environment):
        """Test initialization with custom options."""
        manager = RegionManager(
            NukeConfig(profile="test", max_workers=5, max_retries=5, timeout=60)
        )
        assert manager.profile == "test"
        assert manager.config.max_workers == 5

    def test_get_all_regions(self, mock_aws_environment):
        """Test fetching all AWS regions."""
        regions = RegionManager().get_all_regions()

        assert "us-east-1" in regions
        assert regions == sorted(regions)

    def test_get_client_for_region(self, mock_aws_environment):
        """Clients inherit the run's retry and timeout settings."""
        manager = RegionManager(NukeConfig(max_retries=7, timeout=12))
        client = manager.get_client_for_region("eu-west-1")

        assert client.region == "eu-west-1"
        assert client.max_retries == 7
        assert client.timeout == 12


class TestNukeRegions:
    """Tests for RegionManager.nuke_regions."""

    def test_nuke_single_region(self, mock_aws_environment):
        create_apis("us-east-1", ["drop-a", "drop-b", "keep-c"])

        result = RegionManager().nuke_regions(
            [ApiGateway], regions=["us-east-1"], resource_filter=DROP
        )

        assert result.total_candidates == 2
        assert result.total_deleted == 2
        assert result.total_failed == 0
        assert not result.has_errors
        assert len(result.report) == 2
        assert api_names("us-east-1") == ["keep-c"]

    def test_nuke_multiple_regions(self, mock_aws_environment):
        create_apis("us-east-1", ["drop-east"])
        create_apis("us-west-2", ["drop-west", "keep-west"])

        result = RegionManager(NukeConfig(max_workers=2)).nuke_regions(
            [ApiGateway], regions=["us-east-1", "us-west-2"], resource_filter=DROP
        )

        assert [r.region for r in result.results] == ["us-east-1", "us-west-2"]
        assert result.total_deleted == 2
        assert {e.region for e in result.report.entries} == {"us-east-1", "us-west-2"}
        assert api_names("us-west-2") == ["keep-west"]

    def test_dry_run_deletes_nothing(self, mock_aws_environment):
        create_apis("us-east-1", ["drop-a", "drop-b"])

        result = RegionManager().inspect_regions(
            [ApiGateway], regions=["us-east-1"], resource_filter=DROP
        )

        assert result.dry_run
        assert result.total_candidates == 2
        assert result.total_deleted == 0
        assert len(result.report) == 0
        assert api_names("us-east-1") == ["drop-a", "drop-b"]

    def test_ceiling_per_resource_type(self, mock_aws_environment):
        """A batch over its ceiling is refused and recorded as an error."""
        create_apis("us-east-1", ["drop-a", "drop-b"])

        result = RegionManager(NukeConfig(ceilings={"apigateway": 1})).nuke_regions(
            [ApiGateway], regions=["us-east-1"], resource_filter=DROP
        )

        assert result.has_errors
        assert "Refusing to nuke 2" in result.errors["us-east-1"][0]
        assert len(result.report) == 0
        assert api_names("us-east-1") == ["drop-a", "drop-b"]

    def test_listing_failure_is_recorded(self, mock_aws_environment):
        """One failing type does not stop the others."""
        create_apis("us-east-1", ["drop-a"])

        result = RegionManager().nuke_regions(
            [BrokenResource, ApiGateway], regions=["us-east-1"], resource_filter=DROP
        )

        broken, apis = result.results
        assert "listing exploded" in broken.error
        assert broken.summary is None
        assert apis.deleted == 1

    def test_failure_telemetry(self, mock_aws_environment):
        """Partial failures keep their summary and emit telemetry."""
        telemetry = MemoryTelemetry()
        manager = RegionManager(telemetry=telemetry)
        selection = MultiRegionNukeResult(
            regions=["us-east-1"],
            results=[
                ResourceTypeResult(
                    "apigateway",
                    "us-east-1",
                    candidates=[ResourceDescriptor("doesnotexist", "drop-ghost")],
                )
            ],
            dry_run=True,
        )

        result = manager.delete_selected(selection, [ApiGateway])

        assert result.total_failed == 1
        assert result.has_errors
        assert len(telemetry.events) == 1

    def test_progress_callback(self, mock_aws_environment):
        """Test progress callback is called."""
        calls = []

        RegionManager(NukeConfig(max_workers=1)).nuke_regions(
            [ApiGateway],
            regions=["us-east-1"],
            progress_callback=lambda region, status: calls.append((region, status)),
        )

        assert calls == [("us-east-1", "started"), ("us-east-1", "complete")]


class TestDeleteSelected:
    """Tests for RegionManager.delete_selected."""

    def test_deletes_only_confirmed_selection(self, mock_aws_environment):
        """Resources created after the inspect run are left alone."""
        create_apis("us-east-1", ["drop-a", "keep-b"])
        manager = RegionManager()

        selection = manager.inspect_regions(
            [ApiGateway], regions=["us-east-1"], resource_filter=DROP
        )
        create_apis("us-east-1", ["drop-late"])
        result = manager.delete_selected(selection, [ApiGateway])

        assert not result.dry_run
        assert result.total_deleted == 1
        assert api_names("us-east-1") == ["drop-late", "keep-b"]

    def test_errors_carried_over(self, mock_aws_environment):
        selection = MultiRegionNukeResult(
            regions=["us-east-1"],
            results=[ResourceTypeResult("apigateway", "us-east-1", error="boom")],
            dry_run=True,
        )

        result = RegionManager().delete_selected(selection, [ApiGateway])

        assert result.errors == {"us-east-1": ["boom"]}
        assert len(result.report) == 0

    def test_region_failure_does_not_abort_run(self, mock_aws_environment):
        """A region whose worker raises is recorded; other regions still run."""
        create_apis("eu-west-1", ["drop-a", "keep-b"])
        manager = RegionManager()
        selection = manager.inspect_regions(
            [ApiGateway], regions=["eu-west-1"], resource_filter=DROP
        )
        selection.regions.append("us-east-1")
        selection.results.append(
            ResourceTypeResult(
                "ghost",
                "us-east-1",
                candidates=[ResourceDescriptor("g1", "drop-ghost")],
            )
        )
        statuses = []

        result = manager.delete_selected(
            selection,
            [ApiGateway],
            progress_callback=lambda region, status: statuses.append((region, status)),
        )

        assert api_names("eu-west-1") == ["keep-b"]
        assert list(result.errors) == ["us-east-1"]
        ghost = [r for r in result.results if r.resource_type == "ghost"]
        assert [c.identifier for c in ghost[0].candidates] == ["g1"]
        assert ("us-east-1", "error") in statuses
        assert ("eu-west-1", "complete") in statuses


class TestMultiRegionNukeResult:
    """Tests for MultiRegionNukeResult class."""

    @pytest.fixture
    def result(self):
        return MultiRegionNukeResult(
            regions=["us-east-1", "eu-west-1"],
            results=[
                ResourceTypeResult(
                    "apigateway",
                    "us-east-1",
                    candidates=[ResourceDescriptor("a1", "drop-a")],
                ),
                ResourceTypeResult("ec2-keypair", "us-east-1"),
                ResourceTypeResult("apigateway", "eu-west-1", error="denied"),
            ],
        )

    def test_get_all_candidates(self, result):
        candidates = result.get_all_candidates()
        assert candidates == [
            {
                "identifier": "a1",
                "display_name": "drop-a",
                "creation_time": None,
                "region": "us-east-1",
                "resource_type": "apigateway",
            }
        ]

    def test_resource_types_in_order(self, result):
        assert result.resource_types == ["apigateway", "ec2-keypair"]

    def test_errors_by_region(self, result):
        assert result.errors == {"eu-west-1": ["denied"]}
        assert result.has_errors

    def test_to_dict(self, result):
        data = result.to_dict()

        assert data["regions"] == ["us-east-1", "eu-west-1"]
        assert data["total_candidates"] == 1
        assert data["total_deleted"] == 0
        assert len(data["results"]) == 3
        assert data["report"]["total"] == 0
