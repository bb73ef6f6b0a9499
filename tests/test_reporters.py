"""
Tests for the Reporter modules.
"""

import json
import os
from datetime import datetime, timezone

import pytest
from rich.console import Console

from infra_nuke.core.base_resource import ResourceDescriptor
from infra_nuke.core.exceptions import DeleteError
from infra_nuke.core.orchestrator import DeletionOutcome, NukeSummary
from infra_nuke.core.region_manager import MultiRegionNukeResult, ResourceTypeResult
from infra_nuke.core.report import Report, ReportEntry
from infra_nuke.reporters.cli_reporter import CLIReporter
from infra_nuke.reporters.csv_reporter import CSVReporter
from infra_nuke.reporters.json_reporter import JSONReporter

START = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_inspect_result():
    """Create a sample dry-run result for testing."""
    return MultiRegionNukeResult(
        regions=["us-east-1", "eu-west-1"],
        results=[
            ResourceTypeResult(
                "apigateway",
                "us-east-1",
                candidates=[
                    ResourceDescriptor("abc123", "drop-orders", START),
                    ResourceDescriptor("def456", "drop-users"),
                ],
            ),
            ResourceTypeResult(
                "ec2-keypair",
                "eu-west-1",
                candidates=[ResourceDescriptor("drop-key", "drop-key")],
            ),
        ],
        dry_run=True,
        start_time=START,
    )


@pytest.fixture
def sample_nuke_result():
    """Create a sample nuke result with one failure."""
    failure = DeleteError(
        "REST API is still referenced by another resource",
        resource_id="def456",
        resource_type="apigateway",
        region="us-east-1",
    )
    report = Report()
    report.record(ReportEntry("abc123", "apigateway", region="us-east-1", timestamp=START))
    report.record(
        ReportEntry("def456", "apigateway", error=failure, region="us-east-1", timestamp=START)
    )

    summary = NukeSummary(
        resource_type="apigateway",
        region="us-east-1",
        outcomes=[DeletionOutcome("abc123"), DeletionOutcome("def456", error=failure)],
        start_time=START,
    )
    return MultiRegionNukeResult(
        regions=["us-east-1"],
        results=[
            ResourceTypeResult(
                "apigateway",
                "us-east-1",
                candidates=[
                    ResourceDescriptor("abc123", "drop-orders"),
                    ResourceDescriptor("def456", "drop-users"),
                ],
                summary=summary,
                error="1 error(s) occurred while nuking apigateway",
            )
        ],
        report=report,
        start_time=START,
    )


class TestCSVReporter:
    """Tests for CSVReporter class."""

    def test_nuke_export(self, sample_nuke_result, tmp_path):
        """A real run writes one row per attempt."""
        output_path = str(tmp_path / "nuke.csv")

        result_path = CSVReporter(output_path=output_path).report(sample_nuke_result)

        assert result_path == output_path
        content = open(output_path, encoding="utf-8").read()
        assert "# Mode:,nuke" in content
        assert "us-east-1,apigateway,abc123,deleted" in content
        assert "us-east-1,apigateway,def456,failed" in content
        assert "still referenced" in content

    def test_dry_run_export(self, sample_inspect_result, tmp_path):
        """A dry run writes the candidates instead."""
        output_path = str(tmp_path / "inspect.csv")

        CSVReporter(output_path=output_path).report(sample_inspect_result)

        content = open(output_path, encoding="utf-8").read()
        assert "# Mode:,dry-run" in content
        assert "Identifier,Name,Created" in content
        assert "us-east-1,apigateway,abc123,drop-orders" in content
        assert "eu-west-1,ec2-keypair,drop-key" in content

    def test_auto_generated_filename(self, sample_inspect_result, tmp_path, monkeypatch):
        """Test that filename is auto-generated when not specified."""
        monkeypatch.chdir(tmp_path)

        result_path = CSVReporter().report(sample_inspect_result)

        assert result_path.startswith("inspect_report_")
        assert result_path.endswith(".csv")
        assert os.path.exists(result_path)


class TestJSONReporter:
    """Tests for JSONReporter class."""

    def test_nuke_export(self, sample_nuke_result, tmp_path):
        output_path = str(tmp_path / "nuke.json")

        JSONReporter(output_path=output_path).report(sample_nuke_result)

        with open(output_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        assert data["metadata"]["dry_run"] is False
        assert data["metadata"]["total_deleted"] == 1
        assert data["metadata"]["total_failed"] == 1
        assert data["metadata"]["errors"] == {
            "us-east-1": ["1 error(s) occurred while nuking apigateway"]
        }
        assert [e["status"] for e in data["report"]] == ["deleted", "failed"]

    def test_dry_run_export(self, sample_inspect_result):
        data = json.loads(JSONReporter().to_string(sample_inspect_result))

        assert data["metadata"]["dry_run"] is True
        assert data["metadata"]["resource_types"] == ["apigateway", "ec2-keypair"]
        assert len(data["candidates"]) == 3
        assert data["candidates"][0]["creation_time"] == START.isoformat()
        assert data["report"] == []

    def test_auto_generated_filename(self, sample_nuke_result, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result_path = JSONReporter().report(sample_nuke_result)

        assert result_path.startswith("nuke_report_")
        assert result_path.endswith(".json")


class TestCLIReporter:
    """Tests for CLIReporter class."""

    @pytest.fixture
    def console(self):
        return Console(record=True, width=200)

    def test_reporter_initialization(self):
        """Test CLI reporter initialization."""
        assert CLIReporter().console is not None

    def test_truncate_function(self):
        """Test text truncation."""
        assert CLIReporter._truncate("short", 10) == "short"

        long_text = "This is a very long description that should be truncated"
        truncated = CLIReporter._truncate(long_text, 20)
        assert len(truncated) == 20
        assert truncated.endswith("...")

    def test_dry_run_report(self, sample_inspect_result, console):
        CLIReporter(console).report(sample_inspect_result)

        output = console.export_text()
        assert "Inspect Report" in output
        assert "drop-orders" in output
        assert "Would delete:" in output

    def test_nuke_report(self, sample_nuke_result, console):
        CLIReporter(console).report(sample_nuke_result)

        output = console.export_text()
        assert "Nuke Report" in output
        assert "def456" in output
        assert "failed" in output
        assert "Errors encountered" in output

    def test_empty_results(self, console):
        """Test reporting when nothing matched."""
        result = MultiRegionNukeResult(regions=["us-east-1"], dry_run=True)

        CLIReporter(console).report(result)

        assert "No matching resources found" in console.export_text()
