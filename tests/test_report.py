"""
Tests for the deletion report and telemetry sinks.
"""

import logging
import threading

from infra_nuke.core.exceptions import DeleteError
from infra_nuke.core.report import Report, ReportEntry
from infra_nuke.core.telemetry import (
    LoggingTelemetry,
    MemoryTelemetry,
    NullTelemetry,
    TelemetrySink,
)


class TestReport:
    """Tests for Report."""

    def test_record_and_entries(self):
        report = Report()
        report.record(ReportEntry("a", "apigateway"))
        report.record(ReportEntry("b", "apigateway", error=DeleteError("gone")))

        assert len(report) == 2
        assert [e.identifier for e in report.entries] == ["a", "b"]
        assert [e.identifier for e in report.failures] == ["b"]

    def test_entries_is_a_snapshot(self):
        report = Report()
        report.record(ReportEntry("a", "apigateway"))
        snapshot = report.entries
        report.record(ReportEntry("b", "apigateway"))

        assert len(snapshot) == 1

    def test_clear(self):
        report = Report()
        report.record(ReportEntry("a", "apigateway"))
        report.clear()
        assert len(report) == 0

    def test_concurrent_record(self):
        """No entry is lost when many threads record at once."""
        report = Report()

        def worker(n):
            for i in range(50):
                report.record(ReportEntry(f"{n}-{i}", "fake"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(report) == 400

    def test_to_dict(self):
        report = Report()
        report.record(ReportEntry("a", "apigateway", region="us-east-1"))
        report.record(
            ReportEntry("b", "apigateway", error=DeleteError("gone"), region="us-east-1")
        )

        data = report.to_dict()
        assert data["total"] == 2
        assert data["deleted"] == 1
        assert data["failed"] == 1
        assert data["entries"][1]["status"] == "failed"
        assert data["entries"][1]["error"] == "gone"


class TestReportEntry:
    """Tests for ReportEntry."""

    def test_success(self):
        entry = ReportEntry("a", "apigateway")
        assert entry.succeeded
        assert entry.status == "deleted"
        assert entry.error_message is None

    def test_plain_exception_message(self):
        entry = ReportEntry("a", "apigateway", error=ValueError("bad"))
        assert entry.status == "failed"
        assert entry.error_message == "bad"


class TestTelemetry:
    """Tests for telemetry sinks."""

    def test_memory_sink_records_events(self):
        sink = MemoryTelemetry()
        sink.emit("Error Nuking Things", {"region": "us-east-1"})
        assert sink.events == [("Error Nuking Things", {"region": "us-east-1"})]

    def test_emit_copies_attributes(self):
        sink = MemoryTelemetry()
        attributes = {"region": "us-east-1"}
        sink.emit("event", attributes)
        attributes["region"] = "changed"
        assert sink.events[0][1] == {"region": "us-east-1"}

    def test_null_sink(self):
        NullTelemetry().emit("event", {"a": 1})

    def test_emit_never_raises(self):
        class Broken(TelemetrySink):
            def track_event(self, event_name, attributes):
                raise RuntimeError("down")

        Broken().emit("event")

    def test_logging_sink(self, caplog):
        with caplog.at_level(logging.INFO, logger="infra_nuke.telemetry"):
            LoggingTelemetry(level=logging.INFO).emit("Error Nuking Things", {"a": 1})
        assert "Error Nuking Things" in caplog.text
