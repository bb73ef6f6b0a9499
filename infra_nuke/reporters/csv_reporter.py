"""
CSV Reporter Module
===================

Exports a nuke run to CSV for spreadsheet review.

A real run writes one row per deletion attempt (the audit report). A dry
run has no attempts, so it writes one row per selected candidate instead.
Both start with a ``#``-prefixed metadata block.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from infra_nuke.core.region_manager import MultiRegionNukeResult

logger = logging.getLogger(__name__)


class CSVReporter:
    """
    Reporter for exporting nuke runs to CSV.

    Parameters
    ----------
    output_path : str, optional
        Path for the output file. If not provided, generates a
        timestamped filename in the current directory.
    """

    REPORT_COLUMNS = [
        "Region",
        "Resource Type",
        "Identifier",
        "Status",
        "Error",
        "Timestamp",
    ]

    CANDIDATE_COLUMNS = [
        "Region",
        "Resource Type",
        "Identifier",
        "Name",
        "Created",
    ]

    def __init__(self, output_path: Optional[str] = None) -> None:
        self.output_path = output_path
        logger.debug(f"Initialized CSVReporter (output_path={output_path})")

    def _get_output_path(self, dry_run: bool) -> Path:
        if self.output_path:
            return Path(self.output_path)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = "inspect" if dry_run else "nuke"
        return Path(f"{prefix}_report_{timestamp}.csv")

    def report(self, result: MultiRegionNukeResult) -> str:
        """
        Write the run to a CSV file.

        Returns
        -------
        str
            Path to the created CSV file.
        """
        output_path = self._get_output_path(result.dry_run)
        logger.info(f"Exporting run to {output_path}")

        with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile, quoting=csv.QUOTE_MINIMAL)
            self._write_metadata(writer, result)

            if result.dry_run:
                writer.writerow(self.CANDIDATE_COLUMNS)
                for candidate in result.get_all_candidates():
                    writer.writerow(
                        [
                            candidate["region"],
                            candidate["resource_type"],
                            candidate["identifier"],
                            candidate["display_name"] or "",
                            candidate["creation_time"] or "",
                        ]
                    )
            else:
                writer.writerow(self.REPORT_COLUMNS)
                for entry in result.report.entries:
                    writer.writerow(
                        [
                            entry.region or "",
                            entry.resource_type,
                            entry.identifier,
                            entry.status,
                            entry.error_message or "",
                            entry.timestamp.isoformat(),
                        ]
                    )

        logger.info(f"CSV export complete: {output_path}")
        return str(output_path)

    def _write_metadata(self, writer: Any, result: MultiRegionNukeResult) -> None:
        rows: List[List[Any]] = [
            ["# Nuke Metadata"],
            ["# Mode:", "dry-run" if result.dry_run else "nuke"],
            ["# Regions:", len(result.regions)],
        ]
        if len(result.regions) <= 5:
            rows.append(["# Region List:", ", ".join(result.regions)])
        rows.extend(
            [
                ["# Resource Types:", ", ".join(result.resource_types)],
                ["# Candidates:", result.total_candidates],
                ["# Deleted:", result.total_deleted],
                ["# Failed:", result.total_failed],
                ["# Start Time:", result.start_time.isoformat()],
                [],
            ]
        )
        writer.writerows(rows)

    def __repr__(self) -> str:
        return f"CSVReporter(output_path={self.output_path!r})"
