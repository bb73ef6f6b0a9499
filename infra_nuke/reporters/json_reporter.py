"""
JSON Reporter Module
====================

Exports a nuke run to JSON for auditing and programmatic access.

Output Structure
----------------
::

    {
      "metadata": {
        "regions": ["us-east-1"],
        "resource_types": ["apigateway"],
        "dry_run": false,
        "start_time": "2024-01-15T10:30:00+00:00",
        "total_candidates": 3,
        "total_deleted": 2,
        "total_failed": 1,
        "errors": {"us-east-1": ["1 error(s) occurred while nuking apigateway"]}
      },
      "candidates": [...],
      "report": [...]
    }

``report`` holds one entry per deletion attempt, in completion order.
It is empty for dry runs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from infra_nuke.core.region_manager import MultiRegionNukeResult

logger = logging.getLogger(__name__)


class JSONReporter:
    """
    Reporter for exporting nuke runs to JSON.

    Parameters
    ----------
    output_path : str, optional
        Path for the output file. If not provided, generates a
        timestamped filename in the current directory.
    indent : int, default=2
        JSON indentation level. Set to None for compact output.
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        indent: Optional[int] = 2,
    ) -> None:
        self.output_path = output_path
        self.indent = indent
        logger.debug(f"Initialized JSONReporter (output_path={output_path})")

    def _get_output_path(self, dry_run: bool) -> Path:
        if self.output_path:
            return Path(self.output_path)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = "inspect" if dry_run else "nuke"
        return Path(f"{prefix}_report_{timestamp}.json")

    def report(self, result: MultiRegionNukeResult) -> str:
        """
        Write the run to a JSON file.

        Returns
        -------
        str
            Path to the created JSON file.
        """
        output_path = self._get_output_path(result.dry_run)
        logger.info(f"Exporting {len(result.report)} report entries to {output_path}")

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(result), f, indent=self.indent, default=str)

        logger.info(f"JSON export complete: {output_path}")
        return str(output_path)

    def to_string(self, result: MultiRegionNukeResult) -> str:
        """Convert the run to a JSON string without writing a file."""
        return json.dumps(self.to_dict(result), indent=self.indent, default=str)

    def to_dict(self, result: MultiRegionNukeResult) -> Dict[str, Any]:
        return {
            "metadata": {
                "regions": result.regions,
                "resource_types": result.resource_types,
                "dry_run": result.dry_run,
                "start_time": result.start_time.isoformat(),
                "total_candidates": result.total_candidates,
                "total_deleted": result.total_deleted,
                "total_failed": result.total_failed,
                "errors": result.errors,
            },
            "candidates": result.get_all_candidates(),
            "report": [entry.to_dict() for entry in result.report.entries],
        }

    def __repr__(self) -> str:
        return f"JSONReporter(output_path={self.output_path!r}, indent={self.indent})"
