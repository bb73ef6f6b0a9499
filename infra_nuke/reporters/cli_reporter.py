"""
CLI Reporter Module
===================

Renders nuke runs in the terminal with Rich: a candidate table before
deleting, the per-attempt report afterwards, and a summary panel.

Example
-------
>>> reporter = CLIReporter()
>>> reporter.print_candidates(inspect_result)
>>> reporter.report(nuke_result)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from infra_nuke.core.region_manager import MultiRegionNukeResult

logger = logging.getLogger(__name__)


class CLIReporter:
    """
    Reporter for displaying nuke runs in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        logger.debug("Initialized CLIReporter")

    def report(self, result: MultiRegionNukeResult) -> None:
        """Print the full run: header, candidates or attempts, summary, errors."""
        self._print_header(result)
        if result.dry_run:
            self.print_candidates(result)
        else:
            self._print_report_table(result)
        self._print_summary(result)
        if result.errors:
            self._print_errors(result.errors)

    def print_candidates(self, result: MultiRegionNukeResult) -> None:
        """Print every selected resource."""
        candidates = result.get_all_candidates()
        if not candidates:
            self.console.print("\n[green]No matching resources found.[/green]")
            return

        table = Table(title="\nResources selected for deletion", title_style="bold")
        table.add_column("#", style="dim", width=4)
        table.add_column("Region", style="yellow", no_wrap=True)
        table.add_column("Resource Type", style="magenta", no_wrap=True)
        table.add_column("Identifier", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Created", style="dim")

        for i, c in enumerate(candidates, 1):
            table.add_row(
                str(i),
                c["region"],
                c["resource_type"],
                c["identifier"],
                self._truncate(c["display_name"] or "", 40),
                c["creation_time"] or "N/A",
            )

        self.console.print(table)

    # =========================================================================
    # Private Methods: Output Formatting
    # =========================================================================

    def _print_header(self, result: MultiRegionNukeResult) -> None:
        regions = result.regions
        region_text = (
            ", ".join(regions) if len(regions) <= 5 else f"{len(regions)} regions"
        )
        title = "Inspect Report" if result.dry_run else "Nuke Report"

        header_text = Text()
        header_text.append(f"\n{title}\n", style="bold blue")
        header_text.append(f"Regions: {region_text}\n", style="dim")
        header_text.append(
            f"Resource types: {', '.join(result.resource_types) or 'none'}",
            style="dim",
        )
        self.console.print(Panel(header_text, border_style="blue"))

    def _print_report_table(self, result: MultiRegionNukeResult) -> None:
        entries = result.report.entries
        if not entries:
            self.console.print("\n[green]Nothing was deleted.[/green]")
            return

        table = Table(title="\nDeletion attempts", title_style="bold")
        table.add_column("Region", style="yellow", no_wrap=True)
        table.add_column("Resource Type", style="magenta", no_wrap=True)
        table.add_column("Identifier", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("Error", style="dim", max_width=60)

        for entry in entries:
            status = (
                "[green]✓ deleted[/green]" if entry.succeeded else "[red]✗ failed[/red]"
            )
            table.add_row(
                entry.region or "N/A",
                entry.resource_type,
                entry.identifier,
                status,
                entry.error_message or "",
            )

        self.console.print(table)

    def _print_summary(self, result: MultiRegionNukeResult) -> None:
        summary = Table(show_header=False, box=None, padding=(0, 2))
        summary.add_column("Metric", style="cyan")
        summary.add_column("Value", style="white")

        summary.add_row("Regions:", str(len(result.regions)))
        summary.add_row("Selected:", str(result.total_candidates))
        if result.dry_run:
            summary.add_row("Would delete:", f"[blue]{result.total_candidates}[/]")
        else:
            summary.add_row("Deleted:", f"[green]{result.total_deleted}[/]")
            failed_style = "red" if result.total_failed else "green"
            summary.add_row("Failed:", f"[{failed_style}]{result.total_failed}[/]")
        if result.errors:
            summary.add_row(
                "Errors:", f"[yellow]{len(result.errors)} region(s) had errors[/]"
            )

        self.console.print("\n")
        self.console.print(summary)

    def _print_errors(self, errors: Dict[str, List[str]]) -> None:
        self.console.print("\n[yellow bold]Errors encountered:[/yellow bold]")
        for region, error_list in errors.items():
            self.console.print(f"\n[yellow]{region}:[/yellow]")
            for error in error_list:
                self.console.print(f"  [red]• {escape(error)}[/red]")

    @staticmethod
    def _truncate(text: str, max_length: int) -> str:
        if len(text) <= max_length:
            return text
        return text[: max_length - 3] + "..."

    # =========================================================================
    # Public Methods: Messages
    # =========================================================================

    def print_start_message(self, regions: List[str], dry_run: bool) -> None:
        action = "Inspecting" if dry_run else "Nuking"
        if len(regions) == 1:
            self.console.print(f"\n[bold]{action} resources in {regions[0]}...[/bold]")
            return

        preview = ", ".join(regions[:5])
        if len(regions) > 5:
            preview += f"... ({len(regions)} total)"
        self.console.print(
            f"\n[bold]{action} resources across {len(regions)} regions...[/bold]"
        )
        self.console.print(f"[dim]Regions: {preview}[/dim]")

    def print_completion_message(self, output_file: Optional[str] = None) -> None:
        self.console.print("\n[green bold]Done![/green bold]")
        if output_file:
            self.console.print(f"[dim]Report saved to: {output_file}[/dim]")

    def print_error(self, message: str) -> None:
        self.console.print(f"\n[red bold]Error:[/red bold] {escape(message)}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"\n[yellow bold]Warning:[/yellow bold] {escape(message)}")

    def __repr__(self) -> str:
        return "CLIReporter()"
