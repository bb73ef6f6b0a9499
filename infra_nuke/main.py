"""
Infra-Nuke CLI - Bulk AWS Resource Deletion

Main entry point for the command-line interface.
"""

import sys
from typing import Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from . import __version__
from .core.aws_client import AWSClient
from .core.config import DEFAULT_SAFETY_CEILING, NukeConfig, parse_duration
from .core.exceptions import AWSClientError, ConfigError, InfraNukeError
from .core.filters import ResourceFilter
from .core.logging import setup_logging
from .core.region_manager import MultiRegionNukeResult, RegionManager
from .reporters.cli_reporter import CLIReporter
from .reporters.csv_reporter import CSVReporter
from .reporters.json_reporter import JSONReporter
from .resources import RESOURCE_TYPES, resolve_resource_types


console = Console()


def parse_ceilings(ctx, param, value: Tuple[str, ...]) -> Dict[str, int]:
    """Parse repeated TYPE=N options into a per-type ceiling mapping."""
    ceilings: Dict[str, int] = {}
    for item in value:
        resource_type, sep, raw = item.partition("=")
        if not sep or not raw.strip().isdigit():
            raise click.BadParameter(f"Expected TYPE=N, got '{item}'")
        if resource_type not in RESOURCE_TYPES:
            raise click.BadParameter(f"Unknown resource type '{resource_type}'")
        ceilings[resource_type] = int(raw)
    return ceilings


def validate_duration(ctx, param, value: Optional[str]):
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ConfigError as e:
        raise click.BadParameter(e.message)


@click.group()
@click.version_option(version=__version__, prog_name="infra-nuke")
@click.option(
    "--log-level",
    default="INFO",
    envvar="INFRA_NUKE_LOG_LEVEL",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    help="Log level (env: INFRA_NUKE_LOG_LEVEL)",
)
@click.option(
    "--log-file",
    default=None,
    envvar="INFRA_NUKE_LOG_FILE",
    help="Also write logs to this file",
)
def cli(log_level: str, log_file: Optional[str]):
    """
    Infra-Nuke: delete every AWS resource that matches a filter.

    Resources are selected per region and resource type, then deleted
    concurrently. Each batch is capped by a safety ceiling and every
    deletion attempt is recorded in the run report.
    """
    setup_logging(level=log_level, log_file=log_file)


def selection_options(func):
    """Options shared by the 'aws' and 'inspect-aws' commands."""
    options = [
        click.option(
            "--region",
            "-r",
            "region_list",
            multiple=True,
            help="Region to process (repeatable, default: us-east-1)",
        ),
        click.option(
            "--all-regions",
            is_flag=True,
            help="Process every enabled AWS region",
        ),
        click.option(
            "--exclude-region",
            multiple=True,
            help="Region to skip (repeatable)",
        ),
        click.option(
            "--resource-type",
            "-t",
            multiple=True,
            type=click.Choice(sorted(RESOURCE_TYPES)),
            help="Resource type to process (repeatable, default: all)",
        ),
        click.option(
            "--exclude-resource-type",
            multiple=True,
            type=click.Choice(sorted(RESOURCE_TYPES)),
            help="Resource type to skip (repeatable)",
        ),
        click.option(
            "--include-name",
            multiple=True,
            help="Only select names matching this regex (repeatable)",
        ),
        click.option(
            "--exclude-name",
            multiple=True,
            help="Never select names matching this regex (repeatable)",
        ),
        click.option(
            "--older-than",
            callback=validate_duration,
            help="Only select resources older than this, e.g. 24h or 7d",
        ),
        click.option(
            "--newer-than",
            callback=validate_duration,
            help="Only select resources newer than this, e.g. 30m",
        ),
        click.option(
            "--profile",
            "-p",
            default=None,
            envvar="AWS_PROFILE",
            help="AWS profile name from ~/.aws/credentials",
        ),
        click.option(
            "--max-workers",
            default=10,
            type=click.IntRange(min=1),
            help="Maximum regions processed in parallel (default: 10)",
        ),
        click.option(
            "--output",
            "-o",
            default=None,
            help="Save the run report to a .json or .csv file",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_regions(
    manager: RegionManager,
    region_list: Tuple[str, ...],
    all_regions: bool,
    exclude_region: Tuple[str, ...],
) -> List[str]:
    if all_regions:
        regions = manager.get_all_regions()
    elif region_list:
        regions = list(dict.fromkeys(region_list))
    else:
        regions = ["us-east-1"]

    regions = [r for r in regions if r not in exclude_region]
    if not regions:
        raise ConfigError("No regions left to process after exclusions")
    return regions


def _save_output(result: MultiRegionNukeResult, output: Optional[str]) -> Optional[str]:
    if not output:
        return None
    if output.endswith(".csv"):
        return CSVReporter(output_path=output).report(result)
    return JSONReporter(output_path=output).report(result)


def _progress_callback(total: int):
    completed = set()

    def progress(region: str, status: str) -> None:
        if status == "complete":
            completed.add(region)
            console.print(f"  [dim]Completed: {region} ({len(completed)}/{total})[/dim]")
        elif status == "error":
            completed.add(region)
            console.print(f"  [yellow]Errors in: {region}[/yellow]")

    return progress


@cli.command("aws")
@selection_options
@click.option(
    "--safety-ceiling",
    default=DEFAULT_SAFETY_CEILING,
    envvar="INFRA_NUKE_SAFETY_CEILING",
    type=click.IntRange(min=1),
    show_default=True,
    help="Maximum resources of one type deleted per region in one batch",
)
@click.option(
    "--ceiling",
    "ceilings",
    multiple=True,
    callback=parse_ceilings,
    help="Per resource type ceiling as TYPE=N (repeatable)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Only show what would be deleted",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Skip the confirmation prompt (dangerous!)",
)
def nuke_aws(
    region_list: Tuple[str, ...],
    all_regions: bool,
    exclude_region: Tuple[str, ...],
    resource_type: Tuple[str, ...],
    exclude_resource_type: Tuple[str, ...],
    include_name: Tuple[str, ...],
    exclude_name: Tuple[str, ...],
    older_than,
    newer_than,
    profile: Optional[str],
    max_workers: int,
    output: Optional[str],
    safety_ceiling: int,
    ceilings: Dict[str, int],
    dry_run: bool,
    force: bool,
):
    """
    Select and delete matching AWS resources.

    Examples:

        # Preview what would be deleted (safe)
        infra-nuke aws -t apigateway --include-name '^test-' --dry-run

        # Delete old key pairs in two regions, with confirmation
        infra-nuke aws -t ec2-keypair -r us-east-1 -r eu-west-1 --older-than 7d

        # Delete everything matching in every region without prompting
        infra-nuke aws --all-regions --include-name '^ci-' --force

        # Lower the batch limit for security groups and save the report
        infra-nuke aws --ceiling security-group=20 -o report.json
    """
    cli_reporter = CLIReporter(console)

    try:
        config = NukeConfig(
            safety_ceiling=safety_ceiling,
            ceilings=ceilings,
            max_workers=max_workers,
            profile=profile,
        )
        resource_filter = ResourceFilter(
            include_names=include_name,
            exclude_names=exclude_name,
            older_than=older_than,
            newer_than=newer_than,
        )
        resource_classes = resolve_resource_types(resource_type, exclude_resource_type)

        with AWSClient(region="us-east-1", profile=profile) as client:
            client.validate_credentials()

        manager = RegionManager(config)
        regions = _resolve_regions(manager, region_list, all_regions, exclude_region)

        if dry_run:
            console.print(
                Panel(
                    "[yellow bold]DRY-RUN MODE[/yellow bold]\n"
                    "No resources will actually be deleted.",
                    border_style="yellow",
                )
            )
        elif force:
            console.print(
                Panel(
                    "[red bold]FORCE MODE[/red bold]\n"
                    "Resources will be deleted WITHOUT confirmation!",
                    border_style="red",
                )
            )

        # Step 1: select
        cli_reporter.print_start_message(regions, dry_run=True)
        selection = manager.inspect_regions(
            resource_classes,
            regions=regions,
            resource_filter=resource_filter,
            progress_callback=_progress_callback(len(regions)),
        )

        if dry_run or selection.total_candidates == 0:
            cli_reporter.report(selection)
            cli_reporter.print_completion_message(_save_output(selection, output))
            if selection.has_errors:
                sys.exit(1)
            return

        # Step 2: confirm
        cli_reporter.print_candidates(selection)
        if not force:
            console.print()
            confirmed = Confirm.ask(
                f"[yellow]Delete all {selection.total_candidates} resources?[/yellow]",
                default=False,
            )
            if not confirmed:
                cli_reporter.print_warning("Deletion cancelled by user.")
                if selection.has_errors:
                    sys.exit(1)
                return

        # Step 3: delete what was confirmed
        cli_reporter.print_start_message(regions, dry_run=False)
        result = manager.delete_selected(
            selection,
            resource_classes,
            progress_callback=_progress_callback(len(regions)),
        )
        cli_reporter.report(result)
        cli_reporter.print_completion_message(_save_output(result, output))

        if result.has_errors:
            sys.exit(1)

    except AWSClientError as e:
        console.print(f"\n[red bold]AWS Error:[/red bold] {e}")
        sys.exit(1)
    except InfraNukeError as e:
        cli_reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        sys.exit(130)


@cli.command("inspect-aws")
@selection_options
def inspect_aws(
    region_list: Tuple[str, ...],
    all_regions: bool,
    exclude_region: Tuple[str, ...],
    resource_type: Tuple[str, ...],
    exclude_resource_type: Tuple[str, ...],
    include_name: Tuple[str, ...],
    exclude_name: Tuple[str, ...],
    older_than,
    newer_than,
    profile: Optional[str],
    max_workers: int,
    output: Optional[str],
):
    """
    List the AWS resources that 'aws' would delete, without deleting.

    Examples:

        infra-nuke inspect-aws -t apigateway --include-name '^test-'
        infra-nuke inspect-aws --all-regions --older-than 30d -o candidates.csv
    """
    cli_reporter = CLIReporter(console)

    try:
        resource_filter = ResourceFilter(
            include_names=include_name,
            exclude_names=exclude_name,
            older_than=older_than,
            newer_than=newer_than,
        )
        resource_classes = resolve_resource_types(resource_type, exclude_resource_type)

        manager = RegionManager(NukeConfig(max_workers=max_workers, profile=profile))
        regions = _resolve_regions(manager, region_list, all_regions, exclude_region)

        cli_reporter.print_start_message(regions, dry_run=True)
        result = manager.inspect_regions(
            resource_classes,
            regions=regions,
            resource_filter=resource_filter,
            progress_callback=_progress_callback(len(regions)),
        )
        cli_reporter.report(result)
        cli_reporter.print_completion_message(_save_output(result, output))

        if result.has_errors:
            sys.exit(1)

    except InfraNukeError as e:
        cli_reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        sys.exit(130)


@cli.command("resource-types")
def list_resource_types():
    """List the resource types that can be nuked."""
    console.print(f"\n[bold]Supported resource types ({len(RESOURCE_TYPES)}):[/bold]\n")
    for name, cls in RESOURCE_TYPES.items():
        console.print(f"  • {name} [dim]({cls.display_name})[/dim]")
    console.print()


@cli.command("regions")
@click.option(
    "--profile",
    "-p",
    default=None,
    envvar="AWS_PROFILE",
    help="AWS profile name from ~/.aws/credentials",
)
def list_regions(profile: Optional[str]):
    """List all enabled AWS regions."""
    try:
        regions = RegionManager(NukeConfig(profile=profile)).get_all_regions()

        console.print(f"\n[bold]Enabled AWS Regions ({len(regions)} total):[/bold]\n")
        for region in regions:
            console.print(f"  • {region}")
        console.print()

    except InfraNukeError as e:
        console.print(f"\n[red bold]Error:[/red bold] {e}")
        sys.exit(1)


@cli.command("validate")
@click.option(
    "--profile",
    "-p",
    default=None,
    envvar="AWS_PROFILE",
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--region",
    "-r",
    default="us-east-1",
    help="AWS region to use for validation",
)
def validate_credentials(profile: Optional[str], region: str):
    """Validate AWS credentials and show account info."""
    try:
        with AWSClient(region=region, profile=profile) as client:
            client.validate_credentials()
            account_id = client.get_account_id()

        console.print("\n[green bold]AWS credentials are valid![/green bold]")
        console.print(f"\n  Account ID: {account_id}")
        console.print(f"  Region: {region}")
        if profile:
            console.print(f"  Profile: {profile}")
        console.print()

    except InfraNukeError as e:
        console.print(f"\n[red bold]Validation Failed:[/red bold] {e}")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
