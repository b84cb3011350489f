"""CLI commands for standalone housekeeping.

``process`` already runs both sweeps after each recording; these commands
run them on their own, e.g. from cron after recordings are deleted in
MythTV.
"""

from __future__ import annotations

import json

import click

from mythpms.cli.exit_codes import ExitCode
from mythpms.config.models import MythPMSConfig
from mythpms.jobs.maintenance import sweep_old_logs
from mythpms.library.links import LibraryLinkManager


@click.command("prune-library")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Output as JSON.",
)
@click.pass_context
def prune_library_command(ctx: click.Context, as_json: bool) -> None:
    """Remove broken links and empty directories from the library."""
    config: MythPMSConfig = ctx.obj["config"]
    manager = LibraryLinkManager(config.library)

    if not manager.root.is_dir():
        click.echo(f"Error: Library root not found: {manager.root}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    links, dirs = manager.prune()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "links_removed": [str(p) for p in links],
                    "directories_removed": [str(p) for p in dirs],
                },
                indent=2,
            )
        )
    else:
        click.echo(f"Removed {len(links)} broken link(s), {len(dirs)} empty directories")
    ctx.exit(ExitCode.SUCCESS)


@click.command("prune-logs")
@click.option(
    "--older-than",
    "older_than_days",
    type=click.IntRange(min=1),
    default=None,
    help="Age in days (default: run_log.retention_days).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be deleted without deleting.",
)
@click.pass_context
def prune_logs_command(
    ctx: click.Context, older_than_days: int | None, dry_run: bool
) -> None:
    """Delete old log files from the run-log directory."""
    config: MythPMSConfig = ctx.obj["config"]
    days = older_than_days or config.run_log.retention_days

    if not days:
        click.echo("Log retention is disabled; pass --older-than to sweep anyway.")
        ctx.exit(ExitCode.SUCCESS)

    stats = sweep_old_logs(config.run_log.directory, days, dry_run=dry_run)

    verb = "Would delete" if dry_run else "Deleted"
    click.echo(
        f"{verb} {stats.deleted_count} log file(s) "
        f"({stats.deleted_bytes} bytes) older than {days} days"
    )
    for error in stats.errors:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(ExitCode.GENERAL_ERROR if stats.errors else ExitCode.SUCCESS)
