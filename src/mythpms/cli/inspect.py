"""CLI command to show what ``process`` would work with for a recording."""

from __future__ import annotations

import json
from typing import Any

import click

from mythpms.cli.exit_codes import ExitCode, exit_code_for
from mythpms.config.models import MythPMSConfig
from mythpms.db.connection import CatalogUnavailableError, get_connection
from mythpms.db.types import RecordingKey
from mythpms.workflow.exceptions import PipelineError
from mythpms.workflow.phases.commercials import effective_commflag_status
from mythpms.workflow.processor import PostProcessor
from mythpms.workflow.state import is_original_eligible


def _describe(config: MythPMSConfig, key: RecordingKey) -> dict[str, Any]:
    with get_connection(config.catalog) as conn:
        processor = PostProcessor(conn, config)
        try:
            ctx, target = processor.prepare(key)
        finally:
            processor.close()

    record = ctx.record
    status = effective_commflag_status(record, config.commercials.free_channels)
    artifacts = {
        name: {"path": str(path), "exists": path.exists()}
        for name, path in (
            ("original", ctx.paths.original),
            ("commercial_free", ctx.paths.commercial_free),
            ("transcoded", ctx.paths.transcoded),
        )
    }
    link_path = target.link_path(record.basename_extension)
    return {
        "chanid": record.chanid,
        "starttime": record.starttime,
        "title": record.title,
        "subtitle": record.subtitle,
        "media_type": record.media_type.value,
        "storage_group": record.storagegroup,
        "storage_dir": str(ctx.storage_dir),
        "commflag_status": status.name.lower(),
        "eligible": is_original_eligible(
            record, config.commercials.original_extension
        ),
        "artifacts": artifacts,
        "library_section": target.section.value,
        "library_link": str(link_path),
        "library_link_exists": link_path.is_symlink(),
    }


def _format_human(data: dict[str, Any]) -> str:
    lines = [
        f"Recording:       {data['chanid']}@{data['starttime']}",
        f"Title:           {data['title']}",
    ]
    if data["subtitle"]:
        lines.append(f"Subtitle:        {data['subtitle']}")
    lines.extend(
        [
            f"Type:            {data['media_type']}",
            f"Storage group:   {data['storage_group']} ({data['storage_dir']})",
            f"Commercials:     {data['commflag_status']}",
            f"Processable:     {'yes' if data['eligible'] else 'no (already processed)'}",
            "",
            "Artifacts:",
        ]
    )
    for name, artifact in data["artifacts"].items():
        marker = "" if artifact["exists"] else "  (missing)"
        lines.append(f"  {name:<16} {artifact['path']}{marker}")
    link_marker = "" if data["library_link_exists"] else "  (not linked)"
    lines.extend(
        [
            "",
            f"Library ({data['library_section']}):",
            f"  {data['library_link']}{link_marker}",
        ]
    )
    return "\n".join(lines)


@click.command("inspect")
@click.argument("chanid")
@click.argument("starttime")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Output as JSON.",
)
@click.pass_context
def inspect_command(
    ctx: click.Context, chanid: str, starttime: str, as_json: bool
) -> None:
    """Show a recording's catalog entry, artifacts and library link.

    Nothing is run and nothing is changed.
    """
    config: MythPMSConfig = ctx.obj["config"]

    try:
        key = RecordingKey.parse(chanid, starttime)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    try:
        data = _describe(config, key)
    except (PipelineError, CatalogUnavailableError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(exit_code_for(e))

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(_format_human(data))
    ctx.exit(ExitCode.SUCCESS)
