"""CLI command run by the MythTV job queue for each finished recording.

Configure it as a user job::

    mythpms process "%CHANID%" "%STARTTIMEUTC%"
"""

from __future__ import annotations

import logging

import click

from mythpms.cli.exit_codes import ExitCode, exit_code_for
from mythpms.config.models import MythPMSConfig
from mythpms.db.connection import CatalogUnavailableError, get_connection
from mythpms.db.types import RecordingKey
from mythpms.logging import RunLog, recording_context
from mythpms.workflow.exceptions import PipelineError
from mythpms.workflow.processor import PostProcessor

logger = logging.getLogger(__name__)


def _run_pipeline(config: MythPMSConfig, key: RecordingKey, log_level: int) -> ExitCode:
    """Process one recording and map the outcome to an exit code."""
    try:
        with get_connection(config.catalog) as conn:
            processor = PostProcessor(conn, config, log_level=log_level)
            try:
                result = processor.run(key)
            finally:
                processor.close()
    except (PipelineError, CatalogUnavailableError) as e:
        logger.error("Processing failed: %s", e)
        return exit_code_for(e)
    except Exception:
        logger.exception("Unexpected error while processing %s", key)
        return ExitCode.GENERAL_ERROR

    logger.info(
        "Finished: %s -> %s (%s)",
        result.link_path,
        result.best_path,
        result.best_stage.name.lower(),
    )
    return ExitCode.SUCCESS


@click.command("process")
@click.argument("chanid")
@click.argument("starttime")
@click.pass_context
def process_command(ctx: click.Context, chanid: str, starttime: str) -> None:
    """Process one recording and link it into the library.

    CHANID is the MythTV channel id. STARTTIME is the UTC start time, either
    YYYYMMDDHHMMSS or YYYY-MM-DD HH:MM:SS.

    Commercials are flagged and removed, the result is transcoded, the
    catalog is pointed at the best file and a link is made in the library.
    The run is logged to its own file in the run-log directory.
    """
    config: MythPMSConfig = ctx.obj["config"]
    log_level: int = ctx.obj.get("log_level", logging.INFO)
    log_format: str = ctx.obj.get("log_format", "text")

    try:
        key = RecordingKey.parse(chanid, starttime)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    run_log = RunLog(config.run_log, key, level=log_level, format_name=log_format)
    try:
        run_log.open()
    except OSError as e:
        click.echo(f"Error: Cannot open run log {run_log.path}: {e}", err=True)
        ctx.exit(ExitCode.GENERAL_ERROR)

    try:
        with recording_context(key.chanid, key.starttime):
            logger.info("Processing recording %s", key)
            exit_code = _run_pipeline(config, key, log_level)
            if exit_code != ExitCode.SUCCESS:
                run_log.mark_failed()
            if run_log.should_email():
                run_log.queue_for_email()
    finally:
        run_log.close()

    if exit_code != ExitCode.SUCCESS:
        click.echo(
            f"Error: Processing {key} failed; see {run_log.current_path}", err=True
        )
    ctx.exit(exit_code)
