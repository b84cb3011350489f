"""CLI module for mythpms."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mythpms.cli.exit_codes import ExitCode
from mythpms.config import (
    ConfigError,
    build_logging_config,
    check_artifact_paths,
    get_config,
    validate_config,
)
from mythpms.logging import configure_logging, level_from_name

logger = logging.getLogger(__name__)


def _configure_logging(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Apply CLI overrides to the configured logging and install it."""
    config = ctx.obj["config"]
    try:
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            json_output=log_json,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    configure_logging(logging_config)
    ctx.obj["log_level"] = level_from_name(logging_config.level)
    ctx.obj["log_format"] = logging_config.format


@click.group()
@click.version_option(package_name="mythpms")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: /etc/mythpms/config.toml or $MYTHPMS_CONFIG_PATH).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override process log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mythpms - Prepare MythTV recordings for a Plex Media Server library."""
    ctx.ensure_object(dict)

    # Preserve a config injected by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=True)
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(ExitCode.CONFIG_ERROR)

    try:
        check_artifact_paths(ctx.obj["config"])
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    _configure_logging(ctx, log_level, log_file, log_json)

    for problem in validate_config(ctx.obj["config"]):
        logger.warning("Configuration: %s", problem)


# Defer import to avoid circular dependency
def _register_commands():
    from mythpms.cli.inspect import inspect_command
    from mythpms.cli.maintain import prune_library_command, prune_logs_command
    from mythpms.cli.process import process_command

    main.add_command(inspect_command)
    main.add_command(process_command)
    main.add_command(prune_library_command)
    main.add_command(prune_logs_command)


_register_commands()
