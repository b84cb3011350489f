"""Process-log settings with the global ``--log-*`` options applied."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from mythpms.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_output: bool = False,
) -> LoggingConfig:
    """Return ``base`` with command-line overrides applied.

    ``--log-json`` only ever switches JSON on; without it the format from
    the config file stands. Rotation settings always come from the file.

    Raises:
        ValueError: If the resulting settings are invalid.
    """
    overrides: dict[str, Any] = {}
    if level is not None:
        overrides["level"] = level.lower()
    if file is not None:
        overrides["file"] = file
    if json_output:
        overrides["format"] = "json"
    if not overrides:
        return base
    return replace(base, **overrides)
