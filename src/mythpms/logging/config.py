"""Process-wide logging setup.

configure_logging() installs the handlers named by LoggingConfig on the
root logger. The per-recording run log is added on top by RunLog.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.logging.context import RecordingContextFilter
from mythpms.logging.handlers import build_formatter

if TYPE_CHECKING:
    from mythpms.config.models import LoggingConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_name(name: str) -> int:
    """Map a configured level name to a logging constant (INFO if unknown)."""
    return _LEVELS.get(name.casefold(), logging.INFO)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating process log, or return None if it cannot be opened.

    Logging is not configured yet at this point, so the problem goes
    straight to stderr.
    """
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"mythpms: cannot open log file {path}: {e}", file=sys.stderr)
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``.

    Records go to the rotating file when one is configured and can be
    opened, and to stderr when ``include_stderr`` is set or there is no
    file. Every handler tags records with the current recording.
    """
    level = level_from_name(config.level)
    formatter = build_formatter(config.format)

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RecordingContextFilter())
        root.addHandler(handler)
