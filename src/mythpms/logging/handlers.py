"""Custom logging formatters for mythpms.

Provides JSONFormatter for structured log output and the text format
shared by the process log and the run log.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

TEXT_FORMAT = "%(asctime)s - %(recording_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord carries; anything else came in via ``extra``
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime"}

# Set by RecordingContextFilter; reported under "recording" instead
_CONTEXT_ATTRS: frozenset[str] = frozenset({"chanid", "starttime", "recording_tag"})


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``message``, ``logger``
    (unless root), ``recording`` (when a recording context is active),
    ``context`` (values passed via ``extra``) and ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.name and record.name != "root":
            entry["logger"] = record.name

        chanid = getattr(record, "chanid", None)
        if chanid:
            entry["recording"] = {
                "chanid": chanid,
                "starttime": getattr(record, "starttime", None),
            }

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in _CONTEXT_ATTRS
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def build_formatter(format_name: str) -> logging.Formatter:
    """Return the formatter for "json" or "text" output.

    Text records need the ``recording_tag`` attribute set by
    RecordingContextFilter.
    """
    if format_name.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)
