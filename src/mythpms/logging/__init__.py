"""Structured logging module for mythpms.

Provides configurable logging with JSON format support and file rotation,
recording context tagging, and the per-recording run log.
"""

from mythpms.logging.config import configure_logging, level_from_name
from mythpms.logging.context import (
    RecordingContextFilter,
    clear_recording_context,
    get_recording_context,
    recording_context,
    set_recording_context,
)
from mythpms.logging.handlers import JSONFormatter, build_formatter
from mythpms.logging.runlog import RunLog, recording_log_name

__all__ = [
    "JSONFormatter",
    "RecordingContextFilter",
    "RunLog",
    "build_formatter",
    "clear_recording_context",
    "configure_logging",
    "get_recording_context",
    "level_from_name",
    "recording_context",
    "recording_log_name",
    "set_recording_context",
]
