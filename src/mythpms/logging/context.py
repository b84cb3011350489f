"""Recording context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the recording being processed (chanid, starttime) into
log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_chanid: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "chanid", default=None
)
_starttime: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "starttime", default=None
)


def set_recording_context(chanid: str, starttime: str) -> None:
    """Set the recording that subsequent log records refer to."""
    _chanid.set(chanid)
    _starttime.set(starttime)


def clear_recording_context() -> None:
    """Clear the current recording context."""
    _chanid.set(None)
    _starttime.set(None)


@contextmanager
def recording_context(chanid: str, starttime: str) -> Generator[None, None, None]:
    """Context manager for the recording being processed.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with recording_context("1021", "2016-03-06 20:30:00"):
            logger.info("Locating recording")  # Tagged [1021@2016-03-06 20:30:00]
    """
    old_chanid = _chanid.get()
    old_starttime = _starttime.get()
    try:
        set_recording_context(chanid, starttime)
        yield
    finally:
        _chanid.set(old_chanid)
        _starttime.set(old_starttime)


def get_recording_context() -> tuple[str | None, str | None]:
    """Get current recording context as (chanid, starttime)."""
    return _chanid.get(), _starttime.get()


class RecordingContextFilter(logging.Filter):
    """Logging filter that injects the recording context into log records.

    Adds ``chanid`` and ``starttime`` attributes for JSON output and a
    compact ``recording_tag`` like ``[1021@2016-03-06 20:30:00] `` for text
    output (empty outside a recording context).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        chanid, starttime = get_recording_context()

        record.chanid = chanid
        record.starttime = starttime

        if chanid:
            record.recording_tag = f"[{chanid}@{starttime}] "
        else:
            record.recording_tag = ""

        return True  # Never filter out records
