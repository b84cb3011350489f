"""Per-recording run log.

Every ``mythpms process`` invocation writes a dedicated log file next to
MythTV's own logs, named after the recording::

    <directory>/<name>.<YYYYMMDDHHMMSS>.<chanid>.log

If the run fails the file is renamed with the failed suffix
(``mythpms.20160306203000.1021.FAILED.log``) so failures stand out in a
directory listing, and may be copied into a queue directory that a
separate mailer drains.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.config.models import EmailLogMode
from mythpms.core.datetime_utils import compact_start_time
from mythpms.logging.context import RecordingContextFilter
from mythpms.logging.handlers import build_formatter

if TYPE_CHECKING:
    from mythpms.config.models import RunLogConfig
    from mythpms.db.types import RecordingKey

logger = logging.getLogger(__name__)

LOG_EXTENSION = "log"


def recording_log_name(prefix: str, key: RecordingKey, suffix: str | None = None) -> str:
    """Build ``<prefix>.<YYYYMMDDHHMMSS>.<chanid>[.<suffix>].log``."""
    parts = [prefix, compact_start_time(key.starttime), key.chanid]
    if suffix:
        parts.append(suffix)
    parts.append(LOG_EXTENSION)
    return ".".join(parts)


class RunLog:
    """File handler on the root logger dedicated to one recording.

    Use as a context manager; the handler is removed on exit.

    Example:
        with RunLog(config.run_log, key) as run_log:
            ...
            run_log.mark_failed()
            run_log.queue_for_email()
    """

    def __init__(
        self,
        config: RunLogConfig,
        key: RecordingKey,
        level: int = logging.INFO,
        format_name: str = "text",
    ) -> None:
        self._config = config
        self._key = key
        self._level = level
        self._format_name = format_name
        self._handler: logging.FileHandler | None = None
        self.failed = False

    @property
    def directory(self) -> Path:
        return self._config.directory

    @property
    def path(self) -> Path:
        """Path of the log while the run is healthy."""
        return self.directory / recording_log_name(self._config.name, self._key)

    @property
    def failed_path(self) -> Path:
        return self.directory / recording_log_name(
            self._config.name, self._key, self._config.failed_suffix
        )

    @property
    def current_path(self) -> Path:
        return self.failed_path if self.failed else self.path

    def open(self) -> RunLog:
        """Create the directory and attach the file handler.

        Raises:
            OSError: If the directory or file cannot be created.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        self._attach(self.current_path)
        return self

    def close(self) -> None:
        """Detach and close the file handler."""
        if self._handler is None:
            return
        logging.getLogger().removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> RunLog:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _attach(self, path: Path) -> None:
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        handler.setLevel(self._level)
        handler.setFormatter(build_formatter(self._format_name))
        handler.addFilter(RecordingContextFilter())
        root_logger = logging.getLogger()
        if root_logger.level > self._level or root_logger.level == logging.NOTSET:
            root_logger.setLevel(self._level)
        root_logger.addHandler(handler)
        self._handler = handler

    def mark_failed(self) -> Path:
        """Rename the log to its failed name and keep writing there.

        Returns:
            The failed log path. Calling it again is a no-op.
        """
        if self.failed:
            return self.failed_path

        was_open = self._handler is not None
        self.close()
        if self.path.exists():
            os.replace(self.path, self.failed_path)
        self.failed = True
        if was_open:
            self._attach(self.failed_path)

        logger.info("Run log renamed to %s", self.failed_path.name)
        return self.failed_path

    def should_email(self) -> bool:
        """Decide from the email mode and the run outcome."""
        mode = self._config.email_mode
        if mode is EmailLogMode.ALWAYS:
            return True
        if mode is EmailLogMode.ERROR:
            return self.failed
        return False

    def queue_for_email(self) -> Path | None:
        """Copy the current log into the email queue directory.

        The copy is made world read/write so the mailer (running as another
        user) can remove it. Failures are logged and never raised.

        Returns:
            Path of the queued copy, or None if queueing failed.
        """
        queue_dir = self._config.resolved_email_queue_dir
        source = self.current_path
        if self._handler is not None:
            self._handler.flush()

        try:
            queue_dir.mkdir(parents=True, exist_ok=True)
            target = queue_dir / source.name
            shutil.copyfile(source, target)
            os.chmod(target, 0o666)
        except OSError as e:
            logger.warning("Queueing run log %s for email failed: %s", source, e)
            return None

        logger.info("Run log queued for email: %s", target)
        return target
