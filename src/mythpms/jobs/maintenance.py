"""Log-directory maintenance.

MythTV, HandBrake and mythpms all write per-recording logs into the same
directory; without a sweep it grows by several files per recording.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


@dataclass
class LogSweepStats:
    """Statistics from a log retention sweep."""

    deleted: list[Path] = field(default_factory=list)
    deleted_bytes: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


def sweep_old_logs(
    log_dir: Path,
    older_than_days: int | None,
    extension: str = "log",
    dry_run: bool = False,
) -> LogSweepStats:
    """Delete ``*.<extension>`` files in ``log_dir`` older than a threshold.

    Only the top level of ``log_dir`` is swept; the email queue and other
    subdirectories are left alone. Failures are collected, not raised.

    Args:
        log_dir: Directory to sweep.
        older_than_days: Age in days (by modification time). None or 0
            disables the sweep.
        extension: File extension to match, without the dot.
        dry_run: If True, report what would be deleted without deleting.

    Returns:
        Statistics about the sweep.
    """
    stats = LogSweepStats()
    if not older_than_days:
        logger.debug("Log retention sweep disabled")
        return stats
    if not log_dir.is_dir():
        logger.debug("Log directory does not exist: %s", log_dir)
        return stats

    cutoff = datetime.now(timezone.utc).timestamp() - older_than_days * SECONDS_PER_DAY
    suffix = f".{extension}"

    for path in sorted(log_dir.iterdir()):
        if path.suffix != suffix or not path.is_file() or path.is_symlink():
            continue
        try:
            info = path.stat()
            if info.st_mtime >= cutoff:
                continue
            if not dry_run:
                path.unlink()
        except OSError as e:
            message = f"Failed to delete {path.name}: {e}"
            logger.warning(message)
            stats.errors.append(message)
            continue

        stats.deleted.append(path)
        stats.deleted_bytes += info.st_size
        logger.debug("Deleted old log: %s", path.name)

    if stats.deleted:
        logger.info(
            "%s %d log file(s) older than %d days from %s",
            "Would delete" if dry_run else "Deleted",
            stats.deleted_count,
            older_than_days,
            log_dir,
        )
    return stats
