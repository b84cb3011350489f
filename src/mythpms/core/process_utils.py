"""Process priority and file ownership helpers."""

from __future__ import annotations

import grp
import logging
import os
import pwd
from pathlib import Path

logger = logging.getLogger(__name__)


def renice(desired: int | None, pid: int = 0) -> int | None:
    """Lower this process's CPU priority to ``desired`` if it is higher.

    Transcoding is CPU-bound; the job queue may start us at a niceness that
    competes with recording. Raising niceness never needs privileges, so a
    failure here is unexpected and only logged.

    Args:
        desired: Target niceness (e.g. 19), or None to leave it unchanged.
        pid: Process to adjust, 0 for the current process.

    Returns:
        The niceness in effect afterwards, or None if it could not be read.
    """
    try:
        actual = os.getpriority(os.PRIO_PROCESS, pid)
    except OSError as e:
        logger.warning("Cannot read process priority: %s", e)
        return None

    if desired is None or actual >= desired:
        logger.debug("No need to renice (actual=%d, desired=%s)", actual, desired)
        return actual

    try:
        os.setpriority(os.PRIO_PROCESS, pid, desired)
    except OSError as e:
        logger.warning(
            "Change process priority from %d to %d failed: %s", actual, desired, e
        )
        return actual

    logger.info("Process priority changed: nice %d -> %d", actual, desired)
    return desired


def chown_path(path: Path, owner: str | None, group: str | None) -> None:
    """Change owner and group of a file or symlink (not its target).

    Does nothing when neither owner nor group is configured.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        KeyError: If the owner or group name is unknown.
        PermissionError: If the change is not permitted.
    """
    if owner is None and group is None:
        return
    if not os.path.lexists(path):
        raise FileNotFoundError(f"Cannot change ownership, file not found: {path}")

    uid = pwd.getpwnam(owner).pw_uid if owner else -1
    gid = grp.getgrnam(group).gr_gid if group else -1
    os.chown(path, uid, gid, follow_symlinks=False)
    logger.debug("Ownership of %s set to %s:%s", path, owner or "", group or "")
