"""Locate a recording and its storage directory in the catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Connection

from mythpms.db.queries import find_recordings, get_storage_group_dir
from mythpms.db.types import RecordingKey, RecordingRecord
from mythpms.workflow.exceptions import (
    AmbiguousOrMissingRecording,
    StorageGroupNotFound,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocatedRecording:
    """A catalog row together with the directory its file lives in."""

    record: RecordingRecord
    storage_dir: Path


def locate_recording(conn: Connection, key: RecordingKey) -> LocatedRecording:
    """Find the single catalog row for a key and resolve its storage group.

    Args:
        conn: Catalog connection.
        key: Channel id and start time from the job queue.

    Returns:
        LocatedRecording for the unique match.

    Raises:
        AmbiguousOrMissingRecording: If zero or several rows match.
        StorageGroupNotFound: If the storage group has no directory row.
    """
    records = find_recordings(conn, key)
    if len(records) != 1:
        logger.error(
            "There should be exactly one recording for this channel and time "
            "(chanid=%s, starttime=%s, count=%d)",
            key.chanid,
            key.starttime,
            len(records),
        )
        raise AmbiguousOrMissingRecording(key, len(records))

    record = records[0]
    dirname = get_storage_group_dir(conn, record.storagegroup)
    if dirname is None:
        logger.error("No directory for storage group '%s'", record.storagegroup)
        raise StorageGroupNotFound(record.storagegroup)

    logger.info(
        "Recording: title=%r subtitle=%r basename=%s storagegroup=%s "
        "programid=%s commflagged=%s",
        record.title,
        record.subtitle,
        record.basename,
        record.storagegroup,
        record.programid,
        record.commflagged,
    )
    return LocatedRecording(record=record, storage_dir=Path(dirname))
