"""Catalog queries used by the post-processing pipeline.

All functions take an open connection. Reads never commit; writes note
whether they commit so callers know where the transaction boundary is.
Statements use named parameters, which SQLAlchemy renders in whatever
style the catalog's driver expects.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from mythpms.db.connection import handle_database_locked
from mythpms.db.types import RecordingKey, RecordingRecord

_KEY_WHERE = "chanid = :chanid AND starttime = :starttime"

_RECORDING_COLUMNS = (
    "chanid, starttime, title, subtitle, basename, storagegroup, programid, "
    "originalairdate, season, episode, commflagged, transcoded, filesize"
)


def _key_params(key: RecordingKey) -> dict[str, str]:
    return {"chanid": key.chanid, "starttime": key.starttime}


def _as_text(value: Any) -> Any:
    """Render MySQL DATETIME/DATE values the way SQLite stores them."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    return value


def _row_to_recording(row: Mapping[str, Any]) -> RecordingRecord:
    """Convert a database row to RecordingRecord using named columns."""
    return RecordingRecord(
        chanid=str(row["chanid"]),
        starttime=_as_text(row["starttime"]),
        title=row["title"] or "",
        subtitle=row["subtitle"] or "",
        basename=row["basename"],
        storagegroup=row["storagegroup"],
        programid=row["programid"] or "",
        originalairdate=_as_text(row["originalairdate"]),
        season=row["season"] or 0,
        episode=row["episode"] or 0,
        commflagged=row["commflagged"],
        transcoded=bool(row["transcoded"]),
        filesize=row["filesize"] or 0,
    )


def find_recordings(conn: Connection, key: RecordingKey) -> list[RecordingRecord]:
    """Return every ``recorded`` row matching the key.

    Normally zero or one row; callers decide what more than one means.
    """
    result = conn.execute(
        text(f"SELECT {_RECORDING_COLUMNS} FROM recorded WHERE {_KEY_WHERE}"),
        _key_params(key),
    )
    return [_row_to_recording(row) for row in result.mappings()]


def get_storage_group_dir(conn: Connection, group_name: str) -> str | None:
    """Return the directory registered for a storage group, or None."""
    row = (
        conn.execute(
            text(
                "SELECT dirname FROM storagegroup WHERE groupname = :groupname "
                "ORDER BY id LIMIT 1"
            ),
            {"groupname": group_name},
        )
        .mappings()
        .first()
    )
    return row["dirname"] if row else None


@handle_database_locked
def set_commflag_status(conn: Connection, key: RecordingKey, status: int) -> int:
    """Update ``recorded.commflagged`` and commit.

    Returns:
        Number of rows updated.
    """
    try:
        result = conn.execute(
            text(f"UPDATE recorded SET commflagged = :status WHERE {_KEY_WHERE}"),
            {"status": int(status), **_key_params(key)},
        )
        conn.commit()
    except SQLAlchemyError:
        conn.rollback()
        raise
    return result.rowcount


@handle_database_locked
def replace_recording_file(
    conn: Connection,
    key: RecordingKey,
    basename: str,
    filesize: int,
) -> tuple[int, int, int]:
    """Point the catalog row at a new file and drop its seek data.

    Updates basename, filesize and the transcoded flag in one statement,
    then deletes the bookmark (``recordedmarkup``) and seek-index
    (``recordedseek``) rows for the recording, which describe byte offsets
    of the old file. All three statements commit together.

    Returns:
        Tuple of (recorded rows updated, markup rows deleted, seek rows deleted).
    """
    params = _key_params(key)
    try:
        updated = conn.execute(
            text(
                "UPDATE recorded SET basename = :basename, filesize = :filesize, "
                f"transcoded = 1 WHERE {_KEY_WHERE}"
            ),
            {"basename": basename, "filesize": filesize, **params},
        ).rowcount
        markup = conn.execute(
            text(f"DELETE FROM recordedmarkup WHERE {_KEY_WHERE}"), params
        ).rowcount
        seek = conn.execute(
            text(f"DELETE FROM recordedseek WHERE {_KEY_WHERE}"), params
        ).rowcount
        conn.commit()
    except SQLAlchemyError:
        conn.rollback()
        raise
    return updated, markup, seek
