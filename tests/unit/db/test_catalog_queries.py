"""Tests for catalog queries."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime

import pytest

from mythpms.config.models import CatalogConfig
from mythpms.db.connection import CatalogUnavailableError, get_connection
from mythpms.db.queries import (
    _row_to_recording,
    find_recordings,
    get_storage_group_dir,
    replace_recording_file,
    set_commflag_status,
)
from mythpms.db.types import RecordingKey
from mythpms.domain import CommercialFlagStatus, MediaType

KEY = RecordingKey.parse("1021", "20160306203000")


def _add_markup(conn, chanid: int, starttime: str) -> None:
    conn.exec_driver_sql(
        "INSERT INTO recordedmarkup (chanid, starttime, mark, type) VALUES (?, ?, 10, 4)",
        (chanid, starttime),
    )
    conn.exec_driver_sql(
        "INSERT INTO recordedseek (chanid, starttime, mark, offset, type) "
        "VALUES (?, ?, 10, 4096, 9)",
        (chanid, starttime),
    )
    conn.commit()


def _count(conn, table: str, chanid: int, starttime: str) -> int:
    return conn.exec_driver_sql(
        f"SELECT COUNT(*) FROM {table} WHERE chanid = ? AND starttime = ?",
        (chanid, starttime),
    ).fetchone()[0]


class TestFindRecordings:
    """Tests for find_recordings."""

    def test_no_match(self, catalog) -> None:
        assert find_recordings(catalog, KEY) == []

    def test_single_match(self, catalog, add_recording) -> None:
        add_recording(subtitle="", originalairdate=None)
        records = find_recordings(catalog, KEY)

        assert len(records) == 1
        record = records[0]
        assert record.chanid == "1021"
        assert record.starttime == "2016-03-06 20:30:00"
        assert record.subtitle == ""
        assert record.air_year == ""
        assert record.basename_stem == "1021_20160306203000"
        assert record.basename_extension == "mpg"
        assert record.media_type is MediaType.EPISODE
        assert record.key == KEY

    def test_other_keys_ignored(self, catalog, add_recording) -> None:
        add_recording()
        add_recording(chanid=1022)
        add_recording(starttime="2016-03-06 21:00:00")
        assert len(find_recordings(catalog, KEY)) == 1

    def test_duplicates_returned(self, catalog, add_recording) -> None:
        add_recording()
        add_recording(basename="1021_20160306203000_dup.mpg")
        assert len(find_recordings(catalog, KEY)) == 2


class TestStorageGroupDir:
    """Tests for get_storage_group_dir."""

    def test_known_group(self, catalog, media_dirs) -> None:
        assert get_storage_group_dir(catalog, "Videos") == str(
            media_dirs["movie_storage"]
        )

    def test_unknown_group(self, catalog) -> None:
        assert get_storage_group_dir(catalog, "Nope") is None


class TestSetCommflagStatus:
    """Tests for set_commflag_status."""

    def test_updates_and_commits(self, catalog, add_recording, catalog_path) -> None:
        add_recording()
        assert set_commflag_status(catalog, KEY, CommercialFlagStatus.DONE) == 1

        other = sqlite3.connect(catalog_path)
        value = other.execute("SELECT commflagged FROM recorded").fetchone()[0]
        other.close()
        assert value == 1

    def test_no_row(self, catalog) -> None:
        assert set_commflag_status(catalog, KEY, CommercialFlagStatus.DONE) == 0


class TestReplaceRecordingFile:
    """Tests for replace_recording_file."""

    def test_updates_row_and_clears_derived_tables(
        self, catalog, add_recording
    ) -> None:
        add_recording()
        _add_markup(catalog, 1021, "2016-03-06 20:30:00")
        _add_markup(catalog, 1022, "2016-03-06 20:30:00")

        updated, markup, seek = replace_recording_file(
            catalog, KEY, "1021_20160306203000.mp4", 4242
        )

        assert (updated, markup, seek) == (1, 1, 1)
        row = catalog.exec_driver_sql(
            "SELECT basename, filesize, transcoded FROM recorded"
        ).fetchone()
        assert tuple(row) == ("1021_20160306203000.mp4", 4242, 1)
        assert _count(catalog, "recordedmarkup", 1021, "2016-03-06 20:30:00") == 0
        assert _count(catalog, "recordedseek", 1021, "2016-03-06 20:30:00") == 0
        # Another recording's seek data is untouched
        assert _count(catalog, "recordedseek", 1022, "2016-03-06 20:30:00") == 1

    def test_missing_row_reports_zero(self, catalog) -> None:
        assert replace_recording_file(catalog, KEY, "x.mp4", 1)[0] == 0

    def test_locked_catalog_raises_unavailable(self, catalog_path, add_recording) -> None:
        add_recording()
        blocker = sqlite3.connect(catalog_path)
        blocker.execute("BEGIN EXCLUSIVE")
        catalog = CatalogConfig(
            driver="sqlite", database_path=catalog_path, timeout_seconds=0.1
        )
        try:
            with get_connection(catalog) as conn:
                with pytest.raises(CatalogUnavailableError):
                    replace_recording_file(conn, KEY, "x.mp4", 1)
        finally:
            blocker.rollback()
            blocker.close()


def test_mysql_date_columns_read_as_catalog_text() -> None:
    row = {
        "chanid": 1021,
        "starttime": datetime(2016, 3, 6, 20, 30),
        "title": "The Show",
        "subtitle": None,
        "basename": "1021_20160306203000.mpg",
        "storagegroup": "Default",
        "programid": "EP012345670001",
        "originalairdate": date(2016, 3, 6),
        "season": 1,
        "episode": 2,
        "commflagged": 0,
        "transcoded": 0,
        "filesize": 1000,
    }
    record = _row_to_recording(row)
    assert record.key == KEY
    assert record.originalairdate == "2016-03-06"
    assert record.air_year == "2016"
    assert record.subtitle == ""
