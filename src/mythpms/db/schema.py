"""Catalog schema for the tables mythpms reads and writes.

The DDL mirrors the columns MythTV's ``mythconverg`` database uses for the
four tables involved, so a test catalog (or a SQLite export) behaves like
the real one for every query in :mod:`mythpms.db.queries`.
"""

import sqlite3

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS recorded (
    chanid INTEGER NOT NULL,
    starttime TEXT NOT NULL,
    title TEXT NOT NULL DEFAULT '',
    subtitle TEXT NOT NULL DEFAULT '',
    basename TEXT NOT NULL,
    storagegroup TEXT NOT NULL DEFAULT 'Default',
    programid TEXT NOT NULL DEFAULT '',
    originalairdate TEXT,
    season INTEGER NOT NULL DEFAULT 0,
    episode INTEGER NOT NULL DEFAULT 0,
    commflagged INTEGER NOT NULL DEFAULT 0,
    transcoded INTEGER NOT NULL DEFAULT 0,
    filesize INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_recorded_key ON recorded(chanid, starttime);

CREATE TABLE IF NOT EXISTS storagegroup (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    groupname TEXT NOT NULL,
    hostname TEXT NOT NULL DEFAULT '',
    dirname TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS recordedmarkup (
    chanid INTEGER NOT NULL,
    starttime TEXT NOT NULL,
    mark INTEGER NOT NULL DEFAULT 0,
    type INTEGER NOT NULL DEFAULT 0,
    data INTEGER
);

CREATE TABLE IF NOT EXISTS recordedseek (
    chanid INTEGER NOT NULL,
    starttime TEXT NOT NULL,
    mark INTEGER NOT NULL DEFAULT 0,
    offset INTEGER NOT NULL,
    type INTEGER NOT NULL DEFAULT 0
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the catalog tables if they do not exist."""
    conn.executescript(SCHEMA_SQL)
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    conn.commit()
