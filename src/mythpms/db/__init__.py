"""Catalog access layer for mythpms.

Usage:
    from mythpms.db import get_connection, find_recordings, RecordingKey
"""

from mythpms.db.connection import (
    CatalogUnavailableError,
    catalog_url,
    create_catalog_engine,
    get_connection,
)
from mythpms.db.queries import (
    find_recordings,
    get_storage_group_dir,
    replace_recording_file,
    set_commflag_status,
)
from mythpms.db.schema import SCHEMA_SQL, SCHEMA_VERSION, create_schema
from mythpms.db.types import RecordingKey, RecordingRecord

__all__ = [
    # Connection
    "CatalogUnavailableError",
    "catalog_url",
    "create_catalog_engine",
    "get_connection",
    # Queries
    "find_recordings",
    "get_storage_group_dir",
    "replace_recording_file",
    "set_commflag_status",
    # Schema
    "SCHEMA_SQL",
    "SCHEMA_VERSION",
    "create_schema",
    # Types
    "RecordingKey",
    "RecordingRecord",
]
