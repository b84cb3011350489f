"""Database connection management for the MythTV catalog.

MythTV keeps its catalog in the MySQL/MariaDB ``mythconverg`` database,
reached here through SQLAlchemy and the PyMySQL driver. A SQLite file
with the same tables can stand in for it (``driver = "sqlite"``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from functools import wraps
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.pool import NullPool

if TYPE_CHECKING:
    from mythpms.config.models import CatalogConfig

logger = logging.getLogger(__name__)

MYSQL_DRIVERNAME = "mysql+pymysql"

# SQLite "database is locked", InnoDB lock wait timeout (1205) and deadlock (1213)
_LOCK_MESSAGES = ("locked", "lock wait timeout", "deadlock")


class CatalogUnavailableError(Exception):
    """Raised when the catalog cannot be opened or is locked."""


def catalog_url(catalog: CatalogConfig) -> URL:
    """Build the SQLAlchemy URL for the configured catalog."""
    if catalog.driver == "sqlite":
        return URL.create("sqlite", database=str(catalog.database_path))
    return URL.create(
        MYSQL_DRIVERNAME,
        username=catalog.user,
        password=catalog.password,
        host=catalog.host,
        port=catalog.port,
        database=catalog.database,
        query={"charset": "utf8mb4"},
    )


def create_catalog_engine(catalog: CatalogConfig) -> Engine:
    """Create an engine for the catalog without connecting yet.

    A SQLite catalog must already exist; mythpms never creates one, since
    an empty catalog would make every lookup fail as "missing recording".

    Raises:
        CatalogUnavailableError: If a SQLite catalog file does not exist.
    """
    connect_args: dict[str, Any]
    if catalog.driver == "sqlite":
        if catalog.database_path is None or not catalog.database_path.exists():
            raise CatalogUnavailableError(
                f"Catalog database not found: {catalog.database_path}"
            )
        connect_args = {"timeout": catalog.timeout_seconds}
    else:
        wait = max(1, int(catalog.timeout_seconds))
        connect_args = {
            "connect_timeout": wait,
            # Another MythTV process may hold row locks while we run
            "init_command": f"SET SESSION innodb_lock_wait_timeout = {wait}",
        }

    # One short-lived connection per run; nothing to pool
    return create_engine(
        catalog_url(catalog), connect_args=connect_args, poolclass=NullPool
    )


@contextmanager
def get_connection(catalog: CatalogConfig) -> Iterator[Connection]:
    """Get a catalog connection that is closed on exit.

    Args:
        catalog: The ``[catalog]`` configuration section.

    Yields:
        A SQLAlchemy Connection. Statements run inside a transaction
        that the caller commits.

    Raises:
        CatalogUnavailableError: If the catalog cannot be opened.
    """
    engine = create_catalog_engine(catalog)
    try:
        try:
            conn = engine.connect()
        except SQLAlchemyError as e:
            raise CatalogUnavailableError(
                f"Cannot open catalog {catalog.location}: {e}"
            ) from e
        logger.debug("Connected to catalog %s", catalog.location)
        try:
            yield conn
        finally:
            conn.close()
    finally:
        engine.dispose()


def handle_database_locked(func):
    """Decorator to convert lock errors into CatalogUnavailableError."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OperationalError as e:
            message = str(e.orig if e.orig is not None else e).casefold()
            if any(text in message for text in _LOCK_MESSAGES):
                raise CatalogUnavailableError(
                    "Catalog is locked. Another process may be using it."
                ) from e
            raise

    return wrapper
