"""Shared test fixtures for mythpms."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import pytest

from mythpms.config.models import (
    CatalogConfig,
    CommercialsConfig,
    LibraryConfig,
    MythPMSConfig,
    ProcessConfig,
    RunLogConfig,
    ToolPathsConfig,
)
from mythpms.db.connection import get_connection
from mythpms.db.schema import create_schema
from mythpms.tools.models import ToolId, ToolResult
from mythpms.tools.registry import get_tool_spec

CHANID = "1021"
STARTTIME = "2016-03-06 20:30:00"


class FakeToolRunner:
    """Stands in for ToolRunner without starting processes.

    Exit codes are looked up per tool (default 0). On success, tools that
    write a file (mythtranscode ``--outfile``, HandBrakeCLI ``--output``)
    get that file created so later stages find it.
    """

    def __init__(self, returncodes: dict[ToolId, int] | None = None) -> None:
        self.returncodes = returncodes or {}
        self.calls: list[tuple[ToolId, list[str]]] = []

    @property
    def tools_called(self) -> list[ToolId]:
        return [tool_id for tool_id, _ in self.calls]

    def run(
        self,
        tool_id: ToolId,
        args: list[str],
        description: str,
        stderr_path: Path | None = None,
    ) -> ToolResult:
        self.calls.append((tool_id, list(args)))
        returncode = self.returncodes.get(tool_id, 0)
        success = get_tool_spec(tool_id).is_success(returncode)

        if success:
            for flag in ("--outfile", "--output"):
                if flag in args:
                    output = Path(args[args.index(flag) + 1])
                    output.parent.mkdir(parents=True, exist_ok=True)
                    output.write_bytes(f"{tool_id.value} output".encode())

        return ToolResult(
            tool_id=tool_id,
            args=tuple(args),
            returncode=returncode,
            success=success,
            stderr_path=stderr_path,
        )


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore root logger handlers and level after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def media_dirs(tmp_path: Path) -> dict[str, Path]:
    """Storage, scratch, library and log directories under tmp_path."""
    dirs = {
        "tv_storage": tmp_path / "storage" / "tv",
        "movie_storage": tmp_path / "storage" / "movies",
        "scratch": tmp_path / "scratch",
        "library": tmp_path / "library",
        "logs": tmp_path / "logs",
    }
    for path in dirs.values():
        path.mkdir(parents=True)
    return dirs


@pytest.fixture
def catalog_path(tmp_path: Path, media_dirs: dict[str, Path]) -> Path:
    """A SQLite catalog with the schema and the storage groups."""
    path = tmp_path / "mythconverg.db"
    conn = sqlite3.connect(path)
    create_schema(conn)
    conn.executemany(
        "INSERT INTO storagegroup (groupname, hostname, dirname) VALUES (?, ?, ?)",
        [
            ("Default", "mythbox", str(media_dirs["tv_storage"])),
            ("LiveTV", "mythbox", str(media_dirs["tv_storage"])),
            ("Videos", "mythbox", str(media_dirs["movie_storage"])),
            ("Archive", "mythbox", str(media_dirs["tv_storage"])),
        ],
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def catalog(catalog_path: Path):
    """Open SQLAlchemy connection to the test catalog."""
    with get_connection(
        CatalogConfig(driver="sqlite", database_path=catalog_path)
    ) as conn:
        yield conn


@pytest.fixture
def add_recording(catalog):
    """Insert a ``recorded`` row; keyword arguments override the defaults."""

    def _add(**overrides) -> dict:
        row = {
            "chanid": int(CHANID),
            "starttime": STARTTIME,
            "title": "The Show",
            "subtitle": "Pilot",
            "basename": "1021_20160306203000.mpg",
            "storagegroup": "Default",
            "programid": "EP012345670001",
            "originalairdate": "2016-03-06",
            "season": 1,
            "episode": 2,
            "commflagged": 0,
            "transcoded": 0,
            "filesize": 1000,
        }
        row.update(overrides)
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        catalog.exec_driver_sql(
            f"INSERT INTO recorded ({columns}) VALUES ({placeholders})",
            tuple(row.values()),
        )
        catalog.commit()
        return row

    return _add


@pytest.fixture
def config(
    tmp_path: Path, catalog_path: Path, media_dirs: dict[str, Path]
) -> MythPMSConfig:
    """Configuration pointing every directory into tmp_path."""
    return MythPMSConfig(
        catalog=CatalogConfig(driver="sqlite", database_path=catalog_path),
        tools=ToolPathsConfig(bin_dir=tmp_path / "bin"),
        commercials=CommercialsConfig(scratch_dir=media_dirs["scratch"]),
        library=LibraryConfig(root=media_dirs["library"]),
        run_log=RunLogConfig(directory=media_dirs["logs"], retention_days=None),
        process=ProcessConfig(niceness=None),
    )


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    """Tool runner where every tool succeeds unless told otherwise."""
    return FakeToolRunner()
