"""Tests for configure_logging."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from mythpms.config.models import LoggingConfig
from mythpms.logging.config import configure_logging, level_from_name


def test_level_from_name() -> None:
    assert level_from_name("DEBUG") == logging.DEBUG
    assert level_from_name("bogus") == logging.INFO


def test_stderr_only_by_default() -> None:
    configure_logging(LoggingConfig(level="warning"))
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "sub" / "mythpms.log"
    configure_logging(LoggingConfig(file=log_file))

    handlers = logging.getLogger().handlers
    assert [type(h) for h in handlers] == [RotatingFileHandler]
    logging.getLogger("mythpms.test").info("written")
    handlers[0].flush()
    assert "written" in log_file.read_text()


def test_file_and_stderr(tmp_path: Path) -> None:
    configure_logging(LoggingConfig(file=tmp_path / "a.log", include_stderr=True))
    assert len(logging.getLogger().handlers) == 2


def test_unwritable_file_falls_back_to_stderr(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    configure_logging(LoggingConfig(file=blocker / "mythpms.log"))

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], RotatingFileHandler)
    assert "cannot open log file" in capsys.readouterr().err
