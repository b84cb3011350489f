"""Tests for config/loader.py."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mythpms.config.env import EnvReader
from mythpms.config.loader import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    check_artifact_paths,
    get_config,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from mythpms.config.models import (
    CatalogConfig,
    CommercialsConfig,
    LibraryConfig,
    LibraryServerConfig,
    MythPMSConfig,
    ToolPathsConfig,
    TranscodeConfig,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaultConfigPath:
    """Tests for get_default_config_path."""

    def test_default(self) -> None:
        assert get_default_config_path(EnvReader(env={})) == DEFAULT_CONFIG_FILE

    def test_env_override(self) -> None:
        reader = EnvReader(env={"MYTHPMS_CONFIG_PATH": "/srv/mythpms.toml"})
        assert get_default_config_path(reader) == Path("/srv/mythpms.toml")


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_config_file(tmp_path / "missing.toml") == {}

    def test_parses_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", '[process]\nniceness = 5\n')
        assert load_config_file(path) == {"process": {"niceness": 5}}

    def test_malformed_non_strict_returns_empty(self, tmp_path: Path, caplog) -> None:
        path = _write(tmp_path / "c.toml", "[process\n")
        assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text

    def test_malformed_strict_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", "[process\n")
        with pytest.raises(ConfigError):
            load_config_file(path, strict=True)


class TestGetConfig:
    """Tests for get_config precedence."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = get_config(tmp_path / "missing.toml", env_reader=EnvReader(env={}))
        assert config == MythPMSConfig()

    def test_precedence_cli_over_env_over_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "c.toml",
            '[catalog]\ndatabase_path = "/from/file.db"\n'
            '[run_log]\ndirectory = "/from/file/logs"\n'
            '[process]\nniceness = 10\n',
        )
        reader = EnvReader(
            env={"MYTHPMS_DATABASE_PATH": "/from/env.db", "MYTHPMS_NICENESS": "5"}
        )
        config = get_config(
            path, database_path=Path("/from/cli.db"), env_reader=reader
        )
        assert config.catalog.database_path == Path("/from/cli.db")
        assert config.catalog.driver == "sqlite"
        assert config.process.niceness == 5
        assert config.run_log.directory == Path("/from/file/logs")

    def test_config_path_from_env(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", '[transcode]\npreset = "Fast 720p30"\n')
        reader = EnvReader(env={"MYTHPMS_CONFIG_PATH": str(path)})
        assert get_config(env_reader=reader).transcode.preset == "Fast 720p30"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", '[transcode]\nextension = ".mp4"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            get_config(path, env_reader=EnvReader(env={}))


class TestValidateConfig:
    """Tests for validate_config cross-field checks."""

    def test_default_config_is_valid(self) -> None:
        assert validate_config(MythPMSConfig()) == []

    def test_overlapping_storage_groups(self) -> None:
        config = MythPMSConfig(
            library=LibraryConfig(
                movie_storage_groups=("Videos", "Default"),
                tv_storage_groups=("Default",),
            )
        )
        assert any("both movie and TV" in e for e in validate_config(config))

    def test_enabled_server_needs_url_and_sections(self) -> None:
        config = MythPMSConfig(library_server=LibraryServerConfig(enabled=True))
        errors = validate_config(config)
        assert any("url" in e for e in errors)
        assert any("section" in e for e in errors)

    def test_missing_override_file(self, tmp_path: Path) -> None:
        config = MythPMSConfig(
            commercials=CommercialsConfig(
                override_settings_file=tmp_path / "missing.txt"
            )
        )
        assert any("override file" in e for e in validate_config(config))

    def test_tool_not_executable(self, tmp_path: Path) -> None:
        tool = tmp_path / "mythcommflag"
        tool.write_text("#!/bin/sh\n")
        os.chmod(tool, 0o644)
        config = MythPMSConfig(tools=ToolPathsConfig(mythcommflag=tool))
        assert any("not executable" in e for e in validate_config(config))


class TestCheckArtifactPaths:
    """Tests for the fatal artifact-extension check."""

    def test_default_config_passes(self) -> None:
        check_artifact_paths(MythPMSConfig())

    def test_transcode_matches_original(self) -> None:
        config = MythPMSConfig(transcode=TranscodeConfig(extension="mpg"))
        with pytest.raises(ConfigError, match="transcode.extension"):
            check_artifact_paths(config)

    def test_commercial_free_matches_original(self) -> None:
        config = MythPMSConfig(
            commercials=CommercialsConfig(commercial_free_extension="mpg")
        )
        with pytest.raises(ConfigError, match="commercial_free_extension"):
            check_artifact_paths(config)

    def test_commercial_free_matches_transcode_ignoring_case(self) -> None:
        config = MythPMSConfig(
            commercials=CommercialsConfig(commercial_free_extension="MP4")
        )
        with pytest.raises(ConfigError, match="transcode.extension"):
            check_artifact_paths(config)

    def test_collision_is_not_a_warning(self) -> None:
        config = MythPMSConfig(transcode=TranscodeConfig(extension="mpg"))
        assert validate_config(config) == []


def test_catalog_file_ignored_by_mysql_driver_is_reported() -> None:
    config = MythPMSConfig(catalog=CatalogConfig(database_path=Path("/srv/myth.db")))
    assert any("is ignored" in e for e in validate_config(config))
