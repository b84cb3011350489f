"""Tests for the ``process`` command."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mythpms.cli import main
from mythpms.cli.exit_codes import ExitCode
from mythpms.config.models import CatalogConfig, EmailLogMode

ARGS = ["process", "1021", "20160306203000"]
LOG_NAME = "mythpms.20160306203000.1021.log"
FAILED_LOG_NAME = "mythpms.20160306203000.1021.FAILED.log"


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, fake_runner):
    """Invoke the CLI with an injected config and the fake tool runner."""

    def _invoke(config, args=ARGS):
        with patch("mythpms.workflow.processor.ToolRunner", return_value=fake_runner):
            return runner.invoke(main, args, obj={"config": config})

    return _invoke


@pytest.fixture
def recording(add_recording, media_dirs) -> Path:
    row = add_recording()
    original = media_dirs["tv_storage"] / row["basename"]
    original.write_bytes(b"original recording")
    return original


class TestProcessCommand:
    """Tests for process_command."""

    def test_success(self, invoke, config, recording, media_dirs) -> None:
        result = invoke(config)

        assert result.exit_code == ExitCode.SUCCESS, result.output
        run_log = media_dirs["logs"] / LOG_NAME
        assert run_log.exists()
        assert "Processing recording 1021@2016-03-06 20:30:00" in run_log.read_text()
        assert not (media_dirs["logs"] / FAILED_LOG_NAME).exists()
        assert not (media_dirs["logs"] / "emailQueue").exists()

        link = (
            media_dirs["library"]
            / "TV Shows/The Show/Season 01/The Show - s01e02 - Pilot.mp4"
        )
        assert link.is_symlink()

    def test_missing_recording_fails(self, invoke, config, media_dirs) -> None:
        result = invoke(config)

        assert result.exit_code == ExitCode.RECORDING_NOT_FOUND
        failed = media_dirs["logs"] / FAILED_LOG_NAME
        assert failed.exists()
        assert not (media_dirs["logs"] / LOG_NAME).exists()
        assert (media_dirs["logs"] / "emailQueue" / FAILED_LOG_NAME).exists()
        assert "failed" in result.stderr

    def test_detection_in_progress(
        self, invoke, config, add_recording, media_dirs, fake_runner
    ) -> None:
        row = add_recording(commflagged=2)
        (media_dirs["tv_storage"] / row["basename"]).write_bytes(b"x")

        result = invoke(config)

        assert result.exit_code == ExitCode.COMMFLAG_CONFLICT
        assert fake_runner.calls == []

    def test_missing_file(self, invoke, config, add_recording) -> None:
        add_recording()
        assert invoke(config).exit_code == ExitCode.MISSING_ARTIFACT

    def test_missing_catalog(self, invoke, config, tmp_path, media_dirs) -> None:
        config = replace(
            config,
            catalog=CatalogConfig(driver="sqlite", database_path=tmp_path / "none.db"),
        )
        result = invoke(config)
        assert result.exit_code == ExitCode.DATA_ERROR
        assert (media_dirs["logs"] / FAILED_LOG_NAME).exists()

    def test_email_never(self, invoke, config, media_dirs) -> None:
        config = replace(
            config, run_log=replace(config.run_log, email_mode=EmailLogMode.NEVER)
        )
        invoke(config)
        assert not (media_dirs["logs"] / "emailQueue").exists()

    def test_email_always(self, invoke, config, recording, media_dirs) -> None:
        config = replace(
            config, run_log=replace(config.run_log, email_mode=EmailLogMode.ALWAYS)
        )
        result = invoke(config)
        assert result.exit_code == ExitCode.SUCCESS
        assert (media_dirs["logs"] / "emailQueue" / LOG_NAME).exists()

    def test_unexpected_error(self, invoke, config, recording, media_dirs) -> None:
        with patch(
            "mythpms.cli.process.PostProcessor.run", side_effect=RuntimeError("boom")
        ):
            result = invoke(config)
        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "boom" in (media_dirs["logs"] / FAILED_LOG_NAME).read_text()

    def test_invalid_starttime(self, invoke, config) -> None:
        result = invoke(config, ["process", "1021", "tonight"])
        assert result.exit_code == 2
        assert "Invalid start time" in result.output


def test_config_error_exit_code(runner, tmp_path) -> None:
    config_file = tmp_path / "config.toml"
    config_file.write_text("[process\n")
    result = runner.invoke(main, ["--config", str(config_file), "prune-logs"])
    assert result.exit_code == ExitCode.CONFIG_ERROR


@pytest.mark.parametrize(
    ("section", "field"),
    [("commercials", "commercial_free_extension"), ("transcode", "extension")],
)
def test_artifact_extension_collision_exit_code(
    invoke, config, recording, fake_runner, section, field
) -> None:
    colliding = replace(
        config, **{section: replace(getattr(config, section), **{field: "mpg"})}
    )

    result = invoke(colliding)

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "Artifact extensions must differ" in result.stderr
    assert recording.read_bytes() == b"original recording"
    assert fake_runner.calls == []
