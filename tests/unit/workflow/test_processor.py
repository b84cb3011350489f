"""End-to-end tests for PostProcessor with a fake tool runner."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mythpms.db.types import RecordingKey
from mythpms.domain import ArtifactStage, LibrarySection
from mythpms.tools.models import ToolId
from mythpms.workflow.exceptions import (
    AmbiguousOrMissingRecording,
    CommercialFlagConflict,
    MissingArtifactError,
    UnsupportedStorageGroup,
)
from mythpms.workflow.processor import PostProcessor

KEY = RecordingKey("1021", "2016-03-06 20:30:00")
TV_LINK = Path("TV Shows/The Show/Season 01/The Show - s01e02 - Pilot")


@pytest.fixture
def server_client():
    client = MagicMock()
    client.refresh_section.return_value = True
    return client


@pytest.fixture
def processor(catalog, config, fake_runner, server_client) -> PostProcessor:
    return PostProcessor(catalog, config, runner=fake_runner, server_client=server_client)


def _record_with_file(add_recording, storage: Path, **overrides) -> Path:
    row = add_recording(**overrides)
    original = storage / row["basename"]
    original.write_bytes(b"original recording")
    return original


def _catalog_basename(catalog) -> str:
    return catalog.exec_driver_sql("SELECT basename FROM recorded").fetchone()[0]


class TestFullPipeline:
    """A fresh recording goes through every stage."""

    def test_tv_recording(
        self, processor, add_recording, catalog, media_dirs, fake_runner, server_client
    ) -> None:
        original = _record_with_file(add_recording, media_dirs["tv_storage"])

        result = processor.run(KEY)

        assert fake_runner.tools_called == [
            ToolId.MYTHCOMMFLAG,
            ToolId.MYTHUTIL,
            ToolId.MYTHTRANSCODE,
            ToolId.HANDBRAKE,
        ]
        assert result.best_stage is ArtifactStage.TRANSCODED
        assert result.commercials_removed and result.transcode_succeeded
        assert not result.skipped_processing

        transcoded = media_dirs["tv_storage"] / "1021_20160306203000.mp4"
        assert result.best_path == transcoded
        assert _catalog_basename(catalog) == transcoded.name
        assert not original.exists()
        assert not list(media_dirs["scratch"].iterdir())

        link = media_dirs["library"] / TV_LINK.with_suffix(".mp4")
        assert result.link_path == link
        assert link.is_symlink()
        assert Path(os.path.realpath(link)) == transcoded.resolve()

        assert result.section is LibrarySection.TV
        server_client.refresh_section.assert_called_once_with(LibrarySection.TV)
        assert result.refreshed

    def test_movie_recording(self, processor, add_recording, media_dirs) -> None:
        _record_with_file(
            add_recording,
            media_dirs["movie_storage"],
            title="Foo: Bar",
            subtitle="",
            storagegroup="Videos",
            programid="MV001234560000",
            originalairdate="2001-05-01",
        )

        result = processor.run(KEY)

        assert result.section is LibrarySection.MOVIE
        assert result.link_path == (
            media_dirs["library"] / "Movies" / "Foo_ Bar (2001)" / "Foo_ Bar (2001).mp4"
        )
        assert result.link_path.is_symlink()


class TestDegradedRuns:
    """Tool failures leave the recording linked anyway."""

    def test_every_tool_fails(
        self, processor, add_recording, catalog, media_dirs, fake_runner
    ) -> None:
        fake_runner.returncodes.update(
            {ToolId.MYTHCOMMFLAG: 255, ToolId.HANDBRAKE: 1}
        )
        original = _record_with_file(add_recording, media_dirs["tv_storage"])

        result = processor.run(KEY)

        assert result.best_stage is ArtifactStage.ORIGINAL
        assert original.exists()
        assert _catalog_basename(catalog) == original.name
        link = media_dirs["library"] / TV_LINK.with_suffix(".mpg")
        assert result.link_path == link
        assert Path(os.path.realpath(link)) == original.resolve()

    def test_transcode_fails_after_cut(
        self, processor, add_recording, catalog, media_dirs, fake_runner
    ) -> None:
        fake_runner.returncodes[ToolId.HANDBRAKE] = 1
        _record_with_file(add_recording, media_dirs["tv_storage"])

        result = processor.run(KEY)

        assert result.best_stage is ArtifactStage.COMMERCIAL_FREE
        assert result.best_path == media_dirs["tv_storage"] / "1021_20160306203000.mp2"
        assert _catalog_basename(catalog) == "1021_20160306203000.mp2"
        assert result.link_path.suffix == ".mp2"

    def test_commercial_free_channel_transcodes_original(
        self, processor, add_recording, media_dirs, fake_runner
    ) -> None:
        _record_with_file(add_recording, media_dirs["tv_storage"], commflagged=3)

        result = processor.run(KEY)

        assert fake_runner.tools_called == [ToolId.HANDBRAKE]
        args = fake_runner.calls[0][1]
        assert args[args.index("--input") + 1].endswith(".mpg")
        assert result.best_stage is ArtifactStage.TRANSCODED


class TestRerun:
    """A recording that was already processed is only re-linked."""

    def test_second_run_only_relinks(
        self, processor, add_recording, catalog, media_dirs, fake_runner
    ) -> None:
        _record_with_file(add_recording, media_dirs["tv_storage"])
        first = processor.run(KEY)
        fake_runner.calls.clear()
        first.link_path.unlink()

        second = processor.run(KEY)

        assert fake_runner.calls == []
        assert second.skipped_processing
        assert second.best_path == first.best_path
        assert second.link_path == first.link_path
        assert second.link_path.is_symlink()
        assert _catalog_basename(catalog) == first.best_path.name


class TestFatalErrors:
    """Fatal errors abort before any tool runs."""

    def test_missing_recording(self, processor, fake_runner) -> None:
        with pytest.raises(AmbiguousOrMissingRecording):
            processor.run(KEY)
        assert fake_runner.calls == []

    def test_missing_file(self, processor, add_recording, fake_runner) -> None:
        add_recording()
        with pytest.raises(MissingArtifactError):
            processor.run(KEY)
        assert fake_runner.calls == []

    def test_unsupported_storage_group(
        self, processor, add_recording, media_dirs, fake_runner
    ) -> None:
        _record_with_file(add_recording, media_dirs["tv_storage"], storagegroup="Archive")
        with pytest.raises(UnsupportedStorageGroup):
            processor.run(KEY)
        assert fake_runner.calls == []

    def test_detection_in_progress(
        self, processor, add_recording, media_dirs, fake_runner
    ) -> None:
        original = _record_with_file(
            add_recording, media_dirs["tv_storage"], commflagged=2
        )
        with pytest.raises(CommercialFlagConflict):
            processor.run(KEY)
        assert fake_runner.calls == []
        assert original.exists()
        assert not any(media_dirs["library"].iterdir())


def test_prunes_stale_links(processor, add_recording, media_dirs) -> None:
    stale_dir = media_dirs["library"] / "TV Shows" / "Gone Show" / "Season 01"
    stale_dir.mkdir(parents=True)
    stale_link = stale_dir / "Gone Show - s01e01 - Old.mp4"
    stale_link.symlink_to(media_dirs["tv_storage"] / "deleted.mp4")
    _record_with_file(add_recording, media_dirs["tv_storage"])

    result = processor.run(KEY)

    assert stale_link in result.pruned_links
    assert not (media_dirs["library"] / "TV Shows" / "Gone Show").exists()
    assert result.link_path.is_symlink()
