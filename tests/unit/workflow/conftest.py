"""Fixtures for pipeline phase tests."""

from __future__ import annotations

import pytest

from mythpms.db.types import RecordingKey
from mythpms.workflow.context import PipelineContext
from mythpms.workflow.locator import locate_recording
from mythpms.workflow.state import ArtifactPaths, ArtifactStateTracker


@pytest.fixture
def make_ctx(catalog, config, fake_runner, add_recording):
    """Insert a recording, create its file and return a PipelineContext."""

    def _make(create_original: bool = True, **overrides) -> PipelineContext:
        row = add_recording(**overrides)
        key = RecordingKey(str(row["chanid"]), row["starttime"])
        located = locate_recording(catalog, key)
        paths = ArtifactPaths.for_recording(located.record, located.storage_dir, config)
        if create_original:
            paths.original.write_bytes(b"original recording")

        return PipelineContext(
            conn=catalog,
            config=config,
            key=key,
            record=located.record,
            storage_dir=located.storage_dir,
            paths=paths,
            tracker=ArtifactStateTracker(paths),
            runner=fake_runner,
        )

    return _make
