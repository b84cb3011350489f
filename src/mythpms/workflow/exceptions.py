"""Fatal pipeline errors.

Each subclass aborts the run: the run log is marked failed and the CLI
exits with the code mapped to the error. Tool failures inside a stage are
not exceptions; they are reported as ToolResult values.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mythpms.db.types import RecordingKey


class PipelineError(Exception):
    """Base class for errors that abort processing of a recording."""


class AmbiguousOrMissingRecording(PipelineError):
    """The catalog does not hold exactly one row for the key."""

    def __init__(self, key: RecordingKey, count: int) -> None:
        self.key = key
        self.count = count
        super().__init__(
            f"Expected exactly one recording for channel {key.chanid} at "
            f"{key.starttime}, found {count}"
        )


class StorageGroupNotFound(PipelineError):
    """The recording's storage group has no directory in the catalog."""

    def __init__(self, group_name: str) -> None:
        self.group_name = group_name
        super().__init__(f"Storage group '{group_name}' has no directory")


class UnknownCommercialFlagStatus(PipelineError):
    """``recorded.commflagged`` holds a value outside the known statuses."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Commercial flag status cannot be interpreted: {value!r}")


class CommercialFlagConflict(PipelineError):
    """Commercial detection is already running for this recording."""


class MissingArtifactError(PipelineError):
    """The file named in the catalog does not exist on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File named in catalog not found: {path}")


class UnsupportedStorageGroup(PipelineError):
    """The storage group maps to neither the movie nor the TV library."""

    def __init__(self, group_name: str) -> None:
        self.group_name = group_name
        super().__init__(
            f"Recording is in storage group '{group_name}', which is neither "
            "a movie nor a TV storage group"
        )


class ReconciliationError(PipelineError):
    """The catalog could not be pointed at the best artifact."""
