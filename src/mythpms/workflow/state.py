"""Artifact paths and the best-artifact tracker.

A recording can exist as up to three files:

- Original: the file MythTV recorded (``<storage>/<basename>``)
- CommercialFree: lossless cut written to the scratch directory
- Transcoded: H.264 file written beside the original

The tracker remembers which of them is currently the best and only ever
moves forward through that list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.domain import ArtifactStage

if TYPE_CHECKING:
    from mythpms.config.models import MythPMSConfig
    from mythpms.db.types import RecordingRecord

logger = logging.getLogger(__name__)


class ArtifactPromotionError(Exception):
    """Raised when promotion would not move the best artifact forward."""


@dataclass(frozen=True)
class ArtifactPaths:
    """Locations of the three artifacts of one recording."""

    original: Path
    commercial_free: Path
    transcoded: Path

    @classmethod
    def for_recording(
        cls,
        record: RecordingRecord,
        storage_dir: Path,
        config: MythPMSConfig,
    ) -> ArtifactPaths:
        stem = record.basename_stem
        scratch = config.commercials.scratch_dir
        return cls(
            original=storage_dir / record.basename,
            commercial_free=scratch
            / f"{stem}.{config.commercials.commercial_free_extension}",
            transcoded=storage_dir / f"{stem}.{config.transcode.extension}",
        )

    def for_stage(self, stage: ArtifactStage) -> Path:
        if stage is ArtifactStage.ORIGINAL:
            return self.original
        if stage is ArtifactStage.COMMERCIAL_FREE:
            return self.commercial_free
        return self.transcoded


def is_original_eligible(record: RecordingRecord, original_extension: str) -> bool:
    """Return True if the catalog still points at an as-recorded file.

    A different extension means an earlier run already replaced the file;
    detection and transcoding are then skipped and only the library link
    is maintained.
    """
    return record.basename_extension == original_extension


@dataclass
class ArtifactStateTracker:
    """Tracks the best artifact and what each stage achieved."""

    paths: ArtifactPaths
    stage: ArtifactStage = ArtifactStage.ORIGINAL
    commercials_flagged: bool = False
    cut_list_generated: bool = False
    commercials_removed: bool = False
    transcode_succeeded: bool = False
    _relocated: dict[ArtifactStage, Path] = field(default_factory=dict, repr=False)

    def best(self) -> Path:
        """Path of the current best artifact."""
        return self._relocated.get(self.stage, self.paths.for_stage(self.stage))

    def promote(self, stage: ArtifactStage) -> Path:
        """Make a later stage the best artifact.

        Raises:
            ArtifactPromotionError: If ``stage`` is not after the current one.
        """
        if stage <= self.stage:
            raise ArtifactPromotionError(
                f"Cannot promote best artifact from {self.stage.name} to {stage.name}"
            )
        logger.debug("Best artifact: %s -> %s", self.stage.name, stage.name)
        self.stage = stage
        return self.best()

    def relocate(self, new_path: Path) -> None:
        """Record that the current best artifact was moved, keeping its stage."""
        logger.debug("Best artifact moved: %s -> %s", self.best(), new_path)
        self._relocated[self.stage] = new_path

    @property
    def is_original(self) -> bool:
        return self.stage is ArtifactStage.ORIGINAL
