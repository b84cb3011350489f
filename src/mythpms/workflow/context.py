"""State shared by the pipeline phases for one recording."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Connection

from mythpms.config.models import MythPMSConfig
from mythpms.db.types import RecordingKey, RecordingRecord
from mythpms.domain import CommercialFlagStatus
from mythpms.tools.runner import ToolRunner
from mythpms.workflow.state import ArtifactPaths, ArtifactStateTracker


@dataclass
class PipelineContext:
    """Everything a phase needs, passed explicitly from phase to phase.

    Attributes:
        conn: Catalog connection (written at most twice per run).
        config: Immutable configuration for this invocation.
        key: Recording identity.
        record: Catalog row as read by the locator.
        storage_dir: Directory holding the original and transcoded files.
        paths: The three artifact locations.
        tracker: Best artifact and per-stage outcomes.
        runner: Runner for every external tool.
        log_level: Effective log level, used for tool verbosity.
        commflag_status: Effective commercial-flag status, set by the
            commercial phase.
    """

    conn: Connection
    config: MythPMSConfig
    key: RecordingKey
    record: RecordingRecord
    storage_dir: Path
    paths: ArtifactPaths
    tracker: ArtifactStateTracker
    runner: ToolRunner
    log_level: int = logging.INFO
    commflag_status: CommercialFlagStatus | None = None

    @property
    def tool_log_dir(self) -> Path:
        """Directory MythTV tools and HandBrake write their logs to."""
        return self.config.run_log.directory
