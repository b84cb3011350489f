"""Post-recording processor.

This module provides the PostProcessor class that runs the whole pipeline
for one recording:

    locate -> commercials -> transcode -> reconcile -> link -> prune
    -> library refresh -> log retention sweep

Reconciliation, linking and the sweeps always run; when neither the
commercial nor the transcode stage produced anything, reconciliation is a
no-op and the link simply points at the original.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Connection

from mythpms.config.models import MythPMSConfig
from mythpms.core.process_utils import renice
from mythpms.db.types import RecordingKey, RecordingRecord
from mythpms.domain import ArtifactStage, LibrarySection
from mythpms.jobs.maintenance import sweep_old_logs
from mythpms.library.links import LibraryLinkManager
from mythpms.library.naming import LibraryTarget, compute_library_target
from mythpms.library.refresh import LibraryServerClient
from mythpms.tools.runner import ToolRunner
from mythpms.workflow.context import PipelineContext
from mythpms.workflow.exceptions import MissingArtifactError
from mythpms.workflow.locator import locate_recording
from mythpms.workflow.phases.commercials import CommercialPhase
from mythpms.workflow.phases.reconcile import ReconcilePhase
from mythpms.workflow.phases.transcode import TranscodePhase
from mythpms.workflow.state import (
    ArtifactPaths,
    ArtifactStateTracker,
    is_original_eligible,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of processing one recording."""

    key: RecordingKey
    record: RecordingRecord
    best_path: Path
    best_stage: ArtifactStage
    link_path: Path
    section: LibrarySection
    skipped_processing: bool
    commercials_removed: bool
    transcode_succeeded: bool
    pruned_links: tuple[Path, ...] = ()
    pruned_dirs: tuple[Path, ...] = ()
    refreshed: bool = False


class PostProcessor:
    """Runs the post-recording pipeline for one recording at a time."""

    def __init__(
        self,
        conn: Connection,
        config: MythPMSConfig,
        runner: ToolRunner | None = None,
        server_client: LibraryServerClient | None = None,
        log_level: int = logging.INFO,
    ) -> None:
        """Initialize the processor.

        Args:
            conn: Catalog connection.
            config: Configuration for this invocation.
            runner: Tool runner (defaults to one built from config.tools).
            server_client: Library server client (defaults to one built
                from config.library_server).
            log_level: Effective log level, used for tool verbosity.
        """
        self.conn = conn
        self.config = config
        self.runner = runner or ToolRunner(config.tools)
        self.server_client = server_client or LibraryServerClient(
            config.library_server
        )
        self.log_level = log_level
        self.links = LibraryLinkManager(config.library)

    def prepare(self, key: RecordingKey) -> tuple[PipelineContext, LibraryTarget]:
        """Locate the recording and check everything that could abort the run.

        No tool runs and nothing on disk or in the catalog changes here.

        Raises:
            AmbiguousOrMissingRecording: If the key does not match one row.
            StorageGroupNotFound: If the storage group has no directory.
            UnsupportedStorageGroup: If the group is neither movie nor TV.
            MissingArtifactError: If the catalog's file is not on disk.
        """
        located = locate_recording(self.conn, key)
        record = located.record

        target = compute_library_target(record, self.config.library)
        paths = ArtifactPaths.for_recording(record, located.storage_dir, self.config)
        logger.debug(
            "Artifacts: original=%s commercial_free=%s transcoded=%s",
            paths.original,
            paths.commercial_free,
            paths.transcoded,
        )
        logger.debug(
            "Library: section=%s directory=%s name=%s",
            target.section.value,
            target.directory,
            target.stem,
        )

        if not paths.original.is_file():
            logger.error("File name in catalog not found on file system")
            raise MissingArtifactError(paths.original)

        ctx = PipelineContext(
            conn=self.conn,
            config=self.config,
            key=key,
            record=record,
            storage_dir=located.storage_dir,
            paths=paths,
            tracker=ArtifactStateTracker(paths),
            runner=self.runner,
            log_level=self.log_level,
        )
        return ctx, target

    def run(self, key: RecordingKey) -> ProcessingResult:
        """Process one recording end to end.

        Raises:
            PipelineError: Any fatal condition; see the subclasses.
        """
        ctx, target = self.prepare(key)
        record = ctx.record
        logger.info("Original recording: %s", ctx.paths.original)

        renice(self.config.process.niceness)

        eligible = is_original_eligible(
            record, self.config.commercials.original_extension
        )
        if eligible:
            CommercialPhase(ctx).run()
            TranscodePhase(ctx).run()
        else:
            logger.info(
                "The recording %s has been modified (not .%s); commercial removal "
                "and transcoding are skipped",
                ctx.paths.original,
                self.config.commercials.original_extension,
            )

        best = ReconcilePhase(ctx).run()
        logger.info("Best recording: %s", best)

        link_path = self.links.link(target, best)
        pruned_links, pruned_dirs = self.links.prune(exclude=[link_path])

        refreshed = self.server_client.refresh_section(target.section)

        sweep_old_logs(
            self.config.run_log.directory, self.config.run_log.retention_days
        )

        return ProcessingResult(
            key=key,
            record=record,
            best_path=best,
            best_stage=ctx.tracker.stage,
            link_path=link_path,
            section=target.section,
            skipped_processing=not eligible,
            commercials_removed=ctx.tracker.commercials_removed,
            transcode_succeeded=ctx.tracker.transcode_succeeded,
            pruned_links=tuple(pruned_links),
            pruned_dirs=tuple(pruned_dirs),
            refreshed=refreshed,
        )

    def close(self) -> None:
        self.server_client.close()
