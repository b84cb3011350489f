"""Commercial phase: detect, cut-list and remove commercials.

The three steps form a chain; any failure ends the chain but never the
run, which carries on with the best artifact produced so far.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from mythpms.db.queries import set_commflag_status
from mythpms.db.types import RecordingRecord
from mythpms.domain import ArtifactStage, CommercialFlagStatus
from mythpms.tools import (
    ToolId,
    commflag_args,
    gencutlist_args,
    remove_commercials_args,
)
from mythpms.workflow.context import PipelineContext
from mythpms.workflow.exceptions import (
    CommercialFlagConflict,
    UnknownCommercialFlagStatus,
)

logger = logging.getLogger(__name__)


def effective_commflag_status(
    record: RecordingRecord, free_channels: Collection[str]
) -> CommercialFlagStatus:
    """Commercial-flag status after applying the commercial-free channel list.

    Raises:
        UnknownCommercialFlagStatus: If the catalog value is not recognized.
    """
    if record.chanid in free_channels:
        logger.debug("Channel %s is in the commercial-free list", record.chanid)
        return CommercialFlagStatus.COMMERCIAL_FREE_CHANNEL
    try:
        return CommercialFlagStatus(int(record.commflagged))
    except (TypeError, ValueError) as e:
        raise UnknownCommercialFlagStatus(record.commflagged) from e


class CommercialPhase:
    """Runs mythcommflag, mythutil and mythtranscode as needed."""

    def __init__(self, ctx: PipelineContext) -> None:
        self.ctx = ctx

    def run(self) -> None:
        """Run the commercial chain for the recording.

        Raises:
            UnknownCommercialFlagStatus: If the catalog status is unrecognized.
            CommercialFlagConflict: If detection is already running
                (raised before any tool is started).
        """
        ctx = self.ctx
        status = effective_commflag_status(
            ctx.record, ctx.config.commercials.free_channels
        )
        ctx.commflag_status = status

        if status is CommercialFlagStatus.PROCESSING:
            logger.error("Commercial detection is still running for this recording")
            raise CommercialFlagConflict(
                f"mythcommflag is already processing {ctx.key}; let it finish"
            )

        if status is CommercialFlagStatus.COMMERCIAL_FREE_CHANNEL:
            logger.info("No need to flag commercials: commercial-free channel")
            return

        if status is CommercialFlagStatus.DONE:
            logger.info("No need to flag commercials: already flagged")
            ctx.tracker.commercials_flagged = True
        elif not self._flag_commercials():
            return

        if not self._generate_cut_list():
            return
        self._remove_commercials()

    def _flag_commercials(self) -> bool:
        ctx = self.ctx
        result = ctx.runner.run(
            ToolId.MYTHCOMMFLAG,
            commflag_args(
                ctx.key,
                ctx.tool_log_dir,
                ctx.log_level,
                ctx.config.commercials.override_settings_file,
            ),
            f"Commercial detection in {ctx.paths.original.name}",
        )
        if not result.success:
            return False

        logger.info("Number of commercials flagged: %d", result.returncode)
        set_commflag_status(ctx.conn, ctx.key, CommercialFlagStatus.DONE)
        ctx.tracker.commercials_flagged = True
        return True

    def _generate_cut_list(self) -> bool:
        ctx = self.ctx
        result = ctx.runner.run(
            ToolId.MYTHUTIL,
            gencutlist_args(ctx.key, ctx.tool_log_dir, ctx.log_level),
            "Cut list generation",
        )
        ctx.tracker.cut_list_generated = result.success
        return result.success

    def _remove_commercials(self) -> bool:
        ctx = self.ctx
        outfile = ctx.paths.commercial_free
        try:
            outfile.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create scratch directory %s: %s", outfile.parent, e)
            return False

        result = ctx.runner.run(
            ToolId.MYTHTRANSCODE,
            remove_commercials_args(
                ctx.key, outfile, ctx.tool_log_dir, ctx.log_level
            ),
            f"Commercial removal into {outfile}",
        )
        if not result.success:
            return False

        ctx.tracker.promote(ArtifactStage.COMMERCIAL_FREE)
        ctx.tracker.commercials_removed = True
        logger.info("Commercial-free recording: %s", outfile)
        return True
