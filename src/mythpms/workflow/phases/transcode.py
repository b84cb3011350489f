"""Transcode phase: encode the best artifact to H.264 with HandBrakeCLI."""

from __future__ import annotations

import logging

from mythpms.domain import ArtifactStage, CommercialFlagStatus
from mythpms.logging.runlog import recording_log_name
from mythpms.tools import ToolId, ToolResult, handbrake_args
from mythpms.workflow.context import PipelineContext

logger = logging.getLogger(__name__)

HANDBRAKE_LOG_PREFIX = "HandBrakeCLI"


class TranscodePhase:
    """Video transcoding phase using HandBrakeCLI."""

    def __init__(self, ctx: PipelineContext) -> None:
        self.ctx = ctx

    def run(self) -> ToolResult:
        """Transcode the current best artifact.

        A clean HandBrakeCLI exit only means the output was muxed; it is
        accepted as success without inspecting the output.

        Returns:
            The HandBrakeCLI ToolResult.
        """
        ctx = self.ctx
        source = ctx.tracker.best()
        output = ctx.paths.transcoded
        stderr_path = ctx.tool_log_dir / recording_log_name(
            HANDBRAKE_LOG_PREFIX, ctx.key
        )

        result = ctx.runner.run(
            ToolId.HANDBRAKE,
            handbrake_args(source, output, ctx.config.transcode, ctx.log_level),
            f"Transcode {source.name} -> {output.name}",
            stderr_path=stderr_path,
        )
        if not result.success:
            return result

        ctx.tracker.promote(ArtifactStage.TRANSCODED)
        ctx.tracker.transcode_succeeded = True
        logger.info("H.264 recording: %s", output)

        if (
            not ctx.tracker.commercials_removed
            and ctx.commflag_status is not CommercialFlagStatus.COMMERCIAL_FREE_CHANNEL
        ):
            logger.warning(
                "Commercials were not removed; they remain in the transcoded file"
            )
        return result
