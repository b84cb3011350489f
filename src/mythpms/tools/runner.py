"""Single entry point for running an external tool.

Every stage calls ToolRunner.run(); the tool table decides what counts as
success, so no stage interprets exit codes itself.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.core.subprocess_utils import run_command
from mythpms.tools.models import ToolId, ToolResult
from mythpms.tools.registry import get_tool_spec, resolve_executable

if TYPE_CHECKING:
    from mythpms.config.models import ToolPathsConfig

logger = logging.getLogger(__name__)


class ToolRunner:
    """Runs tools from the tool table and reports ToolResult values.

    Children run to completion with no timeout; commercial detection and
    transcoding of a long recording take hours.
    """

    def __init__(self, tools: ToolPathsConfig) -> None:
        self._tools = tools

    def executable(self, tool_id: ToolId) -> Path:
        return resolve_executable(tool_id, self._tools)

    def run(
        self,
        tool_id: ToolId,
        args: list[str],
        description: str,
        stderr_path: Path | None = None,
    ) -> ToolResult:
        """Run a tool and classify its exit status.

        Args:
            tool_id: Tool to run.
            args: Arguments (without the executable).
            description: What this invocation does, for the log.
            stderr_path: File that receives the child's stderr (appended).

        Returns:
            ToolResult. A binary that cannot be started yields
            ``success=False`` with ``returncode=None``.
        """
        spec = get_tool_spec(tool_id)
        command = [str(self.executable(tool_id)), *args]

        logger.info("Starting %s (%s)", description, spec.executable)
        logger.debug("Command: %s", " ".join(command))

        start = time.monotonic()
        try:
            if stderr_path is not None:
                stderr_path.parent.mkdir(parents=True, exist_ok=True)
                with stderr_path.open("ab") as stderr_file:
                    _, _, returncode = run_command(command, stderr=stderr_file)
                logger.info("%s output logged to %s", spec.executable, stderr_path)
            else:
                _, _, returncode = run_command(command)
        except OSError as e:
            elapsed = time.monotonic() - start
            logger.error("%s could not be started: %s", description, e)
            return ToolResult(
                tool_id=tool_id,
                args=tuple(args),
                returncode=None,
                success=False,
                elapsed_seconds=elapsed,
                error=str(e),
                stderr_path=stderr_path,
            )

        elapsed = time.monotonic() - start
        success = spec.is_success(returncode)
        if success:
            logger.info(
                "%s succeeded (exit %d, %.0fs)", description, returncode, elapsed
            )
        elif returncode < 0:
            logger.error(
                "%s failed: killed by signal %d after %.0fs",
                description,
                -returncode,
                elapsed,
            )
        else:
            logger.error(
                "%s failed (exit %d, %.0fs)", description, returncode, elapsed
            )

        return ToolResult(
            tool_id=tool_id,
            args=tuple(args),
            returncode=returncode,
            success=success,
            elapsed_seconds=elapsed,
            stderr_path=stderr_path,
        )
