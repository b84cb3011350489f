"""Tool table: every external tool with its executable and success rule."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.tools.models import ToolId, ToolSpec, commflag_succeeded, exits_zero

if TYPE_CHECKING:
    from mythpms.config.models import ToolPathsConfig

TOOL_TABLE: dict[ToolId, ToolSpec] = {
    ToolId.MYTHCOMMFLAG: ToolSpec(
        tool_id=ToolId.MYTHCOMMFLAG,
        executable="mythcommflag",
        is_success=commflag_succeeded,
        description="commercial detection",
    ),
    ToolId.MYTHUTIL: ToolSpec(
        tool_id=ToolId.MYTHUTIL,
        executable="mythutil",
        is_success=exits_zero,
        description="cut list generation",
    ),
    ToolId.MYTHTRANSCODE: ToolSpec(
        tool_id=ToolId.MYTHTRANSCODE,
        executable="mythtranscode",
        is_success=exits_zero,
        description="commercial removal",
    ),
    ToolId.HANDBRAKE: ToolSpec(
        tool_id=ToolId.HANDBRAKE,
        executable="HandBrakeCLI",
        is_success=exits_zero,
        description="H.264 transcode",
    ),
}


def get_tool_spec(tool_id: ToolId) -> ToolSpec:
    """Look up a tool in the table."""
    return TOOL_TABLE[tool_id]


def resolve_executable(tool_id: ToolId, tools: ToolPathsConfig) -> Path:
    """Return the executable path for a tool.

    An explicitly configured path wins; otherwise the tool's executable
    name is joined to ``tools.bin_dir``.
    """
    configured: Path | None = getattr(tools, tool_id.value)
    if configured is not None:
        return configured
    return tools.bin_dir / TOOL_TABLE[tool_id].executable
