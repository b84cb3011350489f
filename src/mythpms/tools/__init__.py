"""External tool table and runner.

Usage:
    from mythpms.tools import ToolId, ToolRunner
    result = ToolRunner(config.tools).run(ToolId.MYTHUTIL, args, "cut list")
"""

from mythpms.tools.commands import (
    commflag_args,
    gencutlist_args,
    handbrake_args,
    handbrake_verbosity,
    myth_log_level,
    remove_commercials_args,
)
from mythpms.tools.models import (
    COMMFLAG_MAX_SUCCESS_CODE,
    ToolId,
    ToolResult,
    ToolSpec,
    commflag_succeeded,
    exits_zero,
)
from mythpms.tools.registry import TOOL_TABLE, get_tool_spec, resolve_executable
from mythpms.tools.runner import ToolRunner

__all__ = [
    # Models
    "COMMFLAG_MAX_SUCCESS_CODE",
    "ToolId",
    "ToolResult",
    "ToolSpec",
    "commflag_succeeded",
    "exits_zero",
    # Registry
    "TOOL_TABLE",
    "get_tool_spec",
    "resolve_executable",
    # Runner
    "ToolRunner",
    # Commands
    "commflag_args",
    "gencutlist_args",
    "handbrake_args",
    "handbrake_verbosity",
    "myth_log_level",
    "remove_commercials_args",
]
