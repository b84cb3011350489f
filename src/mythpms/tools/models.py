"""Data models for external tool invocation.

This module defines the identifiers, success predicates and result type
shared by every pipeline stage that runs a MythTV or HandBrake binary.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# Exit code at or below which mythcommflag succeeded; it reports the
# number of commercials found through its exit status.
COMMFLAG_MAX_SUCCESS_CODE = 127


class ToolId(str, Enum):
    """External tools the pipeline sequences."""

    MYTHCOMMFLAG = "mythcommflag"
    MYTHUTIL = "mythutil"
    MYTHTRANSCODE = "mythtranscode"
    HANDBRAKE = "handbrake"


def exits_zero(returncode: int) -> bool:
    """Success predicate for ordinary tools."""
    return returncode == 0


def commflag_succeeded(returncode: int) -> bool:
    """Success predicate for mythcommflag.

    0 through 127 is the commercial count. Larger values are errors and
    negative values mean the process was killed by a signal.
    """
    return 0 <= returncode <= COMMFLAG_MAX_SUCCESS_CODE


@dataclass(frozen=True)
class ToolSpec:
    """Static description of a tool: executable name and success predicate."""

    tool_id: ToolId
    executable: str
    is_success: Callable[[int], bool]
    description: str


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation.

    Tool failures are values, never exceptions: a stage inspects
    ``success`` and decides whether to carry on.
    """

    tool_id: ToolId
    args: tuple[str, ...]
    returncode: int | None
    """Exit status, or None if the process could not be started."""

    success: bool
    elapsed_seconds: float = 0.0
    error: str | None = None
    """Why the process could not be started (missing binary, permissions)."""

    stderr_path: Path | None = field(default=None)

    @property
    def killed_by_signal(self) -> bool:
        return self.returncode is not None and self.returncode < 0
