"""Blocking invocation of external programs.

MythTV and HandBrake jobs run for as long as the recording takes to
process, so nothing here imposes a timeout unless the caller asks for
one, and the child's output goes wherever the caller points it.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - running the MythTV and HandBrake tools
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    capture_output: bool = False,
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run ``args`` to completion.

    Args:
        args: Executable followed by its arguments; Paths are accepted.
        timeout: Seconds before the child is killed. None waits forever.
        capture_output: Collect stdout and stderr as text. Otherwise they
            are inherited, or redirected via ``stdout=``/``stderr=``.
        **kwargs: Passed through to subprocess.run.

    Returns:
        ``(stdout, stderr, returncode)``. The strings are empty unless
        captured; a negative returncode is the signal that killed the child.

    Raises:
        OSError: If the executable cannot be started.
        subprocess.TimeoutExpired: If ``timeout`` elapsed.
    """
    argv = [str(arg) for arg in args]
    program = Path(argv[0]).name if argv else "?"
    logger.debug("Running %s", shlex.join(argv), extra={"command": program})

    started = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - argv list, no shell
            argv,
            capture_output=capture_output,
            text=True,
            errors="replace",
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s killed after %ss timeout",
            program,
            timeout,
            extra={"command": program},
        )
        raise

    logger.debug(
        "%s exited with %d",
        program,
        completed.returncode,
        extra={
            "command": program,
            "duration_seconds": round(time.monotonic() - started, 3),
        },
    )
    return completed.stdout or "", completed.stderr or "", completed.returncode
