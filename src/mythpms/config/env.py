"""MYTHPMS_* environment variables.

The MythTV job queue starts user jobs with the backend's environment, so
the environment is the easiest place to point a test install at another
catalog or library without editing the config file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_PATH_VAR = "MYTHPMS_CONFIG_PATH"
DATABASE_DRIVER_VAR = "MYTHPMS_DATABASE_DRIVER"
DATABASE_HOST_VAR = "MYTHPMS_DATABASE_HOST"
DATABASE_PASSWORD_VAR = "MYTHPMS_DATABASE_PASSWORD"
DATABASE_PATH_VAR = "MYTHPMS_DATABASE_PATH"
TOOLS_BIN_DIR_VAR = "MYTHPMS_TOOLS_BIN_DIR"
SCRATCH_DIR_VAR = "MYTHPMS_SCRATCH_DIR"
LIBRARY_ROOT_VAR = "MYTHPMS_LIBRARY_ROOT"
COMMERCIAL_FREE_CHANNELS_VAR = "MYTHPMS_COMMERCIAL_FREE_CHANNELS"
LIBRARY_SERVER_URL_VAR = "MYTHPMS_LIBRARY_SERVER_URL"
LIBRARY_SERVER_TOKEN_VAR = "MYTHPMS_LIBRARY_SERVER_TOKEN"
LOG_DIR_VAR = "MYTHPMS_LOG_DIR"
NICENESS_VAR = "MYTHPMS_NICENESS"


class EnvReader:
    """Typed access to environment variables.

    An empty variable counts as unset, because MythTV user-job wrappers
    commonly export variables they have no value for.

    Example:
        reader = EnvReader(env={"MYTHPMS_NICENESS": "10"})
        reader.get_int("MYTHPMS_NICENESS", 19)  # 10
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Read from ``env``, or from os.environ when it is None."""
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _raw(self, name: str) -> str | None:
        value = self._env.get(name)
        return value if value else None

    def get_str(self, name: str, default: str | None = None) -> str | None:
        value = self._raw(name)
        return default if value is None else value

    def get_int(self, name: str, default: int | None = None) -> int | None:
        """Read an integer; a malformed value is logged and ignored."""
        value = self._raw(name)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", name, value)
            return default

    def get_path(self, name: str, default: Path | None = None) -> Path | None:
        """Read a path with ``~`` expanded.

        The path need not exist yet; the scratch and log directories are
        created on first use.
        """
        value = self._raw(name)
        return default if value is None else Path(value).expanduser()

    def get_list(
        self, name: str, separator: str = ":", default: list[str] | None = None
    ) -> list[str] | None:
        """Read a ``separator``-delimited list, dropping blank items.

        Channel lists use ":" like PATH.
        """
        value = self._env.get(name)
        if value is None:
            return default
        return [item.strip() for item in value.split(separator) if item.strip()]
