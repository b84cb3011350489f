"""Argument builders for the external tools.

Each builder returns the argument list without the executable; the runner
prepends the resolved executable path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.core.datetime_utils import compact_start_time

if TYPE_CHECKING:
    from mythpms.config.models import TranscodeConfig
    from mythpms.db.types import RecordingKey


def myth_log_level(level: int) -> str:
    """Map a Python log level to a MythTV ``--loglevel`` value.

    DEBUG maps to ``debug``, INFO to ``info``; anything quieter only
    records errors.
    """
    if level <= logging.DEBUG:
        return "debug"
    if level <= logging.INFO:
        return "info"
    return "err"


def handbrake_verbosity(level: int) -> str:
    """Map a Python log level to a HandBrakeCLI verbosity flag.

    HandBrake has no separate debug level, so INFO and DEBUG both get
    ``-v2``.
    """
    return "-v2" if level <= logging.INFO else "-v1"


def _recording_args(key: RecordingKey) -> list[str]:
    return ["--chanid", key.chanid, "--starttime", compact_start_time(key.starttime)]


def _myth_log_args(log_dir: Path, level: int) -> list[str]:
    return ["--logpath", str(log_dir), "--loglevel", myth_log_level(level)]


def commflag_args(
    key: RecordingKey,
    log_dir: Path,
    level: int,
    override_settings_file: Path | None = None,
) -> list[str]:
    """Arguments for ``mythcommflag`` commercial detection."""
    args = _recording_args(key)
    if override_settings_file is not None:
        args += ["--override-settings-file", str(override_settings_file)]
    return args + _myth_log_args(log_dir, level)


def gencutlist_args(key: RecordingKey, log_dir: Path, level: int) -> list[str]:
    """Arguments for ``mythutil`` to turn the commercial skip list into a cut list."""
    return [*_recording_args(key), "--gencutlist", *_myth_log_args(log_dir, level)]


def remove_commercials_args(
    key: RecordingKey, outfile: Path, log_dir: Path, level: int
) -> list[str]:
    """Arguments for a lossless ``mythtranscode`` honouring the cut list."""
    return [
        *_recording_args(key),
        "--mpeg2",
        "--honorcutlist",
        "--outfile",
        str(outfile),
        *_myth_log_args(log_dir, level),
    ]


def handbrake_args(
    input_path: Path,
    output_path: Path,
    transcode: TranscodeConfig,
    level: int,
) -> list[str]:
    """Arguments for the HandBrakeCLI H.264 encode.

    The first audio track is passed through when it is already AAC and
    re-encoded otherwise.
    """
    return [
        "--input",
        str(input_path),
        "--output",
        str(output_path),
        "--audio",
        "1",
        "--aencoder",
        transcode.audio_encoder,
        "--audio-fallback",
        transcode.audio_fallback,
        "--audio-copy-mask",
        transcode.audio_copy_mask,
        "--preset",
        transcode.preset,
        handbrake_verbosity(level),
    ]
