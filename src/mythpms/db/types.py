"""Data type definitions for the MythTV catalog.

Records mirror the subset of the ``recorded`` table the pipeline reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from mythpms.core.datetime_utils import normalize_start_time
from mythpms.domain import MediaType


@dataclass(frozen=True)
class RecordingKey:
    """Identity of one recording: channel id plus UTC start time.

    ``starttime`` is always held in catalog form (``YYYY-MM-DD HH:MM:SS``).
    """

    chanid: str
    starttime: str

    @classmethod
    def parse(cls, chanid: str, starttime: str) -> RecordingKey:
        """Build a key from the job-queue arguments.

        Raises:
            ValueError: If chanid is not numeric or starttime is malformed.
        """
        chanid = chanid.strip()
        if not chanid.isdigit():
            raise ValueError(f"Invalid channel id '{chanid}': expected digits")
        return cls(chanid=chanid, starttime=normalize_start_time(starttime))

    def __str__(self) -> str:
        return f"{self.chanid}@{self.starttime}"


@dataclass
class RecordingRecord:
    """Database record for the ``recorded`` table."""

    chanid: str
    starttime: str
    title: str
    subtitle: str
    basename: str
    storagegroup: str
    programid: str
    originalairdate: str | None
    season: int
    episode: int
    commflagged: int
    transcoded: bool
    filesize: int

    @property
    def key(self) -> RecordingKey:
        return RecordingKey(chanid=self.chanid, starttime=self.starttime)

    @property
    def media_type(self) -> MediaType:
        return MediaType.from_program_id(self.programid)

    @property
    def basename_stem(self) -> str:
        """File name without its final extension."""
        return PurePosixPath(self.basename).stem

    @property
    def basename_extension(self) -> str:
        """Final extension without the leading dot (``mpg``), or ``""``."""
        return PurePosixPath(self.basename).suffix.lstrip(".")

    @property
    def air_year(self) -> str:
        """Four-digit year of the original air date, or ``""`` if unknown."""
        return (self.originalairdate or "")[:4]
