"""Domain enums for mythpms.

This module contains enums shared by the catalog layer, the pipeline phases
and the library naming code.
"""

from enum import Enum, IntEnum


class CommercialFlagStatus(IntEnum):
    """Value of ``recorded.commflagged`` in the MythTV catalog.

    The numeric values are MythTV's own and are stored as-is.
    """

    NOT_FLAGGED = 0  # Detection has never run
    DONE = 1  # Commercials flagged (possibly zero of them)
    PROCESSING = 2  # Another mythcommflag job is running right now
    COMMERCIAL_FREE_CHANNEL = 3  # Channel carries no commercials


class MediaType(Enum):
    """Program type encoded in the first two characters of ``programid``."""

    EPISODE = "EP"
    SPECIAL = "SH"
    MOVIE = "MV"
    UNKNOWN = ""

    @classmethod
    def from_program_id(cls, program_id: str | None) -> "MediaType":
        """Derive the media type from a program identifier."""
        prefix = (program_id or "")[:2].upper()
        for member in cls:
            if member.value and member.value == prefix:
                return member
        return cls.UNKNOWN


class ArtifactStage(IntEnum):
    """Lifecycle stage of a recording's media file.

    Ordered: a later stage is always preferred over an earlier one.
    """

    ORIGINAL = 0  # As recorded, commercials possibly present
    COMMERCIAL_FREE = 1  # Lossless cut in the scratch directory
    TRANSCODED = 2  # H.264 file beside the original


class LibrarySection(Enum):
    """Plex library section a recording is linked into."""

    MOVIE = "movie"
    TV = "tv"
