"""Library-server names for recordings.

Plex identifies media by path, so each recording is linked under a name
that follows its conventions::

    Movies/<Title> (<Year>)/<Title> (<Year>).<ext>
    TV Shows/<Title>/Season <SS>/<Title> - s<SS>e<EE> - <Subtitle>.<ext>

Episodes without a subtitle are named ``Recorded on <chanid> at <start>``
so that two recordings of the same show never collide.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.core.string_utils import (
    is_blank,
    make_filename_safe,
    pad_two_digits,
    replace_colons,
)
from mythpms.domain import LibrarySection
from mythpms.workflow.exceptions import UnsupportedStorageGroup

if TYPE_CHECKING:
    from mythpms.config.models import LibraryConfig
    from mythpms.db.types import RecordingRecord


@dataclass(frozen=True)
class LibraryTarget:
    """Where in the library a recording is linked, minus the extension."""

    section: LibrarySection
    directory: Path
    stem: str

    def link_path(self, extension: str) -> Path:
        """Full link path for a best artifact with the given extension."""
        return self.directory / f"{self.stem}.{extension}"


def movie_name(record: RecordingRecord) -> str:
    return make_filename_safe(f"{record.title} ({record.air_year})")


def episode_name(record: RecordingRecord) -> str:
    """``<Title> - sSSeEE - <Subtitle or recording time>``, made safe."""
    season = pad_two_digits(record.season)
    episode = pad_two_digits(record.episode)
    prefix = f"{make_filename_safe(record.title)} - s{season}e{episode} - "
    if is_blank(record.subtitle):
        return (
            f"{prefix}Recorded on {record.chanid} at {replace_colons(record.starttime)}"
        )
    return prefix + make_filename_safe(record.subtitle)


def compute_library_target(
    record: RecordingRecord, library: LibraryConfig
) -> LibraryTarget:
    """Pick the library section, directory and link name for a recording.

    Raises:
        UnsupportedStorageGroup: If the storage group is neither a movie
            nor a TV storage group.
    """
    group = record.storagegroup
    if group in library.movie_storage_groups:
        name = movie_name(record)
        return LibraryTarget(
            section=LibrarySection.MOVIE,
            directory=library.movies_root / name,
            stem=name,
        )

    if group in library.tv_storage_groups:
        season = pad_two_digits(record.season)
        return LibraryTarget(
            section=LibrarySection.TV,
            directory=library.tv_root
            / make_filename_safe(record.title)
            / f"Season {season}",
            stem=episode_name(record),
        )

    raise UnsupportedStorageGroup(group)
