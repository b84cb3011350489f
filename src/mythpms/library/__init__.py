"""Library-server link tree: naming, link maintenance and refresh."""

from mythpms.library.links import (
    LibraryLinkManager,
    prune_broken_links,
    prune_empty_directories,
)
from mythpms.library.naming import (
    LibraryTarget,
    compute_library_target,
    episode_name,
    movie_name,
)
from mythpms.library.refresh import LibraryServerClient, LibraryServerError

__all__ = [
    "LibraryLinkManager",
    "LibraryServerClient",
    "LibraryServerError",
    "LibraryTarget",
    "compute_library_target",
    "episode_name",
    "movie_name",
    "prune_broken_links",
    "prune_empty_directories",
]
