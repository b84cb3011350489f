"""Symbolic-link tree for the library server.

The tree under the library root holds only symlinks into MythTV storage.
A link whose target no longer exists is broken and is pruned, and so are
directories left empty by pruning.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from mythpms.core.process_utils import chown_path

if TYPE_CHECKING:
    from mythpms.config.models import LibraryConfig
    from mythpms.library.naming import LibraryTarget

logger = logging.getLogger(__name__)


def _is_broken_link(path: Path) -> bool:
    return path.is_symlink() and not path.exists()


class LibraryLinkManager:
    """Creates library links and keeps the tree consistent."""

    def __init__(self, library: LibraryConfig) -> None:
        self._library = library

    @property
    def root(self) -> Path:
        return self._library.root

    def link(self, target: LibraryTarget, best_path: Path) -> Path:
        """Link the library name for a recording to its best artifact.

        Anything already at the link path is replaced. If it is a symlink
        to some other existing file, that file is an orphan of an earlier
        run and is deleted as well.

        Args:
            target: Library location from compute_library_target.
            best_path: The recording's best artifact.

        Returns:
            Path of the created link.

        Raises:
            OSError: If the directory or link cannot be created.
        """
        best_path = Path(os.path.abspath(best_path))
        link_path = target.link_path(best_path.suffix.lstrip("."))

        link_path.parent.mkdir(parents=True, exist_ok=True)

        if os.path.lexists(link_path):
            self._clear_collision(link_path, best_path)

        os.symlink(best_path, link_path)
        logger.info("Library link %s -> %s", link_path, best_path)

        try:
            chown_path(link_path, self._library.file_owner, self._library.file_group)
        except (OSError, KeyError) as e:
            logger.warning("Cannot change ownership of link %s: %s", link_path, e)
        return link_path

    def _clear_collision(self, link_path: Path, best_path: Path) -> None:
        logger.warning("File or link already exists in library: %s", link_path)
        if link_path.is_symlink():
            resolved = Path(os.path.realpath(link_path))
            if resolved.exists() and resolved != Path(os.path.realpath(best_path)):
                logger.info("Deleting orphaned link target %s", resolved)
                resolved.unlink()
        link_path.unlink()

    def prune(self, exclude: Iterable[Path] = ()) -> tuple[list[Path], list[Path]]:
        """Run both sweeps over the library root.

        Returns:
            Tuple of (links removed, directories removed).
        """
        links = prune_broken_links(self.root, exclude=exclude)
        dirs = prune_empty_directories(self.root)
        return links, dirs


def prune_broken_links(root: Path, exclude: Iterable[Path] = ()) -> list[Path]:
    """Delete every symlink under ``root`` whose target does not exist.

    Args:
        root: Library root to sweep.
        exclude: Links to leave alone even if broken.

    Returns:
        Links that were removed.
    """
    if not root.is_dir():
        logger.warning("Library root does not exist: %s", root)
        return []

    skip = {Path(os.path.abspath(p)) for p in exclude}
    removed: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Symlinked directories show up in dirnames and are not followed
        for name in (*dirnames, *filenames):
            path = Path(dirpath) / name
            if not _is_broken_link(path) or Path(os.path.abspath(path)) in skip:
                continue
            path.unlink()
            logger.info("Deleted broken library link %s", path)
            removed.append(path)
    return removed


def prune_empty_directories(root: Path) -> list[Path]:
    """Delete empty directories under ``root``, deepest first.

    A directory whose only contents were empty directories is removed in
    the same sweep. ``root`` itself is never removed.

    Returns:
        Directories that were removed.
    """
    if not root.is_dir():
        logger.warning("Library root does not exist: %s", root)
        return []

    removed: list[Path] = []
    for dirpath, _dirnames, _filenames in os.walk(root, topdown=False):
        path = Path(dirpath)
        if path == root or path.is_symlink():
            continue
        try:
            if any(path.iterdir()):
                continue
            path.rmdir()
        except OSError as e:
            logger.warning("Cannot remove directory %s: %s", path, e)
            continue
        logger.info("Deleted empty library directory %s", path)
        removed.append(path)
    return removed
