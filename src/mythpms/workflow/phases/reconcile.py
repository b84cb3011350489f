"""Catalog reconciliation: point the catalog at the best artifact.

The catalog is updated before the superseded original is deleted, so an
interruption leaves either the old row with the old file or the new row
with the new file, never a row naming a deleted file.
"""

from __future__ import annotations

import glob
import logging
import shutil
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from mythpms.core.process_utils import chown_path
from mythpms.db.connection import CatalogUnavailableError
from mythpms.db.queries import replace_recording_file
from mythpms.workflow.context import PipelineContext
from mythpms.workflow.exceptions import ReconciliationError

logger = logging.getLogger(__name__)

MAP_SUFFIX = ".map"


class ReconcilePhase:
    """Moves, records and cleans up after the best artifact."""

    def __init__(self, ctx: PipelineContext) -> None:
        self.ctx = ctx

    def run(self) -> Path:
        """Reconcile the catalog with the best artifact.

        A no-op (apart from scratch cleanup) while the original is still
        the best artifact. Scratch files are removed even when
        reconciliation fails.

        Returns:
            Path of the best artifact after any move.

        Raises:
            ReconciliationError: If the best artifact is missing or the
                catalog cannot be updated.
        """
        try:
            if self.ctx.tracker.is_original:
                logger.info("Original is still the best recording; catalog unchanged")
                return self.ctx.tracker.best()
            return self._reconcile()
        finally:
            self.cleanup_scratch()

    def _reconcile(self) -> Path:
        ctx = self.ctx
        best = self._move_into_storage(ctx.tracker.best())

        if not best.is_file():
            raise ReconciliationError(f"Best recording not found: {best}")

        library = ctx.config.library
        try:
            chown_path(best, library.file_owner, library.file_group)
        except (OSError, KeyError) as e:
            raise ReconciliationError(
                f"Cannot change ownership of {best}: {e}"
            ) from e

        size = best.stat().st_size
        logger.info(
            "Updating catalog: basename=%s filesize=%d transcoded=1", best.name, size
        )
        try:
            updated, markup, seek = replace_recording_file(
                ctx.conn, ctx.key, best.name, size
            )
        except (SQLAlchemyError, CatalogUnavailableError) as e:
            raise ReconciliationError(f"Catalog update failed: {e}") from e
        if updated != 1:
            raise ReconciliationError(
                f"Catalog update changed {updated} rows for {ctx.key}"
            )
        logger.info(
            "Pruned %d bookmark and %d seek rows for the old file", markup, seek
        )

        self._delete_original(best)
        self._rename_previews(best)
        return best

    def _move_into_storage(self, best: Path) -> Path:
        ctx = self.ctx
        if best.parent != ctx.config.commercials.scratch_dir:
            return best

        target = ctx.storage_dir / best.name
        logger.info("Moving %s -> %s", best, target)
        try:
            shutil.move(best, target)
        except OSError as e:
            raise ReconciliationError(f"Cannot move {best} to {target}: {e}") from e
        ctx.tracker.relocate(target)
        return target

    def _delete_original(self, best: Path) -> None:
        original = self.ctx.paths.original
        if best == original:
            logger.warning(
                "Best recording has the original's path %s; not deleting it", original
            )
            return
        if not original.exists():
            logger.warning("Original recording already gone: %s", original)
            return
        logger.info("Deleting original recording %s", original)
        try:
            original.unlink()
        except OSError as e:
            logger.error("Cannot delete original recording %s: %s", original, e)

    def _rename_previews(self, best: Path) -> None:
        """Rename ``<original>*.png`` preview images to follow the best file."""
        original = self.ctx.paths.original
        pattern = glob.escape(original.name) + "*.png"
        for image in sorted(original.parent.glob(pattern)):
            new_path = image.with_name(best.name + image.name[len(original.name) :])
            logger.info("Renaming %s -> %s", image.name, new_path.name)
            try:
                image.rename(new_path)
            except OSError as e:
                logger.warning("Cannot rename preview %s: %s", image, e)

    def cleanup_scratch(self) -> list[Path]:
        """Delete the intermediate file and its map from the scratch directory.

        Returns:
            Paths that were deleted.
        """
        intermediate = self.ctx.paths.commercial_free
        removed: list[Path] = []
        for path in (intermediate, intermediate.with_name(intermediate.name + MAP_SUFFIX)):
            if not path.is_file():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.warning("Cannot delete intermediate file %s: %s", path, e)
                continue
            logger.info("Deleted intermediate file %s", path)
            removed.append(path)
        return removed
