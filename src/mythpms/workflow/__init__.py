"""Post-recording pipeline.

The orchestrator lives in :mod:`mythpms.workflow.processor`; it is not
re-exported here because the library package imports the pipeline
exceptions from this package.
"""

from mythpms.workflow.exceptions import (
    AmbiguousOrMissingRecording,
    CommercialFlagConflict,
    MissingArtifactError,
    PipelineError,
    ReconciliationError,
    StorageGroupNotFound,
    UnknownCommercialFlagStatus,
    UnsupportedStorageGroup,
)
from mythpms.workflow.state import (
    ArtifactPaths,
    ArtifactPromotionError,
    ArtifactStateTracker,
    is_original_eligible,
)

__all__ = [
    # Exceptions
    "AmbiguousOrMissingRecording",
    "CommercialFlagConflict",
    "MissingArtifactError",
    "PipelineError",
    "ReconciliationError",
    "StorageGroupNotFound",
    "UnknownCommercialFlagStatus",
    "UnsupportedStorageGroup",
    # State
    "ArtifactPaths",
    "ArtifactPromotionError",
    "ArtifactStateTracker",
    "is_original_eligible",
]
