"""Domain enums for mythpms.

Usage:
    from mythpms.domain import ArtifactStage, CommercialFlagStatus
"""

from .enums import ArtifactStage, CommercialFlagStatus, LibrarySection, MediaType

__all__ = [
    "ArtifactStage",
    "CommercialFlagStatus",
    "LibrarySection",
    "MediaType",
]
