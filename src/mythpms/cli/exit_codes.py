"""Centralized exit codes for all CLI commands.

The MythTV job queue records the exit status of a user job, so every
fatal pipeline error maps to its own code.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Recording/file errors
    40-49: Operation errors
"""

from enum import IntEnum

from mythpms.db.connection import CatalogUnavailableError
from mythpms.workflow.exceptions import (
    AmbiguousOrMissingRecording,
    CommercialFlagConflict,
    MissingArtifactError,
    ReconciliationError,
    StorageGroupNotFound,
    UnknownCommercialFlagStatus,
    UnsupportedStorageGroup,
)


class ExitCode(IntEnum):
    """Exit codes for mythpms CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Recording/file errors (20-29)
    RECORDING_NOT_FOUND = 20
    MISSING_ARTIFACT = 21
    UNSUPPORTED_STORAGE_GROUP = 22

    # Operation errors (40-49)
    COMMFLAG_CONFLICT = 41
    DATA_ERROR = 42
    RECONCILIATION_FAILED = 43


_ERROR_CODES: tuple[tuple[type[Exception], ExitCode], ...] = (
    (AmbiguousOrMissingRecording, ExitCode.RECORDING_NOT_FOUND),
    (StorageGroupNotFound, ExitCode.RECORDING_NOT_FOUND),
    (MissingArtifactError, ExitCode.MISSING_ARTIFACT),
    (UnsupportedStorageGroup, ExitCode.UNSUPPORTED_STORAGE_GROUP),
    (CommercialFlagConflict, ExitCode.COMMFLAG_CONFLICT),
    (UnknownCommercialFlagStatus, ExitCode.DATA_ERROR),
    (ReconciliationError, ExitCode.RECONCILIATION_FAILED),
    (CatalogUnavailableError, ExitCode.DATA_ERROR),
)


def exit_code_for(error: Exception) -> ExitCode:
    """Map an exception raised while processing to its exit code."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR
