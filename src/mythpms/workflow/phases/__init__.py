"""Pipeline phases, run in order by PostProcessor."""

from mythpms.workflow.phases.commercials import (
    CommercialPhase,
    effective_commflag_status,
)
from mythpms.workflow.phases.reconcile import ReconcilePhase
from mythpms.workflow.phases.transcode import TranscodePhase

__all__ = [
    "CommercialPhase",
    "ReconcilePhase",
    "TranscodePhase",
    "effective_commflag_status",
]
