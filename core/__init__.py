# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core module initialization
# PURPOSE: Export core contracts and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import ConditionStatus, ConditionSeverity, GroupVersionKind, ObjectReference
from core.models import (
    Condition,
    ConditionSet,
    Channelable,
    Subscription,
    Sequence,
    SequenceStatus,
    SEQUENCE_CONDITION_SET,
)

__all__ = [
    # Enums
    "ConditionStatus",
    "ConditionSeverity",
    # Identity
    "GroupVersionKind",
    "ObjectReference",
    # Models
    "Condition",
    "ConditionSet",
    "Channelable",
    "Subscription",
    "Sequence",
    "SequenceStatus",
    "SEQUENCE_CONDITION_SET",
]
