# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the Sequence status engine.

Layers:
    - condition: generic tri-state condition bookkeeping
    - addressable / children: what the engine reads from child snapshots
    - sequence: the Sequence resource and its derived status
"""

from core.models.condition import (
    CONDITION_READY,
    Condition,
    ConditionedStatus,
    ConditionManager,
    ConditionSet,
)
from core.models.addressable import Addressable, AuthStatus
from core.models.children import (
    HasReadyCondition,
    Channelable,
    ChannelableStatus,
    Subscription,
    SubscriptionStatus,
)
from core.models.sequence import (
    SEQUENCE_CONDITION_READY,
    SEQUENCE_CONDITION_CHANNELS_READY,
    SEQUENCE_CONDITION_SUBSCRIPTIONS_READY,
    SEQUENCE_CONDITION_ADDRESSABLE,
    SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED,
    SEQUENCE_CONDITION_SET,
    Destination,
    DeliverySpec,
    SequenceStep,
    ChannelTemplateSpec,
    SequenceSpec,
    SequenceChannelStatus,
    SequenceSubscriptionStatus,
    SequenceStatus,
    Sequence,
)

__all__ = [
    # Conditions
    "CONDITION_READY",
    "Condition",
    "ConditionedStatus",
    "ConditionManager",
    "ConditionSet",
    # Addressing
    "Addressable",
    "AuthStatus",
    # Child snapshots
    "HasReadyCondition",
    "Channelable",
    "ChannelableStatus",
    "Subscription",
    "SubscriptionStatus",
    # Sequence
    "SEQUENCE_CONDITION_READY",
    "SEQUENCE_CONDITION_CHANNELS_READY",
    "SEQUENCE_CONDITION_SUBSCRIPTIONS_READY",
    "SEQUENCE_CONDITION_ADDRESSABLE",
    "SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED",
    "SEQUENCE_CONDITION_SET",
    "Destination",
    "DeliverySpec",
    "SequenceStep",
    "ChannelTemplateSpec",
    "SequenceSpec",
    "SequenceChannelStatus",
    "SequenceSubscriptionStatus",
    "SequenceStatus",
    "Sequence",
]
