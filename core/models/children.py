# ============================================================================
# CHILD SNAPSHOT MODELS
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core model - Observed channel and subscription state
# PURPOSE: Read-only snapshots of the children a Sequence is built from
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: HasReadyCondition, Channelable, ChannelableStatus,
#          Subscription, SubscriptionStatus
# DEPENDENCIES: pydantic
# ============================================================================
"""
Child Snapshot Models

Point-in-time observations of the children of a Sequence, as fetched
by the reconciler. Each stage of a Sequence owns one channel and one
subscription.

Channels are duck-typed: InMemoryChannel, KafkaChannel and any other
kind exposing status.address and status.conditions all parse into
Channelable. The spec of a child is carried untyped.

The status engine depends only on HasReadyCondition, never on the
concrete snapshot classes.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable
from pydantic import Field, field_validator

from core.contracts import ResourceData
from core.models.addressable import Addressable
from core.models.condition import CONDITION_READY, Condition, ConditionedStatus


@runtime_checkable
class HasReadyCondition(Protocol):
    """A resource whose readiness can be read off its status."""

    def get_ready_condition(self) -> Optional[Condition]:
        ...


# ============================================================================
# CHANNELS
# ============================================================================

class ChannelableStatus(ConditionedStatus):
    """Channel status: conditions plus the advertised address."""
    address: Optional[Addressable] = None
    dead_letter_sink_uri: Optional[str] = None


class Channelable(ResourceData):
    """
    Snapshot of a channel of any kind.

    Lifecycle:
        Created by the reconciler from the Sequence channel template.
        Becomes Ready and addressable once its dispatcher is up.
    """
    spec: Dict[str, Any] = Field(default_factory=dict)
    status: ChannelableStatus = Field(default_factory=ChannelableStatus)

    @field_validator("status", mode="before")
    @classmethod
    def handle_null_status(cls, v):
        """Freshly created objects report status: null."""
        return {} if v is None else v

    def get_ready_condition(self) -> Optional[Condition]:
        return self.status.get_condition(CONDITION_READY)

    @property
    def address(self) -> Optional[Addressable]:
        return self.status.address


# ============================================================================
# SUBSCRIPTIONS
# ============================================================================

class SubscriptionStatus(ConditionedStatus):
    """Subscription status: conditions plus resolved delivery URIs."""
    physical_subscription: Dict[str, Any] = Field(default_factory=dict)


class Subscription(ResourceData):
    """
    Snapshot of a subscription forwarding one stage to the next.
    """
    spec: Dict[str, Any] = Field(default_factory=dict)
    status: SubscriptionStatus = Field(default_factory=SubscriptionStatus)

    @field_validator("status", mode="before")
    @classmethod
    def handle_null_status(cls, v):
        return {} if v is None else v

    def get_ready_condition(self) -> Optional[Condition]:
        return self.status.get_condition(CONDITION_READY)


__all__ = [
    "HasReadyCondition",
    "ChannelableStatus",
    "Channelable",
    "SubscriptionStatus",
    "Subscription",
]
