# ============================================================================
# SEQUENCE MODEL
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core model - Sequence resource and status aggregation
# PURPOSE: Derive Sequence health from channel and subscription snapshots
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Sequence, SequenceSpec, SequenceStep, SequenceStatus,
#          SequenceChannelStatus, SequenceSubscriptionStatus,
#          SEQUENCE_CONDITION_SET and condition type constants
# DEPENDENCIES: pydantic
# ============================================================================
"""
Sequence Model

A Sequence chains N stages. Each stage owns a channel and a subscription
that forwards the channel's events to the step destination, whose reply
goes on to the next stage's channel.

Key concept:
- SequenceSpec = TEMPLATE (steps, channel template, reply)
- SequenceStatus = DERIVED health, rebuilt from child snapshots

SequenceStatus is mutated only through its propagate/mark methods.
Every anomaly becomes data: a missing Ready condition, an empty child
list or an absent address are reported as Unknown with a reason, never
raised. False is reserved for children that explicitly report failure.

Tracked conditions:
    Ready                - True iff all conditions below are True
    ChannelsReady        - every stage channel is Ready
    SubscriptionsReady   - every stage subscription is Ready
    Addressable          - the first channel advertises a URL
    OIDCIdentityCreated  - the identity for the Sequence was provisioned
"""

from typing import Any, ClassVar, Dict, List, Optional, Sequence as SequenceOf, Tuple
from pydantic import BaseModel, Field, field_validator

from core.config import get_defaults
from core.contracts import (
    K8S_MODEL_CONFIG,
    ConditionStatus,
    GroupVersionKind,
    ObjectReference,
    ResourceData,
)
from core.logging import ComponentType, get_logger
from core.models.addressable import Addressable, AuthStatus
from core.models.children import Channelable, HasReadyCondition, Subscription
from core.models.condition import (
    CONDITION_READY,
    Condition,
    ConditionedStatus,
    ConditionManager,
    ConditionSet,
)
import core.models.condition as condition_model

logger = get_logger(__name__, ComponentType.AGGREGATOR)


# ============================================================================
# CONDITION TYPES
# ============================================================================

# True when all subconditions below are True
SEQUENCE_CONDITION_READY = CONDITION_READY

# True when every channel created for this Sequence is Ready
SEQUENCE_CONDITION_CHANNELS_READY = "ChannelsReady"

# True when every subscription created for this Sequence is Ready
SEQUENCE_CONDITION_SUBSCRIPTIONS_READY = "SubscriptionsReady"

# True when the Sequence has a non-empty address
SEQUENCE_CONDITION_ADDRESSABLE = "Addressable"

# True when the identity for the Sequence has been created
SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED = "OIDCIdentityCreated"

SEQUENCE_CONDITION_SET = ConditionSet.living(
    SEQUENCE_CONDITION_READY,
    SEQUENCE_CONDITION_CHANNELS_READY,
    SEQUENCE_CONDITION_SUBSCRIPTIONS_READY,
    SEQUENCE_CONDITION_ADDRESSABLE,
    SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED,
)

REASON_NO_READY = "NoReady"
REASON_CHANNELS_NOT_READY = "ChannelsNotReady"
REASON_SUBSCRIPTIONS_NOT_READY = "SubscriptionsNotReady"
REASON_EMPTY_ADDRESS = "emptyAddress"


# ============================================================================
# SPEC
# ============================================================================

class Destination(BaseModel):
    """Where events go: an object reference, a URI, or a URI relative to the ref."""
    ref: Optional[ObjectReference] = None
    uri: Optional[str] = None
    ca_certs: Optional[str] = Field(default=None, alias="CACerts")
    audience: Optional[str] = None

    model_config = K8S_MODEL_CONFIG


class DeliverySpec(BaseModel):
    """Delivery options for one step (carried, not interpreted)."""
    dead_letter_sink: Optional[Destination] = None
    retry: Optional[int] = None
    backoff_policy: Optional[str] = None
    backoff_delay: Optional[str] = None

    model_config = K8S_MODEL_CONFIG


class SequenceStep(Destination):
    """One stage of a Sequence: the step destination plus delivery options."""
    delivery: Optional[DeliverySpec] = None


class ChannelTemplateSpec(BaseModel):
    """Kind and spec of the channels created for each stage."""
    api_version: str = ""
    kind: str = ""
    spec: Dict[str, Any] = Field(default_factory=dict)

    model_config = K8S_MODEL_CONFIG


class SequenceSpec(BaseModel):
    """Desired shape of a Sequence. Not validated or defaulted here."""
    steps: List[SequenceStep] = Field(default_factory=list)
    channel_template: Optional[ChannelTemplateSpec] = None
    reply: Optional[Destination] = None

    model_config = K8S_MODEL_CONFIG


# ============================================================================
# STATUS
# ============================================================================

class SequenceChannelStatus(BaseModel):
    """Observed state of the channel of one stage."""
    channel: ObjectReference = Field(default_factory=ObjectReference)
    ready_condition: Condition = Field(
        default_factory=lambda: Condition(type=CONDITION_READY),
        alias="ready",
    )

    model_config = K8S_MODEL_CONFIG


class SequenceSubscriptionStatus(BaseModel):
    """Observed state of the subscription of one stage."""
    subscription: ObjectReference = Field(default_factory=ObjectReference)
    ready_condition: Condition = Field(
        default_factory=lambda: Condition(type=CONDITION_READY),
        alias="ready",
    )

    model_config = K8S_MODEL_CONFIG


class SequenceStatus(ConditionedStatus):
    """
    Derived health record of one Sequence.

    channel_statuses[i] and subscription_statuses[i] describe stage i.
    address is the address of the first stage's channel.

    Not thread-safe: callers serialize mutations per Sequence.
    """

    condition_set: ClassVar[ConditionSet] = SEQUENCE_CONDITION_SET

    channel_statuses: List[SequenceChannelStatus] = Field(default_factory=list)
    subscription_statuses: List[SequenceSubscriptionStatus] = Field(default_factory=list)
    address: Addressable = Field(default_factory=Addressable)
    auth: Optional[AuthStatus] = None

    def manage(self) -> ConditionManager:
        return self.condition_set.manage(self)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_condition(self, condition_type: str) -> Optional[Condition]:
        """Return the condition currently associated with the given type, or None."""
        return self.manage().get_condition(condition_type)

    def is_ready(self) -> bool:
        """True if the Sequence is ready overall."""
        return self.manage().is_happy()

    def initialize_conditions(self) -> None:
        """Set relevant unset conditions to Unknown."""
        self.manage().initialize_conditions()

    # =========================================================================
    # PROPAGATION
    # =========================================================================

    def propagate_subscription_statuses(
        self, subscriptions: Optional[SequenceOf[Subscription]]
    ) -> None:
        """
        Rebuild subscription_statuses and SubscriptionsReady from snapshots.

        Must be given the complete, ordered set of stage subscriptions.
        """
        subscriptions = list(subscriptions or [])
        statuses: List[SequenceSubscriptionStatus] = []
        # No subscriptions at all counts as not ready
        all_ready = len(subscriptions) > 0

        for i, sub in enumerate(subscriptions):
            ref = sub.to_reference()
            prior = _prior_ready(self.subscription_statuses, i, "subscription", ref)
            ready, is_ready = _ready_condition_of(
                sub, "Subscription does not have Ready condition", prior
            )
            statuses.append(SequenceSubscriptionStatus(subscription=ref, ready_condition=ready))
            all_ready = all_ready and is_ready

        self.subscription_statuses = statuses

        if all_ready:
            self.manage().mark_true(SEQUENCE_CONDITION_SUBSCRIPTIONS_READY)
        else:
            self.mark_subscriptions_not_ready(
                REASON_SUBSCRIPTIONS_NOT_READY,
                "Subscriptions are not ready yet, or there are none",
            )
        logger.debug(
            "Propagated subscription statuses",
            extra={"subscription_count": len(statuses), "all_ready": all_ready},
        )

    def propagate_channel_statuses(self, channels: Optional[SequenceOf[Channelable]]) -> None:
        """
        Rebuild channel_statuses, address and ChannelsReady from snapshots.

        The first channel's address becomes the Sequence address. An empty
        channel list leaves the address untouched.
        """
        channels = list(channels or [])
        statuses: List[SequenceChannelStatus] = []
        # No channels at all counts as not ready
        all_ready = len(channels) > 0

        for i, channel in enumerate(channels):
            if i == 0:
                self._set_address(channel.status.address)

            ref = channel.to_reference()
            prior = _prior_ready(self.channel_statuses, i, "channel", ref)
            ready, is_ready = _ready_condition_of(
                channel, "Channel does not have Ready condition", prior
            )
            statuses.append(SequenceChannelStatus(channel=ref, ready_condition=ready))
            all_ready = all_ready and is_ready

        self.channel_statuses = statuses

        if all_ready:
            self.manage().mark_true(SEQUENCE_CONDITION_CHANNELS_READY)
        else:
            self.mark_channels_not_ready(
                REASON_CHANNELS_NOT_READY,
                "Channels are not ready yet, or there are none",
            )
        logger.debug(
            "Propagated channel statuses",
            extra={"channel_count": len(statuses), "all_ready": all_ready},
        )

    def _set_address(self, address: Optional[Addressable]) -> None:
        if address is None or address.is_empty():
            self.address = Addressable()
            self.manage().mark_unknown(
                SEQUENCE_CONDITION_ADDRESSABLE, REASON_EMPTY_ADDRESS, "addressable is nil"
            )
        else:
            self.address = Addressable(url=address.url)
            self.manage().mark_true(SEQUENCE_CONDITION_ADDRESSABLE)

    # =========================================================================
    # MARKERS
    # =========================================================================

    def mark_channels_not_ready(self, reason: str, message: str) -> None:
        self.manage().mark_unknown(SEQUENCE_CONDITION_CHANNELS_READY, reason, message)

    def mark_subscriptions_not_ready(self, reason: str, message: str) -> None:
        self.manage().mark_unknown(SEQUENCE_CONDITION_SUBSCRIPTIONS_READY, reason, message)

    def mark_addressable_not_ready(self, reason: str, message: str) -> None:
        self.manage().mark_unknown(SEQUENCE_CONDITION_ADDRESSABLE, reason, message)

    def mark_oidc_identity_created_succeeded(self) -> None:
        self.manage().mark_true(SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED)

    def mark_oidc_identity_created_succeeded_with_reason(self, reason: str, message: str) -> None:
        self.manage().mark_true_with_reason(
            SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED, reason, message
        )

    def mark_oidc_identity_created_failed(self, reason: str, message: str) -> None:
        self.manage().mark_false(SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED, reason, message)

    def mark_oidc_identity_created_unknown(self, reason: str, message: str) -> None:
        self.manage().mark_unknown(SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED, reason, message)


def _prior_ready(
    entries: SequenceOf[BaseModel],
    index: int,
    ref_field: str,
    ref: ObjectReference,
) -> Optional[Condition]:
    """Ready condition previously recorded for the same child at the same stage."""
    if index < len(entries) and getattr(entries[index], ref_field) == ref:
        return entries[index].ready_condition
    return None


def _ready_condition_of(
    child: HasReadyCondition,
    missing_message: str,
    prior: Optional[Condition],
) -> Tuple[Condition, bool]:
    """
    Ready condition to record for one child, and whether it counts as ready.

    A child without a Ready condition gets a synthesized Unknown one. If the
    same child already had the identical synthesized entry, its timestamp is
    kept so repeated passes produce the same status.
    """
    ready = child.get_ready_condition()
    if ready is not None:
        return ready.model_copy(deep=True), ready.is_true()

    synthesized = Condition(
        type=CONDITION_READY,
        status=ConditionStatus.UNKNOWN,
        reason=REASON_NO_READY,
        message=missing_message,
        last_transition_time=condition_model.transition_time(),
    )
    if prior is not None and prior.last_transition_time is not None:
        candidate = synthesized.model_copy(
            update={"last_transition_time": prior.last_transition_time}
        )
        if candidate == prior:
            return candidate, False
    return synthesized, False


# ============================================================================
# SEQUENCE
# ============================================================================

class Sequence(ResourceData):
    """
    A Sequence resource: metadata, spec and derived status.

    Exposes its condition set, type identity and untyped spec so generic
    tooling can handle it without knowing the concrete type.
    """
    spec: SequenceSpec = Field(default_factory=SequenceSpec)
    status: SequenceStatus = Field(default_factory=SequenceStatus)

    @field_validator("status", mode="before")
    @classmethod
    def handle_null_status(cls, v):
        """Freshly created objects report status: null."""
        return {} if v is None else v

    def get_condition_set(self) -> ConditionSet:
        return SequenceStatus.condition_set

    def get_group_version_kind(self) -> GroupVersionKind:
        return get_defaults().resource.group_version_kind()

    def get_untyped_spec(self) -> Dict[str, Any]:
        """The spec as a plain dict with Kubernetes field names."""
        return self.spec.model_dump(by_alias=True, exclude_none=True, mode="json")

    def get_status(self) -> SequenceStatus:
        return self.status


__all__ = [
    "SEQUENCE_CONDITION_READY",
    "SEQUENCE_CONDITION_CHANNELS_READY",
    "SEQUENCE_CONDITION_SUBSCRIPTIONS_READY",
    "SEQUENCE_CONDITION_ADDRESSABLE",
    "SEQUENCE_CONDITION_OIDC_IDENTITY_CREATED",
    "SEQUENCE_CONDITION_SET",
    "REASON_NO_READY",
    "REASON_CHANNELS_NOT_READY",
    "REASON_SUBSCRIPTIONS_NOT_READY",
    "REASON_EMPTY_ADDRESS",
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
