# ============================================================================
# STATUS SERVICE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Service - Reconciler-facing status pass
# PURPOSE: Run one status derivation pass and report the Ready transition
# CREATED: 18 OCT 2026
# ============================================================================
"""
Status Service

Entry point for a reconciler that has already fetched the children of a
Sequence. One call runs a full status pass:

    1. initialize_conditions()
    2. propagate_channel_statuses(channels)
    3. propagate_subscription_statuses(subscriptions)

and returns a StatusReport describing where Ready ended up. The service
does not fetch, retry or persist anything; deciding when to call it again
is the reconciler's job.

Usage:
    service = SequenceStatusService()
    report = service.reconcile_status(sequence, channels, subscriptions)
    if not report.ready:
        ...  # surface report.ready_reason to operators
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence as SequenceOf

from core.contracts import ConditionStatus
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models import (
    SEQUENCE_CONDITION_CHANNELS_READY,
    SEQUENCE_CONDITION_READY,
    SEQUENCE_CONDITION_SUBSCRIPTIONS_READY,
    Channelable,
    Sequence,
    Subscription,
)

logger = get_logger(__name__, ComponentType.SERVICE)

REASON_CHANNEL_LIST_FAILED = "ChannelListFailed"
REASON_SUBSCRIPTION_LIST_FAILED = "SubscriptionListFailed"


@dataclass
class StatusReport:
    """
    Outcome of one status pass.

    not_ready_conditions lists every tracked condition that is not True.
    """
    sequence: str
    namespace: str
    ready_status: ConditionStatus
    ready_reason: str = ""
    ready_message: str = ""
    previous_ready_status: Optional[ConditionStatus] = None
    channel_count: int = 0
    subscription_count: int = 0
    not_ready_conditions: List[str] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.ready_status == ConditionStatus.TRUE

    @property
    def changed(self) -> bool:
        return self.previous_ready_status != self.ready_status


class SequenceStatusService:
    """Runs status passes for Sequences."""

    def reconcile_status(
        self,
        sequence: Sequence,
        channels: Optional[SequenceOf[Channelable]],
        subscriptions: Optional[SequenceOf[Subscription]],
    ) -> StatusReport:
        """
        Derive the status of a Sequence from complete child snapshot lists.

        Args:
            sequence: Sequence whose status is updated in place
            channels: Channels of every stage, in stage order
            subscriptions: Subscriptions of every stage, in stage order

        Returns:
            StatusReport for the resulting Ready condition
        """
        status = sequence.status
        channels = list(channels or [])
        subscriptions = list(subscriptions or [])

        with log_context(
            sequence=sequence.name,
            namespace=sequence.namespace,
            operation="reconcile_status",
        ):
            previous = status.get_condition(SEQUENCE_CONDITION_READY)
            previous_status = previous.status if previous is not None else None

            status.initialize_conditions()
            status.propagate_channel_statuses(channels)
            status.propagate_subscription_statuses(subscriptions)
            status.observed_generation = sequence.metadata.generation

            report = self._build_report(sequence, previous_status, len(channels), len(subscriptions))
            self._log_report(report)
            return report

    def mark_fetch_failure(self, sequence: Sequence, kind: str, error: str) -> None:
        """
        Record that the children of one kind could not be listed.

        Args:
            sequence: Sequence whose status is updated in place
            kind: "channels" or "subscriptions"
            error: Error text shown as the condition message

        Raises:
            ValueError: If kind is not recognized
        """
        status = sequence.status
        with log_context(sequence=sequence.name, namespace=sequence.namespace):
            if kind == "channels":
                status.mark_channels_not_ready(REASON_CHANNEL_LIST_FAILED, error)
                condition_type = SEQUENCE_CONDITION_CHANNELS_READY
            elif kind == "subscriptions":
                status.mark_subscriptions_not_ready(REASON_SUBSCRIPTION_LIST_FAILED, error)
                condition_type = SEQUENCE_CONDITION_SUBSCRIPTIONS_READY
            else:
                raise ValueError(f"Unknown child kind: {kind}")

            logger.warning(
                f"Failed to list {kind}: {error}",
                extra={"condition": condition_type},
            )

    def _build_report(
        self,
        sequence: Sequence,
        previous_status: Optional[ConditionStatus],
        channel_count: int,
        subscription_count: int,
    ) -> StatusReport:
        status = sequence.status
        ready = status.get_condition(SEQUENCE_CONDITION_READY)

        not_ready = []
        for condition_type in status.condition_set.dependents:
            condition = status.get_condition(condition_type)
            if condition is None or not condition.is_true():
                not_ready.append(condition_type)

        return StatusReport(
            sequence=sequence.name,
            namespace=sequence.namespace,
            ready_status=ready.status if ready is not None else ConditionStatus.UNKNOWN,
            ready_reason=ready.reason if ready is not None else "",
            ready_message=ready.message if ready is not None else "",
            previous_ready_status=previous_status,
            channel_count=channel_count,
            subscription_count=subscription_count,
            not_ready_conditions=not_ready,
        )

    def _log_report(self, report: StatusReport) -> None:
        data = {
            "ready": report.ready_status.value,
            "reason": report.ready_reason,
            "channels": report.channel_count,
            "subscriptions": report.subscription_count,
            "not_ready": report.not_ready_conditions,
        }
        log_checkpoint("status_propagated", data)

        if report.ready_status == ConditionStatus.FALSE:
            logger.warning(
                f"Sequence {report.namespace}/{report.sequence} failed: "
                f"{report.ready_reason} {report.ready_message}".rstrip(),
                extra=data,
            )
        elif report.changed:
            previous = report.previous_ready_status.value if report.previous_ready_status else "None"
            logger.info(
                f"Sequence {report.namespace}/{report.sequence} Ready "
                f"{previous} -> {report.ready_status.value}",
                extra=data,
            )
        else:
            logger.debug(
                f"Sequence {report.namespace}/{report.sequence} Ready unchanged",
                extra=data,
            )


__all__ = [
    "REASON_CHANNEL_LIST_FAILED",
    "REASON_SUBSCRIPTION_LIST_FAILED",
    "StatusReport",
    "SequenceStatusService",
]
