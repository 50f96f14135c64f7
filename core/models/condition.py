# ============================================================================
# CONDITION SET MODEL
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core model - Tri-state condition bookkeeping
# PURPOSE: Named conditions with a derived "happy" aggregate
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Condition, ConditionedStatus, ConditionSet, ConditionManager,
#          ConditionAccessor, CONDITION_READY
# DEPENDENCIES: pydantic
# ============================================================================
"""
Condition Set Model

Generic, resource-agnostic bookkeeping for named tri-state conditions.

Key concept:
- ConditionSet = DECLARATION (which types are tracked, which one is "happy")
- ConditionManager = BINDING of a declaration to one status record

The happy condition (normally "Ready") is never set by callers directly.
It is recomputed by the manager whenever a dependent condition is marked:

    mark_true(dep)     -> happy True once every dependent is True
    mark_unknown(dep)  -> happy Unknown, unless some dependent is False
    mark_false(dep)    -> happy False

Conditions are kept sorted by type. Re-setting a condition to the same
status/reason/message keeps its lastTransitionTime.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel, Field, field_validator

from core.contracts import K8S_MODEL_CONFIG, ConditionSeverity, ConditionStatus


CONDITION_READY = "Ready"


def transition_time() -> datetime:
    """Transition timestamp, truncated to seconds like API server timestamps."""
    return datetime.now(timezone.utc).replace(microsecond=0)


# ============================================================================
# CONDITION
# ============================================================================

class Condition(BaseModel):
    """
    A named tri-state health signal.

    Maps to: status.conditions[] entry of any resource
    """
    type: str = Field(..., min_length=1, max_length=316)
    status: ConditionStatus = Field(default=ConditionStatus.UNKNOWN)
    severity: ConditionSeverity = Field(default=ConditionSeverity.ERROR)
    last_transition_time: Optional[datetime] = None
    reason: str = ""
    message: str = ""

    model_config = K8S_MODEL_CONFIG

    @field_validator("status", mode="before")
    @classmethod
    def handle_bool_input(cls, v):
        """Accept unquoted YAML booleans (status: True) as condition statuses."""
        if isinstance(v, bool):
            return ConditionStatus.TRUE if v else ConditionStatus.FALSE
        return v

    def is_true(self) -> bool:
        return self.status == ConditionStatus.TRUE

    def is_false(self) -> bool:
        return self.status == ConditionStatus.FALSE

    def is_unknown(self) -> bool:
        return self.status == ConditionStatus.UNKNOWN


class ConditionedStatus(BaseModel):
    """
    Status fields shared by every resource that reports conditions.

    Child snapshots and the Sequence status both build on this.
    """
    observed_generation: int = Field(default=0, ge=0)
    conditions: List[Condition] = Field(default_factory=list)
    annotations: Dict[str, str] = Field(default_factory=dict)

    model_config = K8S_MODEL_CONFIG

    def get_condition(self, condition_type: str) -> Optional[Condition]:
        """Return the condition of the given type, or None."""
        for condition in self.conditions:
            if condition.type == condition_type:
                return condition
        return None


class ConditionAccessor(Protocol):
    """Anything holding a mutable ``conditions`` list."""
    conditions: List[Condition]


# ============================================================================
# CONDITION SET
# ============================================================================

@dataclass(frozen=True)
class ConditionSet:
    """
    Immutable declaration of tracked condition types.

    Built once and shared by every status record of a resource kind.
    """
    happy: str
    dependents: Tuple[str, ...] = ()

    @classmethod
    def living(cls, *dependents: str) -> "ConditionSet":
        """
        Condition set for long-running resources, with "Ready" as happy type.

        The happy type and duplicates are dropped from the dependents.
        """
        return cls.create(CONDITION_READY, *dependents)

    @classmethod
    def create(cls, happy: str, *dependents: str) -> "ConditionSet":
        deps: List[str] = []
        for dep in dependents:
            if dep == happy or dep in deps:
                continue
            deps.append(dep)
        return cls(happy=happy, dependents=tuple(deps))

    @property
    def condition_types(self) -> Tuple[str, ...]:
        """Happy type followed by every dependent type."""
        return (self.happy,) + self.dependents

    def is_terminal(self, condition_type: str) -> bool:
        """Terminal types force the happy condition False when they fail."""
        return condition_type == self.happy or condition_type in self.dependents

    def severity(self, condition_type: str) -> ConditionSeverity:
        if self.is_terminal(condition_type):
            return ConditionSeverity.ERROR
        return ConditionSeverity.INFO

    def manage(self, accessor: ConditionAccessor) -> "ConditionManager":
        """Bind this set to a status record."""
        return ConditionManager(self, accessor)


# ============================================================================
# CONDITION MANAGER
# ============================================================================

class ConditionManager:
    """
    Applies condition transitions to one status record.

    Holds no state of its own; creating one per call is cheap.
    """

    def __init__(self, condition_set: ConditionSet, accessor: ConditionAccessor):
        self.condition_set = condition_set
        self.accessor = accessor

    @property
    def happy(self) -> str:
        return self.condition_set.happy

    def get_condition(self, condition_type: str) -> Optional[Condition]:
        for condition in self.accessor.conditions:
            if condition.type == condition_type:
                return condition
        return None

    def is_happy(self) -> bool:
        happy = self.get_condition(self.happy)
        return happy is not None and happy.is_true()

    def set_condition(self, condition: Condition) -> None:
        """
        Replace the condition of the same type.

        A change that would only move lastTransitionTime is dropped.
        """
        conditions: List[Condition] = []
        for existing in self.accessor.conditions:
            if existing.type != condition.type:
                conditions.append(existing)
                continue
            candidate = condition.model_copy(
                update={"last_transition_time": existing.last_transition_time}
            )
            if candidate == existing:
                return

        conditions.append(
            condition.model_copy(update={"last_transition_time": transition_time()})
        )
        conditions.sort(key=lambda c: c.type)
        self.accessor.conditions = conditions

    def clear_condition(self, condition_type: str) -> None:
        """Remove a non-terminal condition."""
        if self.condition_set.is_terminal(condition_type):
            raise ValueError(f"Cannot clear terminal condition: {condition_type}")
        self.accessor.conditions = [
            c for c in self.accessor.conditions if c.type != condition_type
        ]

    def _build(
        self,
        condition_type: str,
        status: ConditionStatus,
        reason: str = "",
        message: str = "",
    ) -> Condition:
        return Condition(
            type=condition_type,
            status=status,
            severity=self.condition_set.severity(condition_type),
            reason=reason,
            message=message,
        )

    def _mark_happy_if_all_true(self) -> None:
        for dep in self.condition_set.dependents:
            condition = self.get_condition(dep)
            # Failed or Unknown conditions trump True
            if condition is None or not condition.is_true():
                return
        self.set_condition(self._build(self.happy, ConditionStatus.TRUE))

    def mark_true(self, condition_type: str) -> None:
        self.set_condition(self._build(condition_type, ConditionStatus.TRUE))
        self._mark_happy_if_all_true()

    def mark_true_with_reason(self, condition_type: str, reason: str, message: str) -> None:
        self.set_condition(
            self._build(condition_type, ConditionStatus.TRUE, reason, message)
        )
        self._mark_happy_if_all_true()

    def mark_unknown(self, condition_type: str, reason: str, message: str) -> None:
        self.set_condition(
            self._build(condition_type, ConditionStatus.UNKNOWN, reason, message)
        )

        for dep in self.condition_set.dependents:
            condition = self.get_condition(dep)
            # Failed conditions trump Unknown
            if condition is not None and condition.is_false():
                happy = self.get_condition(self.happy)
                if happy is None or not happy.is_false():
                    self.mark_false(self.happy, reason, message)
                return

        if condition_type in self.condition_set.dependents:
            self.set_condition(
                self._build(self.happy, ConditionStatus.UNKNOWN, reason, message)
            )

    def mark_false(self, condition_type: str, reason: str, message: str) -> None:
        types = [condition_type]
        if condition_type != self.happy and self.condition_set.is_terminal(condition_type):
            types.append(self.happy)
        for t in types:
            self.set_condition(self._build(t, ConditionStatus.FALSE, reason, message))

    def initialize_conditions(self) -> None:
        """
        Seed every tracked type that is not yet present.

        Existing conditions are never touched. When the happy condition is
        already True, missing dependents are seeded True, otherwise Unknown.
        """
        happy = self.get_condition(self.happy)
        if happy is None:
            happy = self._build(self.happy, ConditionStatus.UNKNOWN)
            self.set_condition(happy)

        status = ConditionStatus.TRUE if happy.is_true() else ConditionStatus.UNKNOWN
        for dep in self.condition_set.dependents:
            if self.get_condition(dep) is None:
                self.set_condition(self._build(dep, status))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CONDITION_READY",
    "Condition",
    "ConditionedStatus",
    "ConditionAccessor",
    "ConditionSet",
    "ConditionManager",
]
