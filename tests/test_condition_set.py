# ============================================================================
# CONDITION SET TESTS
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Tests - Condition bookkeeping unit tests
# PURPOSE: Verify happy-condition derivation, ordering and timestamps
# CREATED: 18 OCT 2026
# ============================================================================
"""
Condition Set Tests

Covers:
1. ConditionSet construction (dedup, severity, terminal types)
2. initialize_conditions seeding and idempotence
3. mark_true / mark_unknown / mark_false effect on the happy condition
4. set_condition timestamp handling and ordering
5. clear_condition

Run with:
    pytest tests/test_condition_set.py -v
"""

import pytest
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

import core.models.condition as condition_model
from core.contracts import ConditionSeverity, ConditionStatus
from core.models.condition import Condition, ConditionSet


T1 = datetime(2026, 10, 18, 9, 0, 0, tzinfo=timezone.utc)
T2 = datetime(2026, 10, 18, 9, 5, 0, tzinfo=timezone.utc)


class Holder(BaseModel):
    conditions: List[Condition] = Field(default_factory=list)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def condition_set():
    return ConditionSet.living("Ready", "Alpha", "Bravo", "Alpha")


@pytest.fixture
def holder():
    return Holder()


@pytest.fixture
def clock(monkeypatch):
    """Controllable transition clock."""
    state = {"now": T1}
    monkeypatch.setattr(condition_model, "transition_time", lambda: state["now"])
    return state


# ============================================================================
# CONSTRUCTION
# ============================================================================

class TestConditionSet:
    def test_living_drops_happy_and_duplicates(self, condition_set):
        assert condition_set.happy == "Ready"
        assert condition_set.dependents == ("Alpha", "Bravo")
        assert condition_set.condition_types == ("Ready", "Alpha", "Bravo")

    def test_is_frozen(self, condition_set):
        with pytest.raises(AttributeError):
            condition_set.happy = "Healthy"

    def test_severity(self, condition_set):
        assert condition_set.severity("Ready") == ConditionSeverity.ERROR
        assert condition_set.severity("Alpha") == ConditionSeverity.ERROR
        assert condition_set.severity("Extra") == ConditionSeverity.INFO

    def test_is_terminal(self, condition_set):
        assert condition_set.is_terminal("Ready")
        assert condition_set.is_terminal("Bravo")
        assert not condition_set.is_terminal("Extra")


# ============================================================================
# INITIALIZATION
# ============================================================================

class TestInitializeConditions:
    def test_seeds_unknown_sorted(self, condition_set, holder):
        condition_set.manage(holder).initialize_conditions()

        assert [c.type for c in holder.conditions] == ["Alpha", "Bravo", "Ready"]
        assert all(c.status == ConditionStatus.UNKNOWN for c in holder.conditions)

    def test_idempotent(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.initialize_conditions()
        first = [c.model_copy() for c in holder.conditions]

        manager.initialize_conditions()

        assert holder.conditions == first

    def test_does_not_regress_observed_conditions(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Alpha")
        manager.mark_false("Bravo", "Broken", "bravo failed")

        manager.initialize_conditions()

        assert manager.get_condition("Alpha").is_true()
        assert manager.get_condition("Bravo").is_false()

    def test_happy_true_seeds_dependents_true(self, condition_set, holder):
        holder.conditions = [Condition(type="Ready", status=ConditionStatus.TRUE)]

        condition_set.manage(holder).initialize_conditions()

        assert all(c.is_true() for c in holder.conditions)


# ============================================================================
# HAPPY CONDITION
# ============================================================================

class TestHappyDerivation:
    def test_all_true_makes_happy(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.initialize_conditions()

        manager.mark_true("Alpha")
        assert not manager.is_happy()

        manager.mark_true("Bravo")
        assert manager.is_happy()

    def test_missing_dependent_blocks_happy(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Alpha")

        assert manager.get_condition("Ready") is None
        assert not manager.is_happy()

    def test_unknown_dependent_makes_happy_unknown(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Alpha")
        manager.mark_true("Bravo")

        manager.mark_unknown("Bravo", "Waiting", "bravo is starting")

        happy = manager.get_condition("Ready")
        assert happy.status == ConditionStatus.UNKNOWN
        assert happy.reason == "Waiting"
        assert happy.message == "bravo is starting"

    def test_false_dependent_makes_happy_false(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Alpha")

        manager.mark_false("Alpha", "Broken", "alpha failed")

        happy = manager.get_condition("Ready")
        assert happy.is_false()
        assert happy.reason == "Broken"

    def test_false_trumps_unknown(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_false("Alpha", "Broken", "alpha failed")

        manager.mark_unknown("Bravo", "Waiting", "bravo is starting")

        happy = manager.get_condition("Ready")
        assert happy.is_false()
        assert happy.reason == "Broken"

    def test_unknown_with_false_dependent_repairs_happy(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_false("Alpha", "Broken", "alpha failed")
        holder.conditions = [c for c in holder.conditions if c.type != "Ready"]

        manager.mark_unknown("Bravo", "Waiting", "bravo is starting")

        happy = manager.get_condition("Ready")
        assert happy.is_false()
        assert happy.reason == "Waiting"

    def test_non_dependent_does_not_touch_happy(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Alpha")
        manager.mark_true("Bravo")

        manager.mark_unknown("Extra", "Info", "informational")
        manager.mark_false("Extra", "Info", "informational")

        assert manager.is_happy()
        assert manager.get_condition("Extra").severity == ConditionSeverity.INFO

    def test_mark_true_with_reason(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Bravo")

        manager.mark_true_with_reason("Alpha", "Skipped", "feature disabled")

        alpha = manager.get_condition("Alpha")
        assert alpha.is_true()
        assert alpha.reason == "Skipped"
        assert alpha.message == "feature disabled"
        assert manager.is_happy()


# ============================================================================
# SET / CLEAR
# ============================================================================

class TestSetCondition:
    def test_unchanged_condition_keeps_timestamp(self, condition_set, holder, clock):
        manager = condition_set.manage(holder)
        manager.mark_unknown("Alpha", "Waiting", "not yet")

        clock["now"] = T2
        manager.mark_unknown("Alpha", "Waiting", "not yet")

        assert manager.get_condition("Alpha").last_transition_time == T1

    def test_changed_condition_moves_timestamp(self, condition_set, holder, clock):
        manager = condition_set.manage(holder)
        manager.mark_unknown("Alpha", "Waiting", "not yet")

        clock["now"] = T2
        manager.mark_unknown("Alpha", "Waiting", "still not")

        assert manager.get_condition("Alpha").last_transition_time == T2

    def test_conditions_sorted_by_type(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Bravo")
        manager.mark_true("Extra")
        manager.mark_true("Alpha")

        assert [c.type for c in holder.conditions] == ["Alpha", "Bravo", "Extra", "Ready"]

    def test_clear_non_terminal(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.mark_true("Extra")

        manager.clear_condition("Extra")

        assert manager.get_condition("Extra") is None

    def test_clear_terminal_raises(self, condition_set, holder):
        manager = condition_set.manage(holder)
        manager.initialize_conditions()

        with pytest.raises(ValueError, match="terminal"):
            manager.clear_condition("Alpha")


class TestConditionModel:
    def test_bool_status_accepted(self):
        assert Condition(type="Ready", status=True).is_true()
        assert Condition(type="Ready", status=False).is_false()

    def test_camel_case_serialization(self):
        condition = Condition(type="Ready", status="True", last_transition_time=T1)

        data = condition.model_dump(by_alias=True, mode="json")

        assert data["lastTransitionTime"].startswith("2026-10-18T09:00:00")
        assert data["status"] == "True"
