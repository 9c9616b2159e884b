"""Unit tests for ProductionOrderWorkflow."""

from __future__ import annotations

import pytest

from modules.production_orders.constants import ProductionOrderStatus
from modules.production_orders.workflow import (
    production_order_workflow as workflow,
)
from shared.domain.workflow import TransitionReason

pytestmark = pytest.mark.unit

P = ProductionOrderStatus
ALL_STATUSES = list(ProductionOrderStatus)


class TestScenarios:
    def test_complete_without_starting_is_skipped_step(self):
        result = workflow.is_transition_allowed(P.AWAITING, P.COMPLETED)
        assert result.allowed is False
        assert result.reason == TransitionReason.SKIPPED_STEP
        assert "Inicie a produção" in result.message

    def test_partial_back_to_in_production_is_allowed(self):
        result = workflow.is_transition_allowed(P.PARTIAL, P.IN_PRODUCTION)
        assert result.allowed is True

    def test_cancel_in_production_is_locked(self):
        result = workflow.is_transition_allowed(P.IN_PRODUCTION, P.CANCELED)
        assert result.reason == TransitionReason.PRODUCTION_LOCKED


class TestReasons:
    def test_final_state(self):
        result = workflow.is_transition_allowed(P.COMPLETED, P.IN_PRODUCTION)
        assert result.reason == TransitionReason.FINAL_STATE

    def test_backward(self):
        result = workflow.is_transition_allowed(P.IN_PRODUCTION, P.AWAITING)
        assert result.reason == TransitionReason.BACKWARD_TRANSITION

    def test_partial_is_outside_canonical_order(self):
        result = workflow.is_transition_allowed(P.PARTIAL, P.AWAITING)
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_cancel_from_partial_is_generic(self):
        result = workflow.is_transition_allowed(P.PARTIAL, P.CANCELED)
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_unknown_status(self):
        result = workflow.is_transition_allowed("paused", P.COMPLETED)
        assert result.reason == TransitionReason.GENERIC_INVALID


class TestProperties:
    def test_no_self_loop(self):
        for status in ALL_STATUSES:
            result = workflow.is_transition_allowed(status, status)
            assert result.reason == TransitionReason.SAME_STATUS

    def test_finality_closure(self):
        for final in (P.COMPLETED, P.CANCELED):
            assert workflow.get_allowed_transitions(final) == ()
            for target in ALL_STATUSES:
                if target != final:
                    result = workflow.is_transition_allowed(final, target)
                    assert result.reason == TransitionReason.FINAL_STATE

    def test_query_matches_table(self):
        for current in ALL_STATUSES:
            allowed = workflow.get_allowed_transitions(current)
            for target in ALL_STATUSES:
                result = workflow.is_transition_allowed(current, target)
                assert result.allowed == (target.value in allowed)


class TestDerivedQueries:
    @pytest.mark.parametrize(
        "current,expected",
        [
            (P.AWAITING, "in_production"),
            (P.IN_PRODUCTION, "partial"),
            (P.PARTIAL, "in_production"),
            (P.COMPLETED, None),
            (P.CANCELED, None),
        ],
    )
    def test_next_status(self, current, expected):
        assert workflow.get_next_status(current) == expected

    def test_can_edit(self):
        editable = {s for s in ALL_STATUSES if workflow.can_edit(s)}
        assert editable == {P.AWAITING, P.PARTIAL}

    def test_can_delete(self):
        deletable = {s for s in ALL_STATUSES if workflow.can_delete(s)}
        assert deletable == {P.AWAITING, P.CANCELED}

    def test_is_final_status(self):
        finals = {s for s in ALL_STATUSES if workflow.is_final_status(s)}
        assert finals == {P.COMPLETED, P.CANCELED}
