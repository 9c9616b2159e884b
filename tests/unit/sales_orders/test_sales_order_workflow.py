"""Unit tests for SalesOrderWorkflow.

Covers:
- Transition tables per kind (quote / confirmed_order).
- Denial reason precedence.
- Graph properties: totality, no self-loop, finality closure, symmetry
  between is_transition_allowed and get_allowed_transitions.
- get_next_status, can_edit and can_delete.
"""

from __future__ import annotations

import pytest

from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.workflow import sales_order_workflow as workflow
from shared.domain.workflow import TransitionReason

pytestmark = pytest.mark.unit

S = SalesOrderStatus
ALL_STATUSES = list(SalesOrderStatus)
ALL_KINDS = list(OrderKind)
FINAL = [S.DELIVERED, S.CANCELED, S.REJECTED]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_pending_to_in_production_is_generic_invalid(self):
        result = workflow.is_transition_allowed(
            S.PENDING, S.IN_PRODUCTION, OrderKind.CONFIRMED_ORDER
        )
        assert result.allowed is False
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_cancel_in_production_is_locked(self):
        result = workflow.is_transition_allowed(
            S.IN_PRODUCTION, S.CANCELED, OrderKind.CONFIRMED_ORDER
        )
        assert result.allowed is False
        assert result.reason == TransitionReason.PRODUCTION_LOCKED
        assert "produção" in result.message

    def test_approved_quote_back_to_pending_is_backward(self):
        result = workflow.is_transition_allowed(S.APPROVED, S.PENDING, OrderKind.QUOTE)
        assert result.allowed is False
        assert result.reason == TransitionReason.BACKWARD_TRANSITION

    def test_can_edit_depends_on_kind(self):
        assert workflow.can_edit(S.PENDING, OrderKind.QUOTE) is True
        assert workflow.can_edit(S.PENDING, OrderKind.CONFIRMED_ORDER) is False
        assert workflow.can_edit(S.APPROVED, OrderKind.CONFIRMED_ORDER) is True


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestTables:
    @pytest.mark.parametrize(
        "current,expected",
        [
            (S.PENDING, ("approved", "rejected", "canceled")),
            (S.APPROVED, ()),
            (S.IN_PRODUCTION, ()),
            (S.REJECTED, ()),
        ],
    )
    def test_quote(self, current, expected):
        assert workflow.get_allowed_transitions(current, OrderKind.QUOTE) == expected

    @pytest.mark.parametrize(
        "current,expected",
        [
            (S.PENDING, ("approved", "canceled")),
            (S.APPROVED, ("canceled",)),
            (S.IN_PRODUCTION, ("finished",)),
            (S.FINISHED, ("awaiting_dispatch",)),
            (S.AWAITING_DISPATCH, ("delivered",)),
            (S.DELIVERED, ()),
        ],
    )
    def test_confirmed_order(self, current, expected):
        assert (
            workflow.get_allowed_transitions(current, OrderKind.CONFIRMED_ORDER)
            == expected
        )

    def test_approved_to_in_production_is_not_a_workflow_edge(self):
        for kind in ALL_KINDS:
            result = workflow.is_transition_allowed(S.APPROVED, S.IN_PRODUCTION, kind)
            assert result.allowed is False

    def test_confirmed_order_never_reaches_rejected(self):
        for status in ALL_STATUSES:
            assert S.REJECTED not in workflow.get_allowed_transitions(
                status, OrderKind.CONFIRMED_ORDER
            )

    def test_quote_never_reaches_production_statuses(self):
        reachable = {
            target
            for status in ALL_STATUSES
            for target in workflow.get_allowed_transitions(status, OrderKind.QUOTE)
        }
        assert reachable.isdisjoint(
            {S.IN_PRODUCTION, S.FINISHED, S.AWAITING_DISPATCH, S.DELIVERED}
        )

    def test_plain_strings_and_enums_agree(self):
        assert workflow.get_allowed_transitions(
            "pending", "quote"
        ) == workflow.get_allowed_transitions(S.PENDING, OrderKind.QUOTE)


# ---------------------------------------------------------------------------
# Reason precedence
# ---------------------------------------------------------------------------


class TestReasons:
    def test_same_status(self):
        result = workflow.is_transition_allowed(S.PENDING, S.PENDING, OrderKind.QUOTE)
        assert result.reason == TransitionReason.SAME_STATUS

    def test_final_state_wins_over_backward(self):
        result = workflow.is_transition_allowed(
            S.DELIVERED, S.PENDING, OrderKind.CONFIRMED_ORDER
        )
        assert result.reason == TransitionReason.FINAL_STATE

    def test_cancel_is_never_backward(self):
        result = workflow.is_transition_allowed(
            S.FINISHED, S.CANCELED, OrderKind.CONFIRMED_ORDER
        )
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_forward_skip_is_generic(self):
        result = workflow.is_transition_allowed(
            S.IN_PRODUCTION, S.DELIVERED, OrderKind.CONFIRMED_ORDER
        )
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_backward_in_confirmed_order(self):
        result = workflow.is_transition_allowed(
            S.AWAITING_DISPATCH, S.IN_PRODUCTION, OrderKind.CONFIRMED_ORDER
        )
        assert result.reason == TransitionReason.BACKWARD_TRANSITION

    def test_unknown_status_is_generic_invalid(self):
        result = workflow.is_transition_allowed(
            "pending", "shipped", OrderKind.CONFIRMED_ORDER
        )
        assert result.allowed is False
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_unknown_kind_denies_everything(self):
        assert workflow.get_allowed_transitions(S.PENDING, "wholesale") == ()
        result = workflow.is_transition_allowed(S.PENDING, S.APPROVED, "wholesale")
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_result_carries_tags(self):
        result = workflow.is_transition_allowed(
            S.IN_PRODUCTION, S.CANCELED, OrderKind.CONFIRMED_ORDER
        )
        assert result.current == "in_production"
        assert result.requested == "canceled"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("kind", ALL_KINDS)
class TestProperties:
    def test_totality(self, kind):
        values = {s.value for s in ALL_STATUSES}
        for status in ALL_STATUSES:
            targets = workflow.get_allowed_transitions(status, kind)
            assert set(targets) <= values

    def test_no_self_loop(self, kind):
        for status in ALL_STATUSES:
            result = workflow.is_transition_allowed(status, status, kind)
            assert result.allowed is False
            assert result.reason == TransitionReason.SAME_STATUS

    def test_finality_closure(self, kind):
        for final in FINAL:
            assert workflow.get_allowed_transitions(final, kind) == ()
            for target in ALL_STATUSES:
                if target == final:
                    continue
                result = workflow.is_transition_allowed(final, target, kind)
                assert result.allowed is False
                assert result.reason == TransitionReason.FINAL_STATE

    def test_query_matches_table(self, kind):
        for current in ALL_STATUSES:
            allowed = workflow.get_allowed_transitions(current, kind)
            for target in ALL_STATUSES:
                result = workflow.is_transition_allowed(current, target, kind)
                assert result.allowed == (target.value in allowed)

    def test_idempotent(self, kind):
        for current in ALL_STATUSES:
            for target in ALL_STATUSES:
                first = workflow.is_transition_allowed(current, target, kind)
                second = workflow.is_transition_allowed(current, target, kind)
                assert first == second


# ---------------------------------------------------------------------------
# Derived queries
# ---------------------------------------------------------------------------


class TestDerivedQueries:
    def test_is_final_status(self):
        assert {s for s in ALL_STATUSES if workflow.is_final_status(s)} == set(FINAL)

    @pytest.mark.parametrize(
        "current,kind,expected",
        [
            (S.PENDING, OrderKind.QUOTE, "approved"),
            (S.APPROVED, OrderKind.QUOTE, None),
            (S.PENDING, OrderKind.CONFIRMED_ORDER, "approved"),
            (S.APPROVED, OrderKind.CONFIRMED_ORDER, None),
            (S.IN_PRODUCTION, OrderKind.CONFIRMED_ORDER, "finished"),
            (S.AWAITING_DISPATCH, OrderKind.CONFIRMED_ORDER, "delivered"),
            (S.DELIVERED, OrderKind.CONFIRMED_ORDER, None),
        ],
    )
    def test_next_status(self, current, kind, expected):
        assert workflow.get_next_status(current, kind) == expected

    @pytest.mark.parametrize(
        "status,kind,expected",
        [
            (S.PENDING, OrderKind.QUOTE, True),
            (S.REJECTED, OrderKind.QUOTE, True),
            (S.APPROVED, OrderKind.QUOTE, False),
            (S.CANCELED, OrderKind.QUOTE, False),
            (S.PENDING, OrderKind.CONFIRMED_ORDER, False),
            (S.CANCELED, OrderKind.CONFIRMED_ORDER, False),
        ],
    )
    def test_can_delete(self, status, kind, expected):
        assert workflow.can_delete(status, kind) is expected

    def test_can_edit_confirmed_order_only_before_production(self):
        assert workflow.can_edit(S.IN_PRODUCTION, OrderKind.CONFIRMED_ORDER) is False
        assert workflow.can_edit(S.APPROVED, OrderKind.QUOTE) is False
