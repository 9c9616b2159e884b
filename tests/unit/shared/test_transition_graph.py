"""Unit tests for the generic TransitionGraph."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from shared.domain.workflow import (
    TransitionGraph,
    TransitionReason,
    TransitionResult,
    status_tag,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def graph():
    return TransitionGraph(
        name="traffic",
        statuses=("red", "green", "yellow", "off"),
        transitions={
            "red": ("green", "off"),
            "green": ("yellow",),
            "yellow": ("red",),
            "off": (),
        },
        canonical_order=("red", "green", "yellow", "off"),
        final_states=frozenset({"off"}),
        guarded_edges=(("green", "off", TransitionReason.PRODUCTION_LOCKED),),
        backward_exempt=frozenset({"off"}),
        labels={"red": "Vermelho", "green": "Verde"},
    )


class TestConstruction:
    def test_missing_entry_is_rejected(self):
        with pytest.raises(ValueError, match="no transition entry"):
            TransitionGraph(
                name="broken",
                statuses=("a", "b"),
                transitions={"a": ("b",)},
                canonical_order=("a", "b"),
                final_states=frozenset(),
            )

    def test_unknown_target_is_rejected(self):
        with pytest.raises(ValueError, match="unknown"):
            TransitionGraph(
                name="broken",
                statuses=("a",),
                transitions={"a": ("z",)},
                canonical_order=("a",),
                final_states=frozenset(),
            )

    def test_final_status_with_exits_is_rejected(self):
        with pytest.raises(ValueError, match="has exits"):
            TransitionGraph(
                name="broken",
                statuses=("a", "b"),
                transitions={"a": ("b",), "b": ("a",)},
                canonical_order=("a", "b"),
                final_states=frozenset({"b"}),
            )

    def test_table_is_read_only(self, graph):
        with pytest.raises(TypeError):
            graph.transitions["red"] = ("yellow",)


class TestEvaluate:
    def test_listed_edge_is_allowed(self, graph):
        result = graph.evaluate("red", "green")
        assert result.allowed is True
        assert result.reason is None
        assert result.message is None

    def test_same_status_wins_over_everything(self, graph):
        result = graph.evaluate("off", "off")
        assert result.reason == TransitionReason.SAME_STATUS

    def test_final_state(self, graph):
        result = graph.evaluate("off", "red")
        assert result.reason == TransitionReason.FINAL_STATE

    def test_guarded_edge(self, graph):
        result = graph.evaluate("green", "off")
        assert result.reason == TransitionReason.PRODUCTION_LOCKED

    def test_backward(self, graph):
        result = graph.evaluate("yellow", "green")
        assert result.reason == TransitionReason.BACKWARD_TRANSITION

    def test_generic(self, graph):
        result = graph.evaluate("red", "yellow")
        assert result.reason == TransitionReason.GENERIC_INVALID

    def test_unknown_statuses_never_raise(self, graph):
        assert graph.evaluate("blue", "red").reason == TransitionReason.GENERIC_INVALID
        assert graph.evaluate("red", "blue").reason == TransitionReason.GENERIC_INVALID
        assert graph.evaluate("blue", "blue").reason == TransitionReason.SAME_STATUS

    def test_message_uses_labels(self, graph):
        result = graph.evaluate("yellow", "green")
        assert "Verde" in result.message
        # No label configured: falls back to the raw tag
        assert "yellow" in result.message


class TestQueries:
    def test_allowed_transitions_keeps_table_order(self, graph):
        assert graph.allowed_transitions("red") == ("green", "off")

    def test_allowed_transitions_unknown_status_is_empty(self, graph):
        assert graph.allowed_transitions("blue") == ()

    def test_next_status_skips_excluded(self, graph):
        assert graph.next_status("red") == "green"
        assert graph.next_status("red", excluding={"green"}) == "off"
        assert graph.next_status("off") is None

    def test_is_final(self, graph):
        assert graph.is_final("off") is True
        assert graph.is_final("red") is False


class TestTransitionResult:
    def test_is_frozen(self):
        result = TransitionResult.ok("a", "b")
        with pytest.raises(ValidationError):
            result.allowed = False

    def test_status_tag_accepts_enums(self):
        assert status_tag(TransitionReason.SAME_STATUS) == "SAME_STATUS"
        assert status_tag("pending") == "pending"
