"""Sales order / quote status workflow.

Quotes and confirmed orders share the ``SalesOrderStatus`` vocabulary but
follow disjoint transition graphs, selected by ``OrderKind``.

The ``approved -> in_production`` edge is deliberately absent from both
graphs: it is written only by the production-order module when a
production order is opened against an approved sales order
(``SalesOrderService.mark_in_production``).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from modules.sales_orders.constants import (
    ESCAPE_STATUSES,
    FINAL_STATUSES,
    OrderKind,
    SalesOrderStatus,
)
from shared.domain.workflow import (
    TransitionGraph,
    TransitionReason,
    TransitionResult,
    status_tag,
)

S = SalesOrderStatus

SALES_ORDER_MESSAGES: Mapping[TransitionReason, str] = {
    TransitionReason.FINAL_STATE: (
        "Não é possível alterar o status de um pedido {current}"
    ),
    TransitionReason.PRODUCTION_LOCKED: (
        "Não é possível cancelar um pedido que já está em produção"
    ),
}

_COMMON = dict(
    statuses=tuple(SalesOrderStatus),
    final_states=FINAL_STATUSES,
    guarded_edges=(
        (S.IN_PRODUCTION, S.CANCELED, TransitionReason.PRODUCTION_LOCKED),
    ),
    backward_exempt=frozenset({S.CANCELED}),
    labels=dict(SalesOrderStatus.choices),
    messages=SALES_ORDER_MESSAGES,
)

QUOTE_GRAPH = TransitionGraph(
    name="quote",
    transitions={
        S.PENDING: (S.APPROVED, S.REJECTED, S.CANCELED),
        # Approved quotes are converted outside this workflow.
        S.APPROVED: (),
        S.IN_PRODUCTION: (),
        S.FINISHED: (),
        S.AWAITING_DISPATCH: (),
        S.DELIVERED: (),
        S.CANCELED: (),
        S.REJECTED: (),
    },
    canonical_order=(S.PENDING, S.APPROVED, S.REJECTED, S.CANCELED),
    **_COMMON,
)

CONFIRMED_ORDER_GRAPH = TransitionGraph(
    name="confirmed_order",
    transitions={
        S.PENDING: (S.APPROVED, S.CANCELED),
        S.APPROVED: (S.CANCELED,),
        S.IN_PRODUCTION: (S.FINISHED,),
        S.FINISHED: (S.AWAITING_DISPATCH,),
        S.AWAITING_DISPATCH: (S.DELIVERED,),
        S.DELIVERED: (),
        S.CANCELED: (),
        S.REJECTED: (),
    },
    canonical_order=(
        S.PENDING,
        S.APPROVED,
        S.IN_PRODUCTION,
        S.FINISHED,
        S.AWAITING_DISPATCH,
        S.DELIVERED,
        S.CANCELED,
    ),
    **_COMMON,
)

# Unknown kinds reach nothing: every transition is denied.
UNKNOWN_KIND_GRAPH = TransitionGraph(
    name="unknown_kind",
    statuses=(),
    transitions={},
    canonical_order=(),
    final_states=FINAL_STATUSES,
    labels=dict(SalesOrderStatus.choices),
    messages=SALES_ORDER_MESSAGES,
)


class SalesOrderWorkflow:
    """Pure decision logic for ``SalesOrderStatus`` transitions.

    Holds no mutable state; the shared ``sales_order_workflow`` instance is
    safe to use from any thread.  Denials are returned, never raised.
    """

    def __init__(self) -> None:
        self._graphs: Mapping[str, TransitionGraph] = MappingProxyType(
            {
                OrderKind.QUOTE.value: QUOTE_GRAPH,
                OrderKind.CONFIRMED_ORDER.value: CONFIRMED_ORDER_GRAPH,
            }
        )

    def graph_for(self, kind: Any) -> TransitionGraph:
        return self._graphs.get(status_tag(kind), UNKNOWN_KIND_GRAPH)

    def is_transition_allowed(
        self, current: Any, requested: Any, kind: Any
    ) -> TransitionResult:
        return self.graph_for(kind).evaluate(current, requested)

    def get_allowed_transitions(self, current: Any, kind: Any) -> Tuple[str, ...]:
        return self.graph_for(kind).allowed_transitions(current)

    def is_final_status(self, status: Any) -> bool:
        """Kind-independent: ``rejected`` is final wherever it appears."""
        return status_tag(status) in FINAL_STATUSES

    def get_next_status(self, current: Any, kind: Any) -> Optional[str]:
        """Natural forward step, ignoring cancellation and rejection."""
        return self.graph_for(kind).next_status(current, excluding=ESCAPE_STATUSES)

    def can_edit(self, status: Any, kind: Any) -> bool:
        # Quotes are editable while pending; confirmed orders only
        # before production starts.
        if kind == OrderKind.QUOTE:
            return status == SalesOrderStatus.PENDING
        if kind == OrderKind.CONFIRMED_ORDER:
            return status == SalesOrderStatus.APPROVED
        return False

    def can_delete(self, status: Any, kind: Any) -> bool:
        if kind == OrderKind.QUOTE:
            return status in (SalesOrderStatus.PENDING, SalesOrderStatus.REJECTED)
        # Confirmed orders are only ever canceled.
        return False


sales_order_workflow = SalesOrderWorkflow()
