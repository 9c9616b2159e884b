"""Production order status workflow.

Single transition graph; ``partial -> in_production`` is the only
backward edge and exists so a new line item can be started after others
have finished.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from modules.production_orders.constants import (
    DELETABLE_STATUSES,
    EDITABLE_STATUSES,
    FINAL_STATUSES,
    ProductionOrderStatus,
)
from shared.domain.workflow import (
    TransitionGraph,
    TransitionReason,
    TransitionResult,
    status_tag,
)

P = ProductionOrderStatus

PRODUCTION_ORDER_MESSAGES: Mapping[TransitionReason, str] = {
    TransitionReason.FINAL_STATE: (
        "Não é possível alterar o status de uma ordem {current}"
    ),
    TransitionReason.PRODUCTION_LOCKED: (
        "Não é possível cancelar uma ordem que já está em produção"
    ),
    TransitionReason.SKIPPED_STEP: (
        "Não é possível concluir uma ordem sem iniciá-la. "
        "Inicie a produção primeiro."
    ),
}

PRODUCTION_ORDER_GRAPH = TransitionGraph(
    name="production_order",
    statuses=tuple(ProductionOrderStatus),
    transitions={
        P.AWAITING: (P.IN_PRODUCTION, P.CANCELED),
        P.IN_PRODUCTION: (P.PARTIAL, P.COMPLETED),
        P.PARTIAL: (P.IN_PRODUCTION, P.COMPLETED),
        P.COMPLETED: (),
        P.CANCELED: (),
    },
    canonical_order=(P.AWAITING, P.IN_PRODUCTION, P.COMPLETED, P.CANCELED),
    final_states=FINAL_STATUSES,
    guarded_edges=(
        (P.IN_PRODUCTION, P.CANCELED, TransitionReason.PRODUCTION_LOCKED),
        (P.AWAITING, P.COMPLETED, TransitionReason.SKIPPED_STEP),
    ),
    backward_exempt=frozenset({P.CANCELED}),
    labels=dict(ProductionOrderStatus.choices),
    messages=PRODUCTION_ORDER_MESSAGES,
)


class ProductionOrderWorkflow:
    """Pure decision logic for ``ProductionOrderStatus`` transitions."""

    def __init__(self, graph: TransitionGraph = PRODUCTION_ORDER_GRAPH) -> None:
        self._graph = graph

    @property
    def graph(self) -> TransitionGraph:
        return self._graph

    def is_transition_allowed(self, current: Any, requested: Any) -> TransitionResult:
        return self._graph.evaluate(current, requested)

    def get_allowed_transitions(self, current: Any) -> Tuple[str, ...]:
        return self._graph.allowed_transitions(current)

    def is_final_status(self, status: Any) -> bool:
        return self._graph.is_final(status)

    def get_next_status(self, current: Any) -> Optional[str]:
        return self._graph.next_status(current, excluding={P.CANCELED})

    def can_edit(self, status: Any) -> bool:
        return status_tag(status) in EDITABLE_STATUSES

    def can_delete(self, status: Any) -> bool:
        return status_tag(status) in DELETABLE_STATUSES


production_order_workflow = ProductionOrderWorkflow()
