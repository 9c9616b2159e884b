"""Sales order service layer (Use Cases).

Persists sales orders and consults ``sales_order_workflow`` before every
mutation:

- status changes go through ``is_transition_allowed``; a denial becomes
  ``InvalidOrderStatus`` carrying the ``TransitionResult``;
- edits require ``can_edit`` and deletions require ``can_delete``;
- ``approved -> in_production`` is not a workflow edge and is written only
  by ``mark_in_production``, called by the production-order service;
- approving a quote opens a confirmed order in ``approved`` linked back to
  the quote, in the same transaction. The quote keeps its kind.

Write operations lock the order row first, so the status that was
validated is the status that gets replaced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.events import (
    QuoteConverted,
    SalesOrderCancelled,
    SalesOrderCreated,
    SalesOrderDeleted,
    SalesOrderStatusChanged,
)
from modules.sales_orders.exceptions import (
    InvalidOrderStatus,
    OrderNotDeletable,
    OrderNotEditable,
    SalesOrderNotFound,
)
from modules.sales_orders.workflow import SalesOrderWorkflow, sales_order_workflow
from shared.domain.dtos import StatusOptionDTO, WorkflowStateDTO
from shared.domain.workflow import status_tag

if TYPE_CHECKING:
    from modules.sales_orders.dtos import CreateSalesOrderDTO, UpdateSalesOrderDTO
    from modules.sales_orders.models import SalesOrder
    from modules.sales_orders.repositories.interfaces import ISalesOrderRepository

logger = structlog.get_logger(__name__)


class SalesOrderService:
    """Application service for sales order use cases.

    Receives the repository (and optionally the workflow) via constructor
    injection.
    """

    def __init__(
        self,
        order_repository: ISalesOrderRepository,
        workflow: SalesOrderWorkflow = sales_order_workflow,
    ) -> None:
        self._order_repo = order_repository
        self._workflow = workflow

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateSalesOrderDTO) -> SalesOrder:
        """Create a quote or confirmed order in ``pending``."""
        order = self._order_repo.create(
            {
                "customer_name": dto.customer_name,
                "kind": status_tag(dto.kind),
                "total_amount": dto.total_amount,
                "notes": dto.notes or "",
            }
        )
        order.add_domain_event(SalesOrderCreated(aggregate_id=order.id))
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=order.status,
            notes="Pedido criado",
        )

        logger.info(
            "sales_order.created", sales_order_id=str(order.id), kind=order.kind
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_order(self, order_id: UUID, dto: UpdateSalesOrderDTO) -> SalesOrder:
        """Edit order fields.

        Raises:
            SalesOrderNotFound: order does not exist.
            OrderNotEditable: quotes are editable only while pending,
                confirmed orders only while approved.
        """
        order = self._get_locked(order_id)
        log = logger.bind(
            sales_order_id=str(order_id), status=order.status, kind=order.kind
        )

        if not self._workflow.can_edit(order.status, order.kind):
            log.warning("sales_order.edit_refused")
            raise OrderNotEditable(
                f"Order {order.order_number} cannot be edited in status {order.status}."
            )

        for field in ("customer_name", "total_amount", "notes"):
            value = getattr(dto, field)
            if value is not None:
                setattr(order, field, value)
        self._order_repo.save(order)

        log.info("sales_order.updated")
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def update_status(
        self,
        order_id: UUID,
        new_status: str,
        notes: str = "",
    ) -> SalesOrder:
        """Move an order to ``new_status`` if the workflow allows it.

        An approved quote is converted: see ``_convert_quote``.

        Raises:
            SalesOrderNotFound: order does not exist.
            InvalidOrderStatus: the workflow denied the transition.
        """
        order = self._get_locked(order_id)
        result = self._workflow.is_transition_allowed(
            order.status, new_status, order.kind
        )
        if not result.allowed:
            logger.warning(
                "sales_order.invalid_transition",
                sales_order_id=str(order_id),
                current_status=order.status,
                new_status=status_tag(new_status),
                kind=order.kind,
                reason=result.reason.value if result.reason else None,
            )
            raise InvalidOrderStatus(result)

        target = status_tag(new_status)
        self._apply_status(order, target, notes)
        if order.kind == OrderKind.QUOTE and target == SalesOrderStatus.APPROVED:
            self._convert_quote(order)
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def mark_in_production(self, order_id: UUID, notes: str = "") -> SalesOrder:
        """Write the ``approved -> in_production`` edge.

        Only the production-order module calls this, when it opens a
        production order against an approved confirmed order.

        Raises:
            SalesOrderNotFound: order does not exist.
            InvalidOrderStatus: the order is not an approved confirmed order.
        """
        order = self._get_locked(order_id)
        if not (
            order.kind == OrderKind.CONFIRMED_ORDER
            and order.status == SalesOrderStatus.APPROVED
        ):
            # in_production is in no workflow arm, so this is always a denial
            result = self._workflow.is_transition_allowed(
                order.status, SalesOrderStatus.IN_PRODUCTION, order.kind
            )
            logger.warning(
                "sales_order.production_start_refused",
                sales_order_id=str(order_id),
                current_status=order.status,
                kind=order.kind,
            )
            raise InvalidOrderStatus(result)

        self._apply_status(
            order,
            SalesOrderStatus.IN_PRODUCTION.value,
            notes or "Ordem de produção criada",
        )
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def delete_order(self, order_id: UUID) -> None:
        """Soft-delete an order.

        Raises:
            SalesOrderNotFound: order does not exist.
            OrderNotDeletable: only pending or rejected quotes are deletable.
        """
        order = self._get_locked(order_id)
        if not self._workflow.can_delete(order.status, order.kind):
            logger.warning(
                "sales_order.delete_refused",
                sales_order_id=str(order_id),
                status=order.status,
                kind=order.kind,
            )
            raise OrderNotDeletable(
                f"Order {order.order_number} cannot be deleted in status "
                f"{order.status}."
            )

        order.add_domain_event(SalesOrderDeleted(aggregate_id=order.id))
        self._order_repo.remove(order)
        logger.info("sales_order.deleted", sales_order_id=str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> SalesOrder:
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise SalesOrderNotFound(f"Sales order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[SalesOrder]:
        return self._order_repo.list(filters)

    def get_workflow_state(self, order_id: str) -> WorkflowStateDTO:
        """Status controls for the order: allowed targets, suggestion, flags."""
        order = self.get_order(order_id)
        return self.describe(order.status, order.kind)

    def describe(self, status: str, kind: str) -> WorkflowStateDTO:
        graph = self._workflow.graph_for(kind)
        return WorkflowStateDTO(
            status=status_tag(status),
            kind=status_tag(kind),
            is_final=self._workflow.is_final_status(status),
            can_edit=self._workflow.can_edit(status, kind),
            can_delete=self._workflow.can_delete(status, kind),
            next_status=_tag_or_none(self._workflow.get_next_status(status, kind)),
            allowed_transitions=[
                StatusOptionDTO(value=status_tag(target), label=graph.label(target))
                for target in self._workflow.get_allowed_transitions(status, kind)
            ],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_locked(self, order_id: UUID) -> SalesOrder:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise SalesOrderNotFound(f"Sales order {order_id} not found.")
        return order

    def _convert_quote(self, quote: SalesOrder) -> SalesOrder:
        """Open the confirmed order for a just-approved quote.

        The new order starts in ``approved`` (ready for production) and
        copies the quote's customer, amount and notes.
        """
        confirmed = self._order_repo.create(
            {
                "customer_name": quote.customer_name,
                "kind": OrderKind.CONFIRMED_ORDER.value,
                "status": SalesOrderStatus.APPROVED.value,
                "total_amount": quote.total_amount,
                "notes": quote.notes,
                "source_quote_id": quote.id,
            }
        )
        confirmed.add_domain_event(SalesOrderCreated(aggregate_id=confirmed.id))
        self._order_repo.save(confirmed)
        self._order_repo.add_history(
            order_id=confirmed.id,
            status=SalesOrderStatus.APPROVED.value,
            notes=f"Convertido do orçamento {quote.order_number}",
        )

        quote.add_domain_event(
            QuoteConverted(aggregate_id=quote.id, confirmed_order_id=confirmed.id)
        )
        self._order_repo.save(quote)
        self._order_repo.add_history(
            order_id=quote.id,
            status=quote.status,
            notes=f"Convertido no pedido {confirmed.order_number}",
            old_status=quote.status,
        )

        logger.info(
            "sales_order.quote_converted",
            sales_order_id=str(quote.id),
            confirmed_order_id=str(confirmed.id),
        )
        return confirmed

    def _apply_status(self, order: SalesOrder, new_status: str, notes: str) -> None:
        old_status = order.status
        order.status = new_status
        order.add_domain_event(
            SalesOrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=new_status,
                notes=notes,
            )
        )
        if new_status == SalesOrderStatus.CANCELED:
            order.add_domain_event(
                SalesOrderCancelled(
                    aggregate_id=order.id,
                    old_status=old_status,
                    new_status=new_status,
                    notes=notes,
                )
            )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            notes=notes,
            old_status=old_status,
        )
        logger.info(
            "sales_order.status_updated",
            sales_order_id=str(order.id),
            old_status=old_status,
            new_status=new_status,
        )


def _tag_or_none(status: Optional[str]) -> Optional[str]:
    return status_tag(status) if status is not None else None
