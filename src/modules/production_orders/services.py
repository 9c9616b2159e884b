"""Production order service layer (Use Cases).

Opening a production order against a sales order moves that sales order
``approved -> in_production`` in the same transaction.  ``started_at`` is
stamped the first time the order enters ``in_production`` and
``finished_at`` when it is ``completed``.  Re-entering ``in_production``
from ``partial`` keeps the first ``started_at``; it is never re-stamped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.utils import timezone

from modules.production_orders.constants import ProductionOrderStatus
from modules.production_orders.events import (
    ProductionOrderCreated,
    ProductionOrderDeleted,
    ProductionOrderStatusChanged,
    ProductionStarted,
)
from modules.production_orders.exceptions import (
    InvalidProductionOrderStatus,
    ProductionOrderNotDeletable,
    ProductionOrderNotEditable,
    ProductionOrderNotFound,
    SalesOrderNotReady,
)
from modules.production_orders.workflow import (
    ProductionOrderWorkflow,
    production_order_workflow,
)
from modules.sales_orders.constants import OrderKind, SalesOrderStatus
from modules.sales_orders.exceptions import InvalidOrderStatus
from shared.domain.dtos import StatusOptionDTO, WorkflowStateDTO
from shared.domain.workflow import status_tag

if TYPE_CHECKING:
    from modules.production_orders.dtos import (
        CreateProductionOrderDTO,
        UpdateProductionOrderDTO,
    )
    from modules.production_orders.models import ProductionOrder
    from modules.production_orders.repositories.interfaces import (
        IProductionOrderRepository,
    )
    from modules.sales_orders.services import SalesOrderService

logger = structlog.get_logger(__name__)


class ProductionOrderService:
    def __init__(
        self,
        order_repository: IProductionOrderRepository,
        sales_order_service: SalesOrderService,
        workflow: ProductionOrderWorkflow = production_order_workflow,
    ) -> None:
        self._order_repo = order_repository
        self._sales_orders = sales_order_service
        self._workflow = workflow

    @transaction.atomic
    def create_order(self, dto: CreateProductionOrderDTO) -> ProductionOrder:
        """Open a production order, optionally linked to a sales order.

        Raises:
            SalesOrderNotFound: the linked sales order does not exist.
            SalesOrderNotReady: the linked sales order is neither approved
                nor already in production.
        """
        if dto.sales_order_id is not None:
            self._reserve_sales_order(dto.sales_order_id)

        order = self._order_repo.create(
            {
                "product_name": dto.product_name,
                "quantity_meters": dto.quantity_meters,
                "sales_order_id": dto.sales_order_id,
                "scheduled_date": dto.scheduled_date,
                "technical_instructions": dto.technical_instructions or "",
                "notes": dto.notes or "",
            }
        )
        order.add_domain_event(
            ProductionOrderCreated(
                aggregate_id=order.id,
                sales_order_id=str(dto.sales_order_id) if dto.sales_order_id else None,
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id, status=order.status, notes="Ordem criada"
        )

        logger.info(
            "production_order.created",
            production_order_id=str(order.id),
            sales_order_id=str(dto.sales_order_id) if dto.sales_order_id else None,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_order(
        self, order_id: UUID, dto: UpdateProductionOrderDTO
    ) -> ProductionOrder:
        """Raises ProductionOrderNotEditable unless awaiting or partial."""
        order = self._get_locked(order_id)
        if not self._workflow.can_edit(order.status):
            logger.warning(
                "production_order.edit_refused",
                production_order_id=str(order_id),
                status=order.status,
            )
            raise ProductionOrderNotEditable(
                f"Production order {order.op_number} cannot be edited in status "
                f"{order.status}."
            )

        for field in (
            "product_name",
            "quantity_meters",
            "scheduled_date",
            "technical_instructions",
            "notes",
        ):
            value = getattr(dto, field)
            if value is not None:
                setattr(order, field, value)
        self._order_repo.save(order)

        logger.info("production_order.updated", production_order_id=str(order_id))
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def update_status(
        self, order_id: UUID, new_status: str, notes: str = ""
    ) -> ProductionOrder:
        """Raises InvalidProductionOrderStatus when the workflow denies it."""
        order = self._get_locked(order_id)
        result = self._workflow.is_transition_allowed(order.status, new_status)
        if not result.allowed:
            logger.warning(
                "production_order.invalid_transition",
                production_order_id=str(order_id),
                current_status=order.status,
                new_status=status_tag(new_status),
                reason=result.reason.value if result.reason else None,
            )
            raise InvalidProductionOrderStatus(result)

        old_status = order.status
        target = status_tag(new_status)
        order.status = target
        order.add_domain_event(
            ProductionOrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=target,
                notes=notes,
            )
        )

        now = timezone.now()
        if target == ProductionOrderStatus.IN_PRODUCTION and order.started_at is None:
            order.started_at = now
            order.add_domain_event(
                ProductionStarted(
                    aggregate_id=order.id,
                    old_status=old_status,
                    new_status=target,
                    notes=notes,
                )
            )
        if target == ProductionOrderStatus.COMPLETED:
            order.finished_at = now

        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id, status=target, notes=notes, old_status=old_status
        )
        logger.info(
            "production_order.status_updated",
            production_order_id=str(order_id),
            old_status=old_status,
            new_status=target,
        )
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def delete_order(self, order_id: UUID) -> None:
        """Raises ProductionOrderNotDeletable unless awaiting or canceled."""
        order = self._get_locked(order_id)
        if not self._workflow.can_delete(order.status):
            logger.warning(
                "production_order.delete_refused",
                production_order_id=str(order_id),
                status=order.status,
            )
            raise ProductionOrderNotDeletable(
                f"Production order {order.op_number} cannot be deleted in status "
                f"{order.status}."
            )

        order.add_domain_event(ProductionOrderDeleted(aggregate_id=order.id))
        self._order_repo.remove(order)
        logger.info("production_order.deleted", production_order_id=str(order_id))

    def get_order(self, order_id: str) -> ProductionOrder:
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise ProductionOrderNotFound(f"Production order {order_id} not found.")
        return order

    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[ProductionOrder]:
        return self._order_repo.list(filters)

    def get_workflow_state(self, order_id: str) -> WorkflowStateDTO:
        order = self.get_order(order_id)
        return self.describe(order.status)

    def describe(self, status: str) -> WorkflowStateDTO:
        graph = self._workflow.graph
        next_status = self._workflow.get_next_status(status)
        return WorkflowStateDTO(
            status=status_tag(status),
            is_final=self._workflow.is_final_status(status),
            can_edit=self._workflow.can_edit(status),
            can_delete=self._workflow.can_delete(status),
            next_status=status_tag(next_status) if next_status is not None else None,
            allowed_transitions=[
                StatusOptionDTO(value=status_tag(target), label=graph.label(target))
                for target in self._workflow.get_allowed_transitions(status)
            ],
        )

    def _get_locked(self, order_id: UUID) -> ProductionOrder:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise ProductionOrderNotFound(f"Production order {order_id} not found.")
        return order

    def _reserve_sales_order(self, sales_order_id: UUID) -> None:
        # Several production orders may share one sales order.
        sales_order = self._sales_orders.get_order(str(sales_order_id))
        if sales_order.status == SalesOrderStatus.IN_PRODUCTION:
            return
        if (
            sales_order.kind != OrderKind.CONFIRMED_ORDER
            or sales_order.status != SalesOrderStatus.APPROVED
        ):
            logger.warning(
                "production_order.sales_order_not_ready",
                sales_order_id=str(sales_order_id),
                status=sales_order.status,
                kind=sales_order.kind,
            )
            raise SalesOrderNotReady(
                f"Sales order {sales_order.order_number} must be an approved "
                f"confirmed order before production (current: "
                f"{sales_order.kind}/{sales_order.status})."
            )
        try:
            self._sales_orders.mark_in_production(sales_order_id)
        except InvalidOrderStatus as exc:
            # status changed after the unlocked read above
            logger.warning(
                "production_order.sales_order_changed",
                sales_order_id=str(sales_order_id),
                reason=exc.reason.value if exc.reason else None,
            )
            raise SalesOrderNotReady(
                f"Sales order {sales_order.order_number} is no longer approved."
            ) from exc
