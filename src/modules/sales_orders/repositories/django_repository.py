"""Django ORM implementation of the sales order repository.

Reads exclude soft-deleted rows.  ``get_for_update`` takes a row-level
lock (``SELECT FOR UPDATE``) so two concurrent requests cannot both
validate a transition against the same stored status.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.sales_orders.constants import SalesOrderStatus
from modules.sales_orders.models import SalesOrder, SalesOrderStatusHistory
from modules.sales_orders.repositories.interfaces import ISalesOrderRepository
from shared.infrastructure.outbox import flush_domain_events

logger = structlog.get_logger(__name__)

OUTBOX_TOPIC = "sales_orders"


class SalesOrderDjangoRepository(ISalesOrderRepository):
    def queryset(self) -> QuerySet:
        """Live orders with history prefetched (used by the API filters)."""
        return SalesOrder.objects.alive().prefetch_related("status_history")

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> SalesOrder:
        order = SalesOrder(
            customer_name=data["customer_name"],
            kind=data["kind"],
            total_amount=data.get("total_amount", 0),
            notes=data.get("notes") or "",
            status=data.get("status") or SalesOrderStatus.PENDING,
            source_quote_id=data.get("source_quote_id"),
        )
        order.save()
        logger.info("sales_order.persisted", sales_order_id=str(order.id))
        return order

    def get_by_id(self, id: str) -> Optional[SalesOrder]:
        """Returns ``None`` for missing, deleted or malformed IDs."""
        try:
            return self.queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[SalesOrder]:
        try:
            return SalesOrder.objects.alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[SalesOrder]:
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: SalesOrder) -> SalesOrder:
        entity.save()
        event_count = flush_domain_events(entity, OUTBOX_TOPIC)
        logger.info(
            "sales_order.saved", sales_order_id=str(entity.id), event_count=event_count
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        order = self.get_by_id(id)
        if not order:
            return False
        self.remove(order)
        return True

    @transaction.atomic
    def remove(self, entity: SalesOrder) -> None:
        entity.delete()
        flush_domain_events(entity, OUTBOX_TOPIC)
        logger.info("sales_order.soft_deleted", sales_order_id=str(entity.id))

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> SalesOrderStatusHistory:
        history = SalesOrderStatusHistory.objects.create(
            sales_order_id=order_id,
            old_status=old_status,
            new_status=status,
            notes=notes,
        )
        logger.info(
            "sales_order.history_added",
            sales_order_id=str(order_id),
            old_status=old_status,
            new_status=status,
        )
        return history
