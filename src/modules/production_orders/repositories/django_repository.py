"""Django ORM implementation of the production order repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.production_orders.models import (
    ProductionOrder,
    ProductionOrderStatusHistory,
)
from modules.production_orders.repositories.interfaces import (
    IProductionOrderRepository,
)
from shared.infrastructure.outbox import flush_domain_events

logger = structlog.get_logger(__name__)

OUTBOX_TOPIC = "production_orders"


class ProductionOrderDjangoRepository(IProductionOrderRepository):
    def queryset(self) -> QuerySet:
        return (
            ProductionOrder.objects.alive()
            .select_related("sales_order")
            .prefetch_related("status_history")
        )

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> ProductionOrder:
        order = ProductionOrder(
            product_name=data["product_name"],
            quantity_meters=data["quantity_meters"],
            sales_order_id=data.get("sales_order_id"),
            scheduled_date=data.get("scheduled_date"),
            technical_instructions=data.get("technical_instructions") or "",
            notes=data.get("notes") or "",
        )
        order.save()
        logger.info("production_order.persisted", production_order_id=str(order.id))
        return order

    def get_by_id(self, id: str) -> Optional[ProductionOrder]:
        try:
            return self.queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[ProductionOrder]:
        try:
            return (
                ProductionOrder.objects.alive()
                .select_for_update()
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[ProductionOrder]:
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: ProductionOrder) -> ProductionOrder:
        entity.save()
        event_count = flush_domain_events(entity, OUTBOX_TOPIC)
        logger.info(
            "production_order.saved",
            production_order_id=str(entity.id),
            event_count=event_count,
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
    def remove(self, entity: ProductionOrder) -> None:
        entity.delete()
        flush_domain_events(entity, OUTBOX_TOPIC)
        logger.info("production_order.soft_deleted", production_order_id=str(entity.id))

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> ProductionOrderStatusHistory:
        return ProductionOrderStatusHistory.objects.create(
            production_order_id=order_id,
            old_status=old_status,
            new_status=status,
            notes=notes,
        )
