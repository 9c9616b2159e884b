"""Event handlers for Production Orders domain events."""

from __future__ import annotations

import structlog

from modules.production_orders.events import (
    ProductionOrderCreated,
    ProductionOrderDeleted,
    ProductionOrderStatusChanged,
    ProductionStarted,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class ProductionOrderCreatedHandler(IEventHandler[ProductionOrderCreated]):
    def handle(self, event: ProductionOrderCreated) -> None:
        logger.info(
            f"Processando abertura da ordem de produção {event.aggregate_id}",
            production_order_id=str(event.aggregate_id),
            sales_order_id=event.sales_order_id,
        )


class ProductionOrderStatusChangedHandler(
    IEventHandler[ProductionOrderStatusChanged]
):
    def handle(self, event: ProductionOrderStatusChanged) -> None:
        logger.info(
            f"Processando mudança de status da ordem {event.aggregate_id}",
            production_order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


class ProductionStartedHandler(IEventHandler[ProductionStarted]):
    def handle(self, event: ProductionStarted) -> None:
        logger.info(
            f"Produção iniciada para a ordem {event.aggregate_id}",
            production_order_id=str(event.aggregate_id),
        )


class ProductionOrderDeletedHandler(IEventHandler[ProductionOrderDeleted]):
    def handle(self, event: ProductionOrderDeleted) -> None:
        logger.info(
            f"Processando exclusão da ordem de produção {event.aggregate_id}",
            production_order_id=str(event.aggregate_id),
        )


production_order_created_handler = ProductionOrderCreatedHandler()
production_order_status_changed_handler = ProductionOrderStatusChangedHandler()
production_started_handler = ProductionStartedHandler()
production_order_deleted_handler = ProductionOrderDeletedHandler()
