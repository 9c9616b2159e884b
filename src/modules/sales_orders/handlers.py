"""Event handlers for Sales Orders domain events."""

from __future__ import annotations

import structlog

from modules.sales_orders.events import (
    QuoteConverted,
    SalesOrderCancelled,
    SalesOrderCreated,
    SalesOrderDeleted,
    SalesOrderStatusChanged,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class SalesOrderCreatedHandler(IEventHandler[SalesOrderCreated]):
    def handle(self, event: SalesOrderCreated) -> None:
        logger.info(
            f"Processando criação do pedido {event.aggregate_id}",
            sales_order_id=str(event.aggregate_id),
        )


class SalesOrderStatusChangedHandler(IEventHandler[SalesOrderStatusChanged]):
    def handle(self, event: SalesOrderStatusChanged) -> None:
        logger.info(
            f"Processando mudança de status do pedido {event.aggregate_id}",
            sales_order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


class SalesOrderCancelledHandler(IEventHandler[SalesOrderCancelled]):
    def handle(self, event: SalesOrderCancelled) -> None:
        logger.info(
            f"Processando cancelamento do pedido {event.aggregate_id}",
            sales_order_id=str(event.aggregate_id),
            old_status=event.old_status,
        )


class SalesOrderDeletedHandler(IEventHandler[SalesOrderDeleted]):
    def handle(self, event: SalesOrderDeleted) -> None:
        logger.info(
            f"Processando exclusão do pedido {event.aggregate_id}",
            sales_order_id=str(event.aggregate_id),
        )


class QuoteConvertedHandler(IEventHandler[QuoteConverted]):
    def handle(self, event: QuoteConverted) -> None:
        logger.info(
            f"Orçamento {event.aggregate_id} convertido em pedido "
            f"{event.confirmed_order_id}",
            sales_order_id=str(event.aggregate_id),
            confirmed_order_id=str(event.confirmed_order_id),
        )


sales_order_created_handler = SalesOrderCreatedHandler()
sales_order_status_changed_handler = SalesOrderStatusChangedHandler()
sales_order_cancelled_handler = SalesOrderCancelledHandler()
sales_order_deleted_handler = SalesOrderDeletedHandler()
quote_converted_handler = QuoteConvertedHandler()
