from django.apps import AppConfig


class SalesOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.sales_orders"
    label = "sales_orders"

    def ready(self) -> None:
        from modules.sales_orders.events import (
            QuoteConverted,
            SalesOrderCancelled,
            SalesOrderCreated,
            SalesOrderDeleted,
            SalesOrderStatusChanged,
        )
        from modules.sales_orders.handlers import (
            quote_converted_handler,
            sales_order_cancelled_handler,
            sales_order_created_handler,
            sales_order_deleted_handler,
            sales_order_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(SalesOrderCreated, sales_order_created_handler)
        event_bus.subscribe(SalesOrderStatusChanged, sales_order_status_changed_handler)
        event_bus.subscribe(SalesOrderCancelled, sales_order_cancelled_handler)
        event_bus.subscribe(SalesOrderDeleted, sales_order_deleted_handler)
        event_bus.subscribe(QuoteConverted, quote_converted_handler)
