from django.apps import AppConfig


class ProductionOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.production_orders"
    label = "production_orders"

    def ready(self) -> None:
        from modules.production_orders.events import (
            ProductionOrderCreated,
            ProductionOrderDeleted,
            ProductionOrderStatusChanged,
            ProductionStarted,
        )
        from modules.production_orders.handlers import (
            production_order_created_handler,
            production_order_deleted_handler,
            production_order_status_changed_handler,
            production_started_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(ProductionOrderCreated, production_order_created_handler)
        event_bus.subscribe(
            ProductionOrderStatusChanged, production_order_status_changed_handler
        )
        event_bus.subscribe(ProductionStarted, production_started_handler)
        event_bus.subscribe(ProductionOrderDeleted, production_order_deleted_handler)
