"""Production order repositories package."""

from modules.production_orders.repositories.django_repository import (
    ProductionOrderDjangoRepository,
)
from modules.production_orders.repositories.interfaces import (
    IProductionOrderRepository,
)

__all__ = ["IProductionOrderRepository", "ProductionOrderDjangoRepository"]
