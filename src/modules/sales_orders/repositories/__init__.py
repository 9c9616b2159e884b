"""Sales order repositories package."""

from modules.sales_orders.repositories.django_repository import (
    SalesOrderDjangoRepository,
)
from modules.sales_orders.repositories.interfaces import ISalesOrderRepository

__all__ = ["ISalesOrderRepository", "SalesOrderDjangoRepository"]
