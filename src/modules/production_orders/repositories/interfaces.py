"""Production order repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.production_orders.models import (
        ProductionOrder,
        ProductionOrderStatusHistory,
    )


class IProductionOrderRepository(IRepository["ProductionOrder"]):
    @abstractmethod
    def create(self, data: Dict[str, Any]) -> ProductionOrder:
        """Create a production order in ``awaiting``."""

    @abstractmethod
    def remove(self, entity: ProductionOrder) -> None:
        """Soft-delete an already loaded order and flush its domain events."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> ProductionOrderStatusHistory:
        """Record a status change in the order's audit trail."""
