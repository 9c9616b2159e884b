"""Sales order repository interface.

Extends ``IRepository[SalesOrder]`` with creation and the status history
audit trail.  ``SalesOrderService`` depends exclusively on this contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.sales_orders.models import SalesOrder, SalesOrderStatusHistory


class ISalesOrderRepository(IRepository["SalesOrder"]):
    @abstractmethod
    def create(self, data: Dict[str, Any]) -> SalesOrder:
        """Create a sales order from ``customer_name``, ``kind``,
        ``total_amount`` and optional ``notes``.

        ``status`` defaults to ``pending``; ``source_quote_id`` is set only
        for the confirmed order opened by approving a quote.
        """

    @abstractmethod
    def remove(self, entity: SalesOrder) -> None:
        """Soft-delete an already loaded order and flush its domain events."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
    ) -> SalesOrderStatusHistory:
        """Record a status change in the order's audit trail."""
