"""Domain events for the Production Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent, StatusChangedEvent


@dataclass(frozen=True)
class ProductionOrderCreated(DomainEvent):
    """Raised when a production order is opened."""

    sales_order_id: Optional[str] = None


@dataclass(frozen=True)
class ProductionOrderStatusChanged(StatusChangedEvent):
    """Raised on every accepted status transition."""


@dataclass(frozen=True)
class ProductionStarted(StatusChangedEvent):
    """Raised the first time an order enters ``in_production``.

    Raw material consumption hangs off this event.
    """


@dataclass(frozen=True)
class ProductionOrderDeleted(DomainEvent):
    """Raised when a production order is soft-deleted."""
