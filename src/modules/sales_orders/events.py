"""Domain events for the Sales Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Optional
from uuid import UUID

from shared.domain.events import DomainEvent, StatusChangedEvent


@dataclass(frozen=True)
class SalesOrderCreated(DomainEvent):
    """Raised when a quote or confirmed order is created."""


@dataclass(frozen=True)
class SalesOrderStatusChanged(StatusChangedEvent):
    """Raised on every accepted status transition."""


@dataclass(frozen=True)
class SalesOrderCancelled(StatusChangedEvent):
    """Raised when a sales order reaches ``canceled``."""


@dataclass(frozen=True)
class SalesOrderDeleted(DomainEvent):
    """Raised when a sales order is soft-deleted."""


@dataclass(frozen=True)
class QuoteConverted(DomainEvent):
    """Raised on a quote when its approval opens a confirmed order."""

    UUID_FIELDS: ClassVar[FrozenSet[str]] = DomainEvent.UUID_FIELDS | {
        "confirmed_order_id"
    }

    confirmed_order_id: Optional[UUID] = None
