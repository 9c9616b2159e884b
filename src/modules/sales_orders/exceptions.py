"""Sales order domain exceptions.

Raised by ``SalesOrderService`` when a use case is refused.  The
workflow itself never raises; the service turns a denied
``TransitionResult`` into ``InvalidOrderStatus`` and the API layer maps
these exceptions to HTTP responses.
"""

from __future__ import annotations

from shared.domain.workflow import TransitionReason, TransitionResult


class SalesOrderNotFound(Exception):
    """The requested sales order does not exist or has been soft-deleted."""


class InvalidOrderStatus(Exception):
    """The workflow refused a status transition."""

    def __init__(self, result: TransitionResult) -> None:
        super().__init__(result.message)
        self.result = result

    @property
    def reason(self) -> TransitionReason | None:
        return self.result.reason


class OrderNotEditable(Exception):
    """The order's current status does not allow edits."""


class OrderNotDeletable(Exception):
    """The order's current status does not allow deletion."""
