"""Production order domain exceptions."""

from __future__ import annotations

from shared.domain.workflow import TransitionReason, TransitionResult


class ProductionOrderNotFound(Exception):
    """The requested production order does not exist or has been soft-deleted."""


class InvalidProductionOrderStatus(Exception):
    """The workflow refused a status transition."""

    def __init__(self, result: TransitionResult) -> None:
        super().__init__(result.message)
        self.result = result

    @property
    def reason(self) -> TransitionReason | None:
        return self.result.reason


class ProductionOrderNotEditable(Exception):
    """Only awaiting or partial production orders can be edited."""


class ProductionOrderNotDeletable(Exception):
    """Only awaiting or canceled production orders can be deleted."""


class SalesOrderNotReady(Exception):
    """The linked sales order cannot receive a production order."""
