"""ProductionOrder and ProductionOrderStatusHistory models.

``sales_order`` is optional: stock production orders are not tied to a
sale.  ``started_at`` / ``finished_at`` are stamped by the service when the
order first enters ``in_production`` and when it is ``completed``.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any, Optional, Tuple

from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.production_orders.constants import (
    OP_NUMBER_MAX_RETRIES,
    OP_NUMBER_PREFIX,
    ProductionOrderStatus,
)
from modules.production_orders.workflow import production_order_workflow
from shared.domain.events import DomainEventMixin


class ProductionOrder(DomainEventMixin, SoftDeleteModel):
    """Manufacturing order aggregate root (``OP-YYYYMMDD-XXXXXX``)."""

    op_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    sales_order: models.ForeignKey = models.ForeignKey(
        "sales_orders.SalesOrder",
        on_delete=models.PROTECT,
        related_name="production_orders",
        null=True,
        blank=True,
    )
    product_name: models.CharField = models.CharField(max_length=200)
    quantity_meters: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=ProductionOrderStatus.choices,
        default=ProductionOrderStatus.AWAITING,
    )
    scheduled_date: models.DateField = models.DateField(null=True, blank=True)
    started_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    finished_at: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    technical_instructions: models.TextField = models.TextField(
        blank=True, default=""
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "production_orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="production_orders_status_idx"),
            models.Index(fields=["-created_at"], name="production_orders_created_idx"),
        ]

    @property
    def is_final(self) -> bool:
        return production_order_workflow.is_final_status(self.status)

    @property
    def can_edit(self) -> bool:
        return production_order_workflow.can_edit(self.status)

    @property
    def can_delete(self) -> bool:
        return production_order_workflow.can_delete(self.status)

    @property
    def allowed_transitions(self) -> Tuple[str, ...]:
        return production_order_workflow.get_allowed_transitions(self.status)

    @property
    def next_status(self) -> Optional[str]:
        return production_order_workflow.get_next_status(self.status)

    @staticmethod
    def generate_op_number() -> str:
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"{OP_NUMBER_PREFIX}-{now:%Y%m%d}-{suffix}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.op_number:
            for _ in range(OP_NUMBER_MAX_RETRIES):
                candidate = self.generate_op_number()
                if not ProductionOrder.objects.filter(op_number=candidate).exists():
                    self.op_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique op_number after "
                    f"{OP_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.op_number} ({self.status})"


class ProductionOrderStatusHistory(BaseModel):
    """Append-only audit trail of production order status changes."""

    production_order: models.ForeignKey = models.ForeignKey(
        "production_orders.ProductionOrder",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=ProductionOrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=ProductionOrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "production_order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["production_order", "-created_at"],
                name="posh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.production_order_id}: {self.old_status} -> {self.new_status}"
