"""SalesOrder and SalesOrderStatusHistory models.

- ``status`` is only ever changed through ``SalesOrderService`` so every
  change is validated by ``sales_order_workflow`` and recorded in
  ``SalesOrderStatusHistory``.
- ``kind`` is fixed at creation: a quote never becomes a confirmed order
  in place. Approving a quote opens a new confirmed order that points back
  to it through ``source_quote``.
- ``order_number`` is a human-readable identifier generated on first save.
- Soft delete via ``deleted_at`` (inherited from ``SoftDeleteModel``).
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any, Optional, Tuple

from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.sales_orders.constants import (
    ORDER_NUMBER_MAX_RETRIES,
    ORDER_NUMBER_PREFIX,
    OrderKind,
    SalesOrderStatus,
)
from modules.sales_orders.workflow import sales_order_workflow
from shared.domain.events import DomainEventMixin


class SalesOrder(DomainEventMixin, SoftDeleteModel):
    """Sales order / quote aggregate root.

    ``order_number`` format: ``PED-YYYYMMDD-XXXXXX``.
    """

    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    customer_name: models.CharField = models.CharField(max_length=200)
    kind: models.CharField = models.CharField(
        max_length=20,
        choices=OrderKind.choices,
        default=OrderKind.QUOTE,
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=SalesOrderStatus.choices,
        default=SalesOrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    notes: models.TextField = models.TextField(blank=True, default="")
    source_quote: models.OneToOneField = models.OneToOneField(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="converted_order",
    )

    class Meta:
        db_table = "sales_orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="sales_orders_status_idx"),
            models.Index(fields=["kind"], name="sales_orders_kind_idx"),
            models.Index(fields=["-created_at"], name="sales_orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Workflow queries
    # ------------------------------------------------------------------

    @property
    def is_final(self) -> bool:
        return sales_order_workflow.is_final_status(self.status)

    @property
    def can_edit(self) -> bool:
        return sales_order_workflow.can_edit(self.status, self.kind)

    @property
    def can_delete(self) -> bool:
        return sales_order_workflow.can_delete(self.status, self.kind)

    @property
    def allowed_transitions(self) -> Tuple[str, ...]:
        return sales_order_workflow.get_allowed_transitions(self.status, self.kind)

    @property
    def next_status(self) -> Optional[str]:
        return sales_order_workflow.get_next_status(self.status, self.kind)

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number() -> str:
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{suffix}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            for _ in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not SalesOrder.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.kind}/{self.status})"


class SalesOrderStatusHistory(BaseModel):
    """Append-only audit trail of sales order status changes.

    ``old_status`` is ``None`` for the record written at creation.
    """

    sales_order: models.ForeignKey = models.ForeignKey(
        "sales_orders.SalesOrder",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=SalesOrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=SalesOrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "sales_order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["sales_order", "-created_at"],
                name="sosh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sales_order_id}: {self.old_status} -> {self.new_status}"
