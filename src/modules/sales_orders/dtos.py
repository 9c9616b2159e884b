"""Sales order DTOs for the Service Layer.

Pydantic v2 models, immutable (``frozen=True``).  Status and kind fields
are typed with the closed enumerations, so out-of-domain values are
rejected here instead of reaching the workflow.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.sales_orders.constants import OrderKind, SalesOrderStatus

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateSalesOrderDTO(BaseModel):
    """New sales orders always start ``pending``; only the kind is chosen."""

    model_config = ConfigDict(frozen=True)

    customer_name: str
    kind: OrderKind = OrderKind.QUOTE
    total_amount: Decimal = Decimal("0.00")
    notes: Optional[str] = ""

    @field_validator("customer_name")
    @classmethod
    def customer_name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Customer name must not be blank.")
        return v.strip()

    @field_validator("total_amount")
    @classmethod
    def total_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Total amount must not be negative.")
        return v


class UpdateSalesOrderDTO(BaseModel):
    """Partial edit; ``None`` fields are left untouched."""

    model_config = ConfigDict(frozen=True)

    customer_name: Optional[str] = None
    total_amount: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("total_amount")
    @classmethod
    def total_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Total amount must not be negative.")
        return v


class ChangeStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SalesOrderStatus
    notes: str = ""

