"""Production order DTOs for the Service Layer (Pydantic v2, frozen)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.production_orders.constants import ProductionOrderStatus


class CreateProductionOrderDTO(BaseModel):
    """New production orders always start ``awaiting``.

    ``sales_order_id`` links the order to the sales order it fulfils.
    """

    model_config = ConfigDict(frozen=True)

    product_name: str
    quantity_meters: Decimal
    sales_order_id: Optional[UUID] = None
    scheduled_date: Optional[date] = None
    technical_instructions: Optional[str] = ""
    notes: Optional[str] = ""

    @field_validator("product_name")
    @classmethod
    def product_name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name must not be blank.")
        return v.strip()

    @field_validator("quantity_meters")
    @classmethod
    def quantity_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero.")
        return v


class UpdateProductionOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_name: Optional[str] = None
    quantity_meters: Optional[Decimal] = None
    scheduled_date: Optional[date] = None
    technical_instructions: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("quantity_meters")
    @classmethod
    def quantity_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Quantity must be greater than zero.")
        return v


class ChangeProductionStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ProductionOrderStatus
    notes: str = ""
