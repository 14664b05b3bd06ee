from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator

from .models import WireModel, WireMoney

PaymentMethod = Literal["cash", "card", "other"]
SaleStatus = Literal["completed", "cancelled", "refunded"]


class CustomerInfo(WireModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.email or self.phone)


class SaleItemCreate(WireModel):
    product_id: int
    quantity: int = Field(ge=1)
    price: WireMoney


class SaleCreateRequest(WireModel):
    items: list[SaleItemCreate] = Field(min_length=1)
    total: WireMoney
    customer_info: CustomerInfo | None = None
    notes: str | None = None
    payment_method: PaymentMethod | None = None


class SaleUpdateRequest(WireModel):
    notes: str | None = None
    payment_method: PaymentMethod | None = None
    status: SaleStatus | None = None


class SaleLine(WireModel):
    id: int | None = None
    quantity: int
    price: Decimal
    subtotal: Decimal | None = None
    product_name: str | None = None
    product_barcode: str | None = None
    product_id: int | None = None
    sale_id: int | None = None


class Sale(WireModel):
    id: int
    total: Decimal
    receipt_number: str | None = None
    status: str | None = None
    payment_method: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_id: int | None = None
    items: list[SaleLine] = Field(default_factory=list)


class SaleStatistics(WireModel):
    total_sales: int | None = None
    total_revenue: Decimal | None = None
    average_sale_value: Decimal | None = None
