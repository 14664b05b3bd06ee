from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from .models import WireModel, WireMoney


class Category(WireModel):
    id: int
    name: str
    description: str | None = None
    color: str | None = None


class CategoryCreate(WireModel):
    name: str = Field(min_length=1)
    description: str | None = None
    color: str | None = None


class CategoryUpdate(WireModel):
    name: str | None = None
    description: str | None = None
    color: str | None = None


class Product(WireModel):
    id: int
    name: str
    barcode: str
    price: Decimal
    quantity: int = Field(default=0, ge=0)
    description: str | None = None
    sku: str | None = None
    image_url: str | None = None
    is_active: bool = True
    is_favorite: bool = False
    reorder_point: int | None = Field(default=None, ge=0)
    cost_price: Decimal | None = None
    category_id: int | None = None
    category: Category | None = None


class ProductCreate(WireModel):
    name: str = Field(min_length=1)
    barcode: str = Field(min_length=1)
    price: WireMoney = Field(gt=0)
    quantity: int = Field(default=0, ge=0)
    description: str | None = None
    sku: str | None = None
    image_url: str | None = None
    reorder_point: int | None = Field(default=None, ge=0)
    cost_price: WireMoney | None = None
    category_id: int | None = None


class ProductUpdate(WireModel):
    name: str | None = None
    price: WireMoney | None = Field(default=None, gt=0)
    quantity: int | None = Field(default=None, ge=0)
    description: str | None = None
    sku: str | None = None
    reorder_point: int | None = Field(default=None, ge=0)
    cost_price: WireMoney | None = None
    category_id: int | None = None
