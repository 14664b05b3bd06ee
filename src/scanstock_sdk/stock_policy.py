from __future__ import annotations

from enum import Enum

from .models_products import Product

DEFAULT_LOW_STOCK_THRESHOLD = 5


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def low_stock_threshold(product: Product, default: int = DEFAULT_LOW_STOCK_THRESHOLD) -> int:
    """Per-product reorder point when set, otherwise the shop-wide default."""
    if product.reorder_point is not None and product.reorder_point > 0:
        return product.reorder_point
    return default


def is_out_of_stock(product: Product) -> bool:
    return product.quantity <= 0


def is_low_stock(product: Product, default: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
    return 0 < product.quantity <= low_stock_threshold(product, default)


def stock_status(product: Product, default: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatus:
    if is_out_of_stock(product):
        return StockStatus.OUT_OF_STOCK
    if is_low_stock(product, default):
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
