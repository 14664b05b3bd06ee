from __future__ import annotations

import logging
from dataclasses import dataclass, field

from scanstock_sdk import Product, is_low_stock, is_out_of_stock

from .errors import ServiceError
from .product_service import ProductService

logger = logging.getLogger(__name__)


@dataclass
class InventoryCache:
    """Products resolved by barcode during this session, keyed by barcode."""

    _by_barcode: dict[str, Product] = field(default_factory=dict)

    def get(self, barcode: str) -> Product | None:
        return self._by_barcode.get(barcode)

    def put(self, product: Product) -> None:
        self._by_barcode[product.barcode] = product

    def clear(self) -> None:
        self._by_barcode.clear()

    def __len__(self) -> int:
        return len(self._by_barcode)


@dataclass
class ProductCatalog:
    """The most recently fetched product list, shared by scanner and checkout."""

    service: ProductService
    low_stock_threshold: int = 5
    products: list[Product] = field(default_factory=list)
    last_error: str | None = None

    def refresh(self) -> list[Product]:
        if not self.service.can_fetch:
            logger.info("catalog_refresh_skipped", extra={"reason": "no_token"})
            return self.products
        try:
            self.products = self.service.list_products()
            self.last_error = None
        except ServiceError as exc:
            self.last_error = exc.message
            logger.warning("catalog_refresh_failed", extra={"error": exc.message, "status_code": exc.status_code})
            return self.products
        logger.info("catalog_refreshed", extra={"count": len(self.products)})
        return self.products

    def find_by_barcode(self, barcode: str) -> Product | None:
        for product in self.products:
            if product.barcode == barcode:
                return product
        return None

    def find_by_id(self, product_id: int) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def filter(self, text: str = "", category_id: int | None = None) -> list[Product]:
        needle = text.strip().lower()
        rows = []
        for product in self.products:
            if category_id is not None and product.category_id != category_id:
                continue
            if needle and not (
                needle in product.name.lower()
                or needle in product.barcode.lower()
                or needle in (product.sku or "").lower()
            ):
                continue
            rows.append(product)
        return rows

    def low_stock(self) -> list[Product]:
        return [product for product in self.products if is_low_stock(product, self.low_stock_threshold)]

    def out_of_stock(self) -> list[Product]:
        return [product for product in self.products if is_out_of_stock(product)]
