from __future__ import annotations

import logging
from typing import Any, Mapping

from scanstock_sdk import ApiSession, generate_barcode
from scanstock_sdk.exceptions import NotFoundError
from scanstock_sdk.models_products import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Product,
    ProductCreate,
    ProductUpdate,
)

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    @property
    def can_fetch(self) -> bool:
        return self.session.has_token

    def list_products(self) -> list[Product]:
        try:
            return self.session.products_client().list_products()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load products") from exc

    def get_product(self, product_id: int) -> Product:
        try:
            return self.session.products_client().get_product(product_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to load product") from exc

    def find_by_barcode(self, barcode: str) -> Product | None:
        """Remote lookup; a 404 is a normal miss."""
        try:
            return self.session.products_client().get_by_barcode(barcode)
        except NotFoundError:
            logger.info("product_barcode_miss", extra={"barcode": barcode})
            return None
        except Exception as exc:
            raise normalize_error(exc, "Failed to look up barcode") from exc

    def search(self, query: str) -> list[Product]:
        query = query.strip()
        if not query:
            return []
        try:
            return self.session.products_client().search(query)
        except Exception as exc:
            raise normalize_error(exc, "Product search failed") from exc

    def create_product(self, payload: ProductCreate | Mapping[str, Any]) -> Product:
        if not isinstance(payload, ProductCreate):
            data = dict(payload)
            if not (data.get("barcode") or "").strip():
                data["barcode"] = generate_barcode()
            payload = data
        try:
            product = self.session.products_client().create_product(payload)
        except Exception as exc:
            raise normalize_error(exc, "Failed to create product") from exc
        logger.info("product_created", extra={"product_id": product.id, "barcode": product.barcode})
        return product

    def update_product(self, product_id: int, payload: ProductUpdate | Mapping[str, Any]) -> Product:
        try:
            product = self.session.products_client().update_product(product_id, payload)
        except Exception as exc:
            raise normalize_error(exc, "Failed to update product") from exc
        logger.info("product_updated", extra={"product_id": product_id})
        return product

    def delete_product(self, product_id: int) -> None:
        try:
            self.session.products_client().delete_product(product_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to delete product") from exc
        logger.info("product_deleted", extra={"product_id": product_id})

    def toggle_favorite(self, product_id: int) -> Product:
        try:
            return self.session.products_client().toggle_favorite(product_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to update favorite") from exc

    def adjust_stock(self, product_id: int, delta: int) -> Product:
        if delta == 0:
            raise ServiceError(message="Stock adjustment must not be zero")
        client = self.session.products_client()
        try:
            if delta > 0:
                product = client.increase_stock(product_id, delta)
            else:
                product = client.decrease_stock(product_id, -delta)
        except Exception as exc:
            raise normalize_error(exc, "Failed to update stock") from exc
        logger.info("product_stock_adjusted", extra={"product_id": product_id, "delta": delta})
        return product

    def low_stock(self) -> list[Product]:
        try:
            return self.session.products_client().low_stock()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load low stock products") from exc

    def out_of_stock(self) -> list[Product]:
        try:
            return self.session.products_client().out_of_stock()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load out of stock products") from exc

    def favorites(self) -> list[Product]:
        try:
            return self.session.products_client().favorites()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load favorites") from exc


class CategoryService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_categories(self) -> list[Category]:
        try:
            return self.session.categories_client().list_categories()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load categories") from exc

    def create_category(self, payload: CategoryCreate | Mapping[str, Any]) -> Category:
        try:
            return self.session.categories_client().create_category(payload)
        except Exception as exc:
            raise normalize_error(exc, "Failed to create category") from exc

    def update_category(self, category_id: int, payload: CategoryUpdate | Mapping[str, Any]) -> Category:
        try:
            return self.session.categories_client().update_category(category_id, payload)
        except Exception as exc:
            raise normalize_error(exc, "Failed to update category") from exc

    def delete_category(self, category_id: int) -> None:
        try:
            self.session.categories_client().delete_category(category_id)
        except Exception as exc:
            raise normalize_error(exc, "Failed to delete category") from exc
