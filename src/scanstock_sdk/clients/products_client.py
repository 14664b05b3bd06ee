from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from ..models_products import Product, ProductCreate, ProductUpdate
from .base import BaseClient, coerce_model, expect_list, expect_object

PRODUCTS_PATH = "/products"


@dataclass
class ProductsClient(BaseClient):
    def list_products(self) -> list[Product]:
        data = self._request("GET", PRODUCTS_PATH, module="products", operation="list")
        return [Product.model_validate(row) for row in expect_list(data, "products")]

    def get_product(self, product_id: int) -> Product:
        data = self._request("GET", f"{PRODUCTS_PATH}/{product_id}", module="products", operation="get")
        return Product.model_validate(expect_object(data, "product"))

    def get_by_barcode(self, barcode: str) -> Product:
        data = self._request(
            "GET",
            f"{PRODUCTS_PATH}/barcode/{quote(barcode, safe='')}",
            module="products",
            operation="get_by_barcode",
            use_get_cache=False,
        )
        return Product.model_validate(expect_object(data, "product"))

    def search(self, query: str) -> list[Product]:
        data = self._request(
            "GET", f"{PRODUCTS_PATH}/search", params={"q": query}, module="products", operation="search"
        )
        return [Product.model_validate(row) for row in expect_list(data, "product search")]

    def create_product(self, payload: ProductCreate | Mapping[str, Any]) -> Product:
        request = coerce_model(payload, ProductCreate)
        data = self._request(
            "POST",
            PRODUCTS_PATH,
            json_body=request.to_wire(),
            module="products",
            operation="create",
            invalidate_paths=[PRODUCTS_PATH],
        )
        return Product.model_validate(expect_object(data, "create product"))

    def update_product(self, product_id: int, payload: ProductUpdate | Mapping[str, Any]) -> Product:
        request = coerce_model(payload, ProductUpdate)
        data = self._request(
            "PATCH",
            f"{PRODUCTS_PATH}/{product_id}",
            json_body=request.to_wire(),
            module="products",
            operation="update",
            invalidate_paths=[PRODUCTS_PATH],
        )
        return Product.model_validate(expect_object(data, "update product"))

    def delete_product(self, product_id: int) -> None:
        self._request(
            "DELETE",
            f"{PRODUCTS_PATH}/{product_id}",
            module="products",
            operation="delete",
            invalidate_paths=[PRODUCTS_PATH],
        )

    def toggle_favorite(self, product_id: int) -> Product:
        data = self._request(
            "PATCH",
            f"{PRODUCTS_PATH}/{product_id}/favorite",
            module="products",
            operation="toggle_favorite",
            invalidate_paths=[PRODUCTS_PATH],
        )
        return Product.model_validate(expect_object(data, "toggle favorite"))

    def low_stock(self) -> list[Product]:
        return self._list_at(f"{PRODUCTS_PATH}/low-stock", "low_stock")

    def out_of_stock(self) -> list[Product]:
        return self._list_at(f"{PRODUCTS_PATH}/out-of-stock", "out_of_stock")

    def favorites(self) -> list[Product]:
        return self._list_at(f"{PRODUCTS_PATH}/favorites", "favorites")

    def increase_stock(self, product_id: int, quantity: int = 1) -> Product:
        return self._adjust_stock(product_id, "increase", quantity)

    def decrease_stock(self, product_id: int, quantity: int = 1) -> Product:
        return self._adjust_stock(product_id, "decrease", quantity)

    def _list_at(self, path: str, operation: str) -> list[Product]:
        data = self._request("GET", path, module="products", operation=operation)
        return [Product.model_validate(row) for row in expect_list(data, operation)]

    def _adjust_stock(self, product_id: int, direction: str, quantity: int) -> Product:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        data = self._request(
            "PATCH",
            f"{PRODUCTS_PATH}/{product_id}/stock/{direction}",
            params={"quantity": quantity},
            module="products",
            operation=f"{direction}_stock",
            invalidate_paths=[PRODUCTS_PATH],
        )
        return Product.model_validate(expect_object(data, f"{direction} stock"))
