from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_products import Category, CategoryCreate, CategoryUpdate
from .base import BaseClient, coerce_model, expect_list, expect_object

CATEGORIES_PATH = "/categories"


@dataclass
class CategoriesClient(BaseClient):
    def list_categories(self) -> list[Category]:
        data = self._request("GET", CATEGORIES_PATH, module="categories", operation="list")
        return [Category.model_validate(row) for row in expect_list(data, "categories")]

    def get_category(self, category_id: int) -> Category:
        data = self._request("GET", f"{CATEGORIES_PATH}/{category_id}", module="categories", operation="get")
        return Category.model_validate(expect_object(data, "category"))

    def create_category(self, payload: CategoryCreate | Mapping[str, Any]) -> Category:
        request = coerce_model(payload, CategoryCreate)
        data = self._request(
            "POST",
            CATEGORIES_PATH,
            json_body=request.to_wire(),
            module="categories",
            operation="create",
            invalidate_paths=[CATEGORIES_PATH],
        )
        return Category.model_validate(expect_object(data, "create category"))

    def update_category(self, category_id: int, payload: CategoryUpdate | Mapping[str, Any]) -> Category:
        request = coerce_model(payload, CategoryUpdate)
        data = self._request(
            "PATCH",
            f"{CATEGORIES_PATH}/{category_id}",
            json_body=request.to_wire(),
            module="categories",
            operation="update",
            invalidate_paths=[CATEGORIES_PATH],
        )
        return Category.model_validate(expect_object(data, "update category"))

    def delete_category(self, category_id: int) -> None:
        # products embed their category, so their cached rows go stale too
        self._request(
            "DELETE",
            f"{CATEGORIES_PATH}/{category_id}",
            module="categories",
            operation="delete",
            invalidate_paths=[CATEGORIES_PATH, "/products"],
        )
