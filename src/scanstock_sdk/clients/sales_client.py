from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_sales import Sale, SaleCreateRequest, SaleStatistics, SaleUpdateRequest
from .base import BaseClient, coerce_model, expect_list, expect_object

SALES_PATH = "/sales"
PRODUCTS_PATH = "/products"


@dataclass
class SalesClient(BaseClient):
    def create_sale(self, payload: SaleCreateRequest | Mapping[str, Any]) -> Sale:
        request = coerce_model(payload, SaleCreateRequest)
        data = self._request(
            "POST",
            SALES_PATH,
            json_body=request.to_wire(),
            module="sales",
            operation="create",
            invalidate_paths=[SALES_PATH, PRODUCTS_PATH],
        )
        return Sale.model_validate(expect_object(data, "create sale"))

    def list_sales(self) -> list[Sale]:
        data = self._request("GET", SALES_PATH, module="sales", operation="list")
        return [Sale.model_validate(row) for row in expect_list(data, "sales")]

    def get_sale(self, sale_id: int) -> Sale:
        data = self._request("GET", f"{SALES_PATH}/{sale_id}", module="sales", operation="get")
        return Sale.model_validate(expect_object(data, "sale"))

    def update_sale(self, sale_id: int, payload: SaleUpdateRequest | Mapping[str, Any]) -> Sale:
        request = coerce_model(payload, SaleUpdateRequest)
        data = self._request(
            "PATCH",
            f"{SALES_PATH}/{sale_id}",
            json_body=request.to_wire(),
            module="sales",
            operation="update",
            invalidate_paths=[SALES_PATH],
        )
        return Sale.model_validate(expect_object(data, "update sale"))

    def cancel_sale(self, sale_id: int) -> Sale:
        return self._sale_action(sale_id, "cancel")

    def refund_sale(self, sale_id: int) -> Sale:
        return self._sale_action(sale_id, "refund")

    def statistics(self, start: str | None = None, end: str | None = None) -> SaleStatistics:
        params = {key: value for key, value in {"start": start, "end": end}.items() if value}
        data = self._request(
            "GET",
            f"{SALES_PATH}/statistics",
            params=params or None,
            module="sales",
            operation="statistics",
        )
        return SaleStatistics.model_validate(expect_object(data, "sale statistics"))

    def _sale_action(self, sale_id: int, action: str) -> Sale:
        # cancel/refund return stock server side
        data = self._request(
            "PATCH",
            f"{SALES_PATH}/{sale_id}/{action}",
            module="sales",
            operation=action,
            invalidate_paths=[SALES_PATH, PRODUCTS_PATH],
        )
        return Sale.model_validate(expect_object(data, f"{action} sale"))
