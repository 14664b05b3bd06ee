from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_business import BusinessCreate, BusinessProfile, BusinessUpdate
from .base import BaseClient, coerce_model, expect_object

BUSINESS_PATH = "/business"


@dataclass
class BusinessClient(BaseClient):
    def get_business(self) -> BusinessProfile:
        data = self._request("GET", BUSINESS_PATH, module="business", operation="get")
        return BusinessProfile.model_validate(expect_object(data, "business"))

    def create_business(self, payload: BusinessCreate | Mapping[str, Any]) -> BusinessProfile:
        request = coerce_model(payload, BusinessCreate)
        data = self._request(
            "POST",
            BUSINESS_PATH,
            json_body=request.to_wire(),
            module="business",
            operation="create",
            invalidate_paths=[BUSINESS_PATH],
        )
        return BusinessProfile.model_validate(expect_object(data, "create business"))

    def update_business(self, payload: BusinessUpdate | Mapping[str, Any]) -> BusinessProfile:
        request = coerce_model(payload, BusinessUpdate)
        data = self._request(
            "PATCH",
            BUSINESS_PATH,
            json_body=request.to_wire(),
            module="business",
            operation="update",
            invalidate_paths=[BUSINESS_PATH],
        )
        return BusinessProfile.model_validate(expect_object(data, "update business"))

    def delete_business(self) -> None:
        self._request(
            "DELETE", BUSINESS_PATH, module="business", operation="delete", invalidate_paths=[BUSINESS_PATH]
        )
