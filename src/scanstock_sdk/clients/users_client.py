from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import UserProfile, UserProfileUpdate
from .base import BaseClient, coerce_model, expect_object


@dataclass
class UsersClient(BaseClient):
    def me(self) -> UserProfile:
        data = self._request("GET", "/users/me", module="users", operation="me", use_get_cache=False)
        return UserProfile.model_validate(expect_object(data, "current user"))

    def update_user(self, user_id: str | int, payload: UserProfileUpdate | Mapping[str, Any]) -> UserProfile:
        request = coerce_model(payload, UserProfileUpdate)
        data = self._request(
            "PATCH",
            f"/users/{user_id}",
            json_body=request.to_wire(),
            module="users",
            operation="update",
        )
        return UserProfile.model_validate(expect_object(data, "update user"))
