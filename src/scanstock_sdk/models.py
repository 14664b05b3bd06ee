from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Request payloads send money as JSON numbers; Decimal stays exact in memory.
WireMoney = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserProfile(WireModel):
    id: str | int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    business_name: str | None = None
    is_email_verified: bool | None = None
    is_active: bool | None = None
    profile_picture: str | None = None

    @property
    def display_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or (self.email or "")


class UserProfileUpdate(WireModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    business_name: str | None = None
