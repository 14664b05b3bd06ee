from __future__ import annotations

from pydantic import Field

from .models import WireModel


class BusinessProfile(WireModel):
    id: int | None = None
    name: str
    logo: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone_number: str | None = None
    website: str | None = None
    tax_id: str | None = None
    description: str | None = None
    industry: str | None = None
    custom_industry: str | None = None
    is_active: bool | None = None

    def address_lines(self) -> list[str]:
        lines: list[str] = []
        if self.address:
            lines.append(self.address)
        if self.city and self.state:
            lines.append(f"{self.city}, {self.state} {self.postal_code or ''}".rstrip())
        elif self.city:
            lines.append(self.city)
        if self.country:
            lines.append(self.country)
        return lines


class BusinessCreate(WireModel):
    name: str = Field(min_length=1)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone_number: str | None = None
    website: str | None = None
    tax_id: str | None = None
    description: str | None = None
    industry: str | None = None
    custom_industry: str | None = None


class BusinessUpdate(WireModel):
    name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone_number: str | None = None
    website: str | None = None
    tax_id: str | None = None
    description: str | None = None
    industry: str | None = None
    custom_industry: str | None = None
