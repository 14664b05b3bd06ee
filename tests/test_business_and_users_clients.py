from __future__ import annotations

import json

import responses

from scanstock_sdk import load_config
from scanstock_sdk.clients.business_client import BusinessClient
from scanstock_sdk.clients.categories_client import CategoriesClient
from scanstock_sdk.clients.users_client import UsersClient
from scanstock_sdk.http_client import HttpClient

from factories import BASE_URL

BUSINESS = {
    "id": 1,
    "name": "Corner Shop",
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "postalCode": "62701",
    "country": "USA",
    "phoneNumber": "555-0100",
    "website": "https://corner.example.com",
    "taxId": "TX-1",
}


def _http() -> HttpClient:
    return HttpClient(load_config())


@responses.activate
def test_business_profile_roundtrip() -> None:
    responses.add(responses.GET, f"{BASE_URL}/business", json=BUSINESS, status=200)
    responses.add(responses.PATCH, f"{BASE_URL}/business", json={**BUSINESS, "name": "Corner Shop 2"}, status=200)
    client = BusinessClient(http=_http(), access_token="token")

    profile = client.get_business()
    updated = client.update_business({"name": "Corner Shop 2"})

    assert profile.address_lines() == ["1 Main St", "Springfield, IL 62701", "USA"]
    assert profile.phone_number == "555-0100"
    assert updated.name == "Corner Shop 2"
    assert json.loads(responses.calls[1].request.body) == {"name": "Corner Shop 2"}


@responses.activate
def test_create_and_delete_business() -> None:
    responses.add(responses.POST, f"{BASE_URL}/business", json=BUSINESS, status=201)
    responses.add(responses.DELETE, f"{BASE_URL}/business", status=204)
    client = BusinessClient(http=_http(), access_token="token")

    created = client.create_business({"name": "Corner Shop", "tax_id": "TX-1"})
    client.delete_business()

    assert created.tax_id == "TX-1"
    assert json.loads(responses.calls[0].request.body) == {"name": "Corner Shop", "taxId": "TX-1"}
    assert responses.calls[1].request.method == "DELETE"


@responses.activate
def test_categories_crud() -> None:
    responses.add(responses.GET, f"{BASE_URL}/categories", json=[{"id": 1, "name": "Drinks"}], status=200)
    responses.add(responses.POST, f"{BASE_URL}/categories", json={"id": 2, "name": "Snacks"}, status=201)
    responses.add(responses.PATCH, f"{BASE_URL}/categories/2", json={"id": 2, "name": "Chips"}, status=200)
    responses.add(responses.DELETE, f"{BASE_URL}/categories/2", status=204)
    client = CategoriesClient(http=_http(), access_token="token")

    assert client.list_categories()[0].name == "Drinks"
    assert client.create_category({"name": "Snacks"}).id == 2
    assert client.update_category(2, {"name": "Chips"}).name == "Chips"
    client.delete_category(2)
    assert len(responses.calls) == 4


@responses.activate
def test_users_me_and_update() -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/users/me",
        json={"id": 3, "firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"},
        status=200,
    )
    responses.add(
        responses.PATCH,
        f"{BASE_URL}/users/3",
        json={"id": 3, "firstName": "Ada", "businessName": "Engines"},
        status=200,
    )
    client = UsersClient(http=_http(), access_token="token")

    me = client.me()
    updated = client.update_user(me.id, {"business_name": "Engines"})

    assert me.display_name == "Ada Lovelace"
    assert updated.business_name == "Engines"
    assert json.loads(responses.calls[1].request.body) == {"businessName": "Engines"}
