from __future__ import annotations

import pytest
import responses

from scanstock_sdk import AUTH_TOKEN_KEY, ApiSession, load_config
from scanstock_sdk.exceptions import AuthError

from factories import BASE_URL


def test_session_reads_token_from_storage(storage) -> None:
    storage.set_item(AUTH_TOKEN_KEY, "stored-token")

    session = ApiSession(load_config(), storage=storage)

    assert session.has_token
    assert session.products_client().access_token == "stored-token"


def test_establish_and_clear_persist_token(storage) -> None:
    session = ApiSession(load_config(), storage=storage)
    assert not session.has_token

    session.establish("fresh")
    assert storage.get_item(AUTH_TOKEN_KEY) == "fresh"

    session.clear()
    assert storage.get_item(AUTH_TOKEN_KEY) is None
    assert not session.has_token


def test_clients_share_one_http_client(storage) -> None:
    session = ApiSession(load_config(), storage=storage)

    assert session.products_client().http is session.sales_client().http


@responses.activate
def test_unauthorized_response_clears_stored_token(storage) -> None:
    storage.set_item(AUTH_TOKEN_KEY, "expired")
    responses.add(responses.GET, f"{BASE_URL}/products", json={"message": "Unauthorized"}, status=401)
    session = ApiSession(load_config(), storage=storage)

    with pytest.raises(AuthError):
        session.products_client().list_products()

    assert storage.get_item(AUTH_TOKEN_KEY) is None
    assert session.token is None
