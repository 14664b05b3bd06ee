from __future__ import annotations

from scanstock_sdk.exceptions import TransportError
from scanstock_app.services.barcode_resolution import (
    InventoryCacheResolver,
    ProductListResolver,
    RemoteBarcodeResolver,
    ResolutionSource,
    ResolverChain,
    default_chain,
)
from scanstock_app.services.catalog import InventoryCache, ProductCatalog
from scanstock_app.services.product_service import ProductService

from factories import make_product
from fakes import FakeSession


def _setup(storage, **session_kwargs):
    session = FakeSession(storage=storage, **session_kwargs)
    service = ProductService(session)
    catalog = ProductCatalog(service)
    cache = InventoryCache()
    return session, service, catalog, cache


def test_product_list_wins_over_cache_and_remote(storage) -> None:
    listed = make_product(1, barcode="111", name="Listed")
    session, service, catalog, cache = _setup(storage)
    session.products.products = [listed]
    session.products.remote = {"111": make_product(1, barcode="111", name="Remote")}
    cache.put(make_product(1, barcode="111", name="Cached"))
    catalog.refresh()

    resolution = default_chain(catalog, cache, service).resolve("111")

    assert resolution.source is ResolutionSource.PRODUCT_LIST
    assert resolution.product.name == "Listed"
    assert session.products.lookup_calls == []


def test_cache_is_consulted_before_remote(storage) -> None:
    session, service, catalog, cache = _setup(storage)
    cache.put(make_product(2, barcode="222"))

    resolution = default_chain(catalog, cache, service).resolve("222")

    assert resolution.source is ResolutionSource.INVENTORY_CACHE
    assert session.products.lookup_calls == []


def test_remote_hit_is_inserted_into_cache(storage) -> None:
    session, service, catalog, cache = _setup(storage)
    session.products.remote = {"333": make_product(3, barcode="333")}
    chain = default_chain(catalog, cache, service)

    first = chain.resolve("333")
    second = chain.resolve("333")

    assert first.source is ResolutionSource.REMOTE
    assert second.source is ResolutionSource.INVENTORY_CACHE
    assert session.products.lookup_calls == ["333"]
    assert cache.get("333").id == 3
    assert len(cache) == 1


def test_remote_miss_and_failure_are_not_found(storage, caplog) -> None:
    session, service, catalog, cache = _setup(storage)
    chain = default_chain(catalog, cache, service)

    assert chain.resolve("404") is None

    session.products.fail_lookup = TransportError(
        code="NETWORK_ERROR", message="Network error, please check your connection", details=None, status_code=0
    )
    assert chain.resolve("405") is None
    assert "barcode_lookup_failed" in caplog.text


def test_remote_lookup_skipped_without_token(storage) -> None:
    session, service, catalog, cache = _setup(storage, token=None)
    session.products.remote = {"555": make_product(5, barcode="555")}

    assert RemoteBarcodeResolver(service, cache).resolve("555") is None
    assert session.products.lookup_calls == []


def test_chain_without_remote_capability(storage) -> None:
    session, service, catalog, cache = _setup(storage)
    session.products.remote = {"666": make_product(6, barcode="666")}

    chain = default_chain(catalog, cache, None)

    assert chain.resolve("666") is None
    assert session.products.lookup_calls == []


def test_custom_chain_order_is_respected(storage) -> None:
    session, service, catalog, cache = _setup(storage)
    session.products.products = [make_product(7, barcode="777", name="Listed")]
    catalog.refresh()
    cache.put(make_product(7, barcode="777", name="Cached"))

    chain = ResolverChain([InventoryCacheResolver(cache), ProductListResolver(catalog)])

    assert chain.resolve("777").product.name == "Cached"


def test_catalog_refresh_failure_keeps_previous_list(storage, caplog) -> None:
    session, service, catalog, cache = _setup(storage)
    session.products.products = [make_product(1)]
    catalog.refresh()
    session.products.fail_list = TransportError(
        code="NETWORK_ERROR", message="Network error, please check your connection", details=None, status_code=0
    )

    rows = catalog.refresh()

    assert [row.id for row in rows] == [1]
    assert catalog.last_error == "Network error, please check your connection"
    assert "catalog_refresh_failed" in caplog.text


def test_catalog_filters(storage) -> None:
    session, service, catalog, cache = _setup(storage)
    session.products.products = [
        make_product(1, name="Cola", quantity=0, category_id=1),
        make_product(2, name="Chips", quantity=3, category_id=2),
        make_product(3, name="Cookies", quantity=40, sku="CK-1", category_id=2),
    ]
    catalog.refresh()

    assert [p.id for p in catalog.filter("c", category_id=2)] == [2, 3]
    assert [p.id for p in catalog.filter("ck-1")] == [3]
    assert [p.id for p in catalog.low_stock()] == [2]
    assert [p.id for p in catalog.out_of_stock()] == [1]
