from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

from scanstock_sdk import Product

from .catalog import InventoryCache, ProductCatalog
from .errors import ServiceError
from .product_service import ProductService

logger = logging.getLogger(__name__)


class ResolutionSource(str, Enum):
    PRODUCT_LIST = "product_list"
    INVENTORY_CACHE = "inventory_cache"
    REMOTE = "remote"


@dataclass(frozen=True)
class Resolution:
    product: Product
    source: ResolutionSource


class BarcodeResolver(Protocol):
    def resolve(self, barcode: str) -> Resolution | None: ...


@dataclass
class ProductListResolver:
    catalog: ProductCatalog

    def resolve(self, barcode: str) -> Resolution | None:
        product = self.catalog.find_by_barcode(barcode)
        return Resolution(product, ResolutionSource.PRODUCT_LIST) if product else None


@dataclass
class InventoryCacheResolver:
    cache: InventoryCache

    def resolve(self, barcode: str) -> Resolution | None:
        product = self.cache.get(barcode)
        return Resolution(product, ResolutionSource.INVENTORY_CACHE) if product else None


@dataclass
class RemoteBarcodeResolver:
    """Fetches by barcode and remembers hits in the inventory cache.

    Lookup failures are logged and reported as a miss.
    """

    service: ProductService
    cache: InventoryCache

    def resolve(self, barcode: str) -> Resolution | None:
        if not self.service.can_fetch:
            return None
        try:
            product = self.service.find_by_barcode(barcode)
        except ServiceError as exc:
            logger.warning(
                "barcode_lookup_failed",
                extra={"barcode": barcode, "error": exc.message, "status_code": exc.status_code},
            )
            return None
        if product is None:
            return None
        self.cache.put(product)
        return Resolution(product, ResolutionSource.REMOTE)


@dataclass
class ResolverChain:
    resolvers: Sequence[BarcodeResolver]

    def resolve(self, barcode: str) -> Resolution | None:
        for resolver in self.resolvers:
            resolution = resolver.resolve(barcode)
            if resolution is not None:
                logger.info(
                    "barcode_resolved",
                    extra={"barcode": barcode, "source": resolution.source.value, "product_id": resolution.product.id},
                )
                return resolution
        logger.info("barcode_unresolved", extra={"barcode": barcode})
        return None


def default_chain(catalog: ProductCatalog, cache: InventoryCache, service: ProductService | None) -> ResolverChain:
    resolvers: list[BarcodeResolver] = [ProductListResolver(catalog), InventoryCacheResolver(cache)]
    if service is not None:
        resolvers.append(RemoteBarcodeResolver(service, cache))
    return ResolverChain(resolvers)
