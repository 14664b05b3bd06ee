from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from scanstock_sdk import ApiSession, ClientConfig, load_config

from scanstock_app.app.scheduler import ManualScheduler, Scheduler
from scanstock_app.app.state import ScanMode
from scanstock_app.config import AppConfig, load_app_config
from scanstock_app.services.barcode_resolution import default_chain
from scanstock_app.services.business_service import BusinessService
from scanstock_app.services.cart_store import CartStore
from scanstock_app.services.catalog import InventoryCache, ProductCatalog
from scanstock_app.services.product_service import CategoryService, ProductService
from scanstock_app.services.profile_service import ProfileService
from scanstock_app.services.receipt_service import ReceiptService
from scanstock_app.services.sales_service import SalesService
from scanstock_app.ui.checkout.checkout_view import CheckoutController
from scanstock_app.ui.receipts.receipts_view import ReceiptsController
from scanstock_app.ui.scanner.scanner_view import ScannerController
from scanstock_app.ui.shared.notification_center import NotificationCenter

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    authenticated: bool
    cart_lines: int
    status_message: str


class ScanStockBootstrap:
    """Builds the shared stores, services and controllers for one app session."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        app_config: AppConfig | None = None,
        session: ApiSession | None = None,
        scheduler: Scheduler | None = None,
        share_hook: Callable[[Path], None] | None = None,
        env_file: str | None = None,
    ) -> None:
        self.config = config or load_config(env_file)
        self.app_config = app_config or load_app_config(env_file)
        self.session = session or ApiSession(self.config)
        self.scheduler = scheduler or ManualScheduler()

        self.product_service = ProductService(self.session)
        self.category_service = CategoryService(self.session)
        self.sales_service = SalesService(self.session)
        self.business_service = BusinessService(self.session)
        self.profile_service = ProfileService(self.session)

        self.cart = CartStore(self.session.storage)
        self.inventory_cache = InventoryCache()
        self.catalog = ProductCatalog(self.product_service, low_stock_threshold=self.app_config.low_stock_threshold)
        self.notifications = NotificationCenter(self.scheduler)

        receipts_dir = self.app_config.receipts_dir or self.session.storage.directory / "receipts"
        self.receipts = ReceiptService(
            receipts_dir=Path(receipts_dir),
            currency_symbol=self.app_config.currency_symbol,
            fallback_business_name=self.app_config.business_fallback_name,
            share_hook=share_hook,
        )
        self.scanner = ScannerController(
            config=self.app_config,
            scheduler=self.scheduler,
            cart=self.cart,
            catalog=self.catalog,
            chain=default_chain(self.catalog, self.inventory_cache, self.product_service),
            notifications=self.notifications,
        )
        self.checkout = CheckoutController(
            cart=self.cart,
            sales=self.sales_service,
            business=self.business_service,
            receipts=self.receipts,
            catalog=self.catalog,
        )
        self.saved_receipts = ReceiptsController(self.receipts)

    def start(self, mode: ScanMode = ScanMode.INVENTORY) -> BootstrapResult:
        self.cart.load()
        self.scanner.set_mode(mode)
        if not self.session.has_token:
            logger.info("session_unauthenticated")
            return BootstrapResult(False, len(self.cart.items), "Sign in to look up products remotely")
        self.catalog.refresh()
        status = "Ready" if self.catalog.last_error is None else self.catalog.last_error
        logger.info("app_ready", extra={"cart_lines": len(self.cart.items), "products": len(self.catalog.products)})
        return BootstrapResult(True, len(self.cart.items), status)

    def shutdown(self) -> None:
        self.scanner.teardown()
        self.notifications.clear()
        self.inventory_cache.clear()
