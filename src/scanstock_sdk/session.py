from __future__ import annotations

import logging
from dataclasses import dataclass

from .clients.business_client import BusinessClient
from .clients.categories_client import CategoriesClient
from .clients.products_client import ProductsClient
from .clients.sales_client import SalesClient
from .clients.users_client import UsersClient
from .config import ClientConfig
from .device_storage import AUTH_TOKEN_KEY, DeviceStorage
from .exceptions import ApiError, StorageError
from .http_client import HttpClient

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    config: ClientConfig
    storage: DeviceStorage | None = None
    http: HttpClient | None = None
    token: str | None = None

    def __post_init__(self) -> None:
        self.storage = self.storage or DeviceStorage(base_dir=self.config.data_dir)
        self.http = self.http or HttpClient(config=self.config)
        self.http.on_unauthorized = self._handle_unauthorized
        if not self.token:
            try:
                self.token = self.storage.get_item(AUTH_TOKEN_KEY)
            except StorageError:
                logger.exception("auth_token_load_failed")

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self.http, access_token=self.token)

    def categories_client(self) -> CategoriesClient:
        return CategoriesClient(http=self.http, access_token=self.token)

    def sales_client(self) -> SalesClient:
        return SalesClient(http=self.http, access_token=self.token)

    def business_client(self) -> BusinessClient:
        return BusinessClient(http=self.http, access_token=self.token)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http, access_token=self.token)

    def establish(self, token: str) -> None:
        self.token = token
        self.http.clear_cache()
        self.storage.set_item(AUTH_TOKEN_KEY, token)

    def clear(self) -> None:
        self.token = None
        self.http.clear_cache()
        self.storage.remove_item(AUTH_TOKEN_KEY)

    def _handle_unauthorized(self, error: ApiError) -> None:
        logger.info("auth_token_cleared", extra={"status_code": error.status_code})
        try:
            self.clear()
        except StorageError:
            logger.exception("auth_token_clear_failed")
