from .barcodes import SUPPORTED_SYMBOLOGIES, generate_barcode, normalize_barcode
from .config import ClientConfig, ConfigError, load_config
from .device_storage import AUTH_TOKEN_KEY, CART_KEY, DeviceStorage
from .exceptions import (
    ApiError,
    AuthError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import UserProfile, UserProfileUpdate
from .models_business import BusinessCreate, BusinessProfile, BusinessUpdate
from .models_products import Category, CategoryCreate, CategoryUpdate, Product, ProductCreate, ProductUpdate
from .models_sales import (
    CustomerInfo,
    Sale,
    SaleCreateRequest,
    SaleItemCreate,
    SaleLine,
    SaleStatistics,
    SaleUpdateRequest,
)
from .session import ApiSession
from .stock_policy import StockStatus, is_low_stock, is_out_of_stock, stock_status

__all__ = [
    "AUTH_TOKEN_KEY",
    "ApiError",
    "ApiSession",
    "AuthError",
    "BusinessCreate",
    "BusinessProfile",
    "BusinessUpdate",
    "CART_KEY",
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "ClientConfig",
    "ConfigError",
    "CustomerInfo",
    "DeviceStorage",
    "HttpClient",
    "NotFoundError",
    "PermissionDeniedError",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "SUPPORTED_SYMBOLOGIES",
    "Sale",
    "SaleCreateRequest",
    "SaleItemCreate",
    "SaleLine",
    "SaleStatistics",
    "SaleUpdateRequest",
    "StockStatus",
    "StorageError",
    "TransportError",
    "UserProfile",
    "UserProfileUpdate",
    "ValidationError",
    "generate_barcode",
    "is_low_stock",
    "is_out_of_stock",
    "load_config",
    "normalize_barcode",
    "stock_status",
]
