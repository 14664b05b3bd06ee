from .business_client import BusinessClient
from .categories_client import CategoriesClient
from .products_client import ProductsClient
from .sales_client import SalesClient
from .users_client import UsersClient

__all__ = [
    "BusinessClient",
    "CategoriesClient",
    "ProductsClient",
    "SalesClient",
    "UsersClient",
]
