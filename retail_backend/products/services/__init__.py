from .catalog import ImportResult, ProductCatalogService
from .lookup import ProductLookup

__all__ = [
    "ImportResult",
    "ProductCatalogService",
    "ProductLookup",
]
