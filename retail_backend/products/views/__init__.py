# products/views/__init__.py

"""
Products views package exports.

Purpose:
- Central export point for url imports (public lookup + admin catalog views).
"""

from .admin import (
    AdminProductImportView,
    AdminProductListCreateView,
    AdminProductUpdateView,
)
from .product import ProductDetailView, ProductSearchView

__all__ = [
    "AdminProductImportView",
    "AdminProductListCreateView",
    "AdminProductUpdateView",
    "ProductDetailView",
    "ProductSearchView",
]
