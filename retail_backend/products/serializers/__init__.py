# products/serializers/__init__.py

from .product import ProductInputSerializer, ProductSerializer, ProductUpdateSerializer

__all__ = [
    "ProductSerializer",
    "ProductInputSerializer",
    "ProductUpdateSerializer",
]
