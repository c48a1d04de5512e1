# products/services/lookup.py

"""
PRODUCT LOOKUP

Pass-through queries against the Store port:
- by SKU -> the single matching product
- by id  -> the product

A miss is a NotFoundError; callers never see None.
"""

from __future__ import annotations

from common.exceptions import DomainValidationError, NotFoundError
from products.domain import SKU_MAX_LENGTH, ProductData


def normalize_sku(sku) -> str:
    value = (sku or "").strip() if isinstance(sku, str) else ""
    if not value or len(value) > SKU_MAX_LENGTH:
        raise DomainValidationError(
            f"SKU must be between 1 and {SKU_MAX_LENGTH} characters"
        )
    return value


class ProductLookup:
    def __init__(self, store):
        self.store = store

    def by_sku(self, sku) -> ProductData:
        product = self.store.find_product_by_sku(normalize_sku(sku))
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def by_id(self, product_id) -> ProductData:
        product = self.store.get_product(str(product_id))
        if product is None:
            raise NotFoundError("Product not found")
        return product
