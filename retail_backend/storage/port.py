# storage/port.py

"""
STORE PORT

Persistence contract consumed by the order and product services.
Services receive a Store instance (constructor injection); the HTTP layer
resolves the configured adapter through get_store().

Concurrency rule (all adapters):
- save_order() only writes when the stored version equals order.version,
  then bumps it; otherwise ConflictError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from django.conf import settings
from django.utils.module_loading import import_string

from orders.domain.aggregate import OrderAggregate
from products.domain import ProductData

ORDER_SAVE_FIELDS = frozenset(
    {"items", "wishlist_items", "status", "updated_at", "closed_at"}
)

DEFAULT_STORE_BACKEND = "storage.django_store.DjangoStore"


class Store(ABC):
    # -----------------------------
    # Orders
    # -----------------------------
    @abstractmethod
    def get_order(self, order_id: str) -> Optional[OrderAggregate]:
        ...

    @abstractmethod
    def save_order(
        self, order: OrderAggregate, *, fields: Optional[Iterable[str]] = None
    ) -> None:
        """Full save when `fields` is None, otherwise only the named fields."""

    @abstractmethod
    def create_order(self, order: OrderAggregate) -> str:
        ...

    @abstractmethod
    def find_order_by_code(self, order_code: str) -> Optional[OrderAggregate]:
        ...

    # -----------------------------
    # Products
    # -----------------------------
    @abstractmethod
    def get_product(self, product_id: str) -> Optional[ProductData]:
        ...

    @abstractmethod
    def find_product_by_sku(self, sku: str) -> Optional[ProductData]:
        ...

    @abstractmethod
    def create_product(self, data: dict) -> str:
        ...

    @abstractmethod
    def update_product(self, product_id: str, changes: dict) -> Optional[ProductData]:
        ...

    @abstractmethod
    def list_products(self, limit: int) -> list[ProductData]:
        ...


def resolve_save_fields(fields: Optional[Iterable[str]]) -> frozenset:
    if fields is None:
        return ORDER_SAVE_FIELDS

    requested = frozenset(fields)
    unknown = requested - ORDER_SAVE_FIELDS
    if unknown:
        raise ValueError(f"Unknown order fields: {sorted(unknown)}")
    return requested


def get_store() -> Store:
    backend = getattr(settings, "RETAIL_STORE_BACKEND", DEFAULT_STORE_BACKEND)
    return import_string(backend)()
