# storage/memory.py

"""
IN-MEMORY STORE

Test double for the Store port. Same contract as DjangoStore:
- reads and writes are deep copies (no aliasing between callers)
- optimistic version check on save_order()
- SKU uniqueness on create/update
"""

from __future__ import annotations

import copy
import threading
import uuid

from django.utils import timezone

from common.exceptions import ConflictError, NotFoundError
from products.domain import ProductData
from storage.port import Store, resolve_save_fields


class InMemoryStore(Store):
    def __init__(self, *, products=None):
        self._orders: dict[str, object] = {}
        self._products: dict[str, ProductData] = {}
        self._lock = threading.Lock()

        for product in products or ():
            self._products[str(product.id)] = product

    # -----------------------------
    # Orders
    # -----------------------------
    def get_order(self, order_id):
        stored = self._orders.get(str(order_id))
        return copy.deepcopy(stored) if stored is not None else None

    def create_order(self, order):
        with self._lock:
            order_id = str(uuid.uuid4())
            stored = copy.deepcopy(order)
            stored.id = order_id
            stored.version = 0
            self._orders[order_id] = stored
        return order_id

    def save_order(self, order, *, fields=None):
        fields = resolve_save_fields(fields)

        with self._lock:
            stored = self._orders.get(str(order.id))
            if stored is None:
                raise NotFoundError("Order not found")
            if stored.version != order.version:
                raise ConflictError("Order was modified concurrently; reload and retry")

            for name in fields:
                setattr(stored, name, copy.deepcopy(getattr(order, name)))
            stored.version += 1

        order.version += 1

    def find_order_by_code(self, order_code):
        matches = [o for o in self._orders.values() if o.order_code == order_code]
        if not matches:
            return None
        latest = max(matches, key=lambda o: o.created_at or timezone.now())
        return copy.deepcopy(latest)

    # -----------------------------
    # Products
    # -----------------------------
    def get_product(self, product_id):
        return self._products.get(str(product_id))

    def find_product_by_sku(self, sku):
        for product in self._products.values():
            if product.sku == sku:
                return product
        return None

    def create_product(self, data):
        with self._lock:
            if self.find_product_by_sku(data["sku"]) is not None:
                raise ConflictError("SKU already exists")

            now = timezone.now()
            product = ProductData(
                id=str(uuid.uuid4()),
                sku=data["sku"],
                name=data["name"],
                price=data["price"],
                description=data.get("description", ""),
                image=data.get("image", ""),
                colors=tuple(data.get("colors") or ()),
                created_at=now,
                updated_at=now,
            )
            self._products[product.id] = product
        return product.id

    def update_product(self, product_id, changes):
        with self._lock:
            product = self._products.get(str(product_id))
            if product is None:
                return None

            new_sku = changes.get("sku")
            if new_sku and new_sku != product.sku:
                clash = self.find_product_by_sku(new_sku)
                if clash is not None and clash.id != product.id:
                    raise ConflictError("SKU already exists")

            updated = product.with_changes(**changes, updated_at=timezone.now())
            self._products[product.id] = updated
        return updated

    def list_products(self, limit):
        ordered = sorted(
            self._products.values(),
            key=lambda p: p.created_at or timezone.now(),
            reverse=True,
        )
        return ordered[:limit]
