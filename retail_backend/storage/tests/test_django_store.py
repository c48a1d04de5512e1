# storage/tests/test_django_store.py

import uuid
from decimal import Decimal

from django.test import TestCase

from common.exceptions import ConflictError, NotFoundError
from orders.domain.aggregate import OrderAggregate
from orders.models import Order, OrderItem
from products.models import Product
from storage.django_store import DjangoStore, product_to_data
from storage.port import get_store, resolve_save_fields


class DjangoStoreOrderTests(TestCase):
    """
    ORM order persistence.

    GUARANTEES:
    - Aggregates round-trip with both lists, in order, with stable line ids
    - Only the named fields are written
    - A stale version never overwrites a newer write
    """

    def setUp(self):
        self.store = DjangoStore()
        self.shirt = product_to_data(
            Product.objects.create(sku="SHIRT", name="Shirt", price=Decimal("20.00"))
        )
        self.hat = product_to_data(
            Product.objects.create(sku="HAT", name="Hat", price=Decimal("5.00"))
        )

    def _create(self):
        order = OrderAggregate.new(client_id="c1", order_code="CODE1234")
        order.id = self.store.create_order(order)
        return order

    def test_create_and_load(self):
        order = self._create()

        loaded = self.store.get_order(order.id)

        self.assertEqual(loaded.order_code, "CODE1234")
        self.assertEqual(loaded.client_id, "c1")
        self.assertEqual(loaded.version, 0)
        self.assertEqual(loaded.items, [])

    def test_unknown_or_malformed_id(self):
        self.assertIsNone(self.store.get_order(str(uuid.uuid4())))
        self.assertIsNone(self.store.get_order("not-a-uuid"))

    def test_lines_round_trip(self):
        order = self._create()
        loaded = self.store.get_order(order.id)
        first = loaded.add_item(self.shirt, 2, "blue")
        loaded.add_item(self.hat, 1)
        loaded.update_item(1, list_type="wishlist")
        self.store.save_order(loaded, fields=("items", "wishlist_items", "updated_at"))

        again = self.store.get_order(order.id)

        self.assertEqual(again.version, 1)
        self.assertEqual([l.sku for l in again.items], ["SHIRT"])
        self.assertEqual([l.sku for l in again.wishlist_items], ["HAT"])
        self.assertEqual(again.items[0].id, first.id)
        self.assertEqual(again.items[0].color, "blue")
        self.assertEqual(again.subtotal(), Decimal("40.00"))

    def test_move_keeps_line_id(self):
        order = self._create()
        loaded = self.store.get_order(order.id)
        line = loaded.add_item(self.shirt, 1)
        self.store.save_order(loaded, fields=("items", "updated_at"))

        loaded.update_item(0, list_type="wishlist")
        self.store.save_order(loaded, fields=("items", "wishlist_items", "updated_at"))

        row = OrderItem.objects.get(pk=line.id)
        self.assertEqual(row.list_type, "wishlist")

    def test_partial_save_leaves_other_fields(self):
        order = self._create()
        loaded = self.store.get_order(order.id)
        loaded.add_item(self.shirt, 1)
        loaded.status = "ready"

        self.store.save_order(loaded, fields=("items",))

        row = Order.objects.get(pk=order.id)
        self.assertEqual(row.status, "pending")
        self.assertEqual(row.lines.count(), 1)

    def test_stale_version_conflicts(self):
        order = self._create()
        first = self.store.get_order(order.id)
        second = self.store.get_order(order.id)

        first.add_item(self.shirt, 1)
        self.store.save_order(first, fields=("items", "updated_at"))

        second.add_item(self.hat, 3)
        with self.assertRaises(ConflictError):
            self.store.save_order(second, fields=("items", "updated_at"))

        skus = list(OrderItem.objects.filter(order_id=order.id).values_list("sku", flat=True))
        self.assertEqual(skus, ["SHIRT"])
        self.assertEqual(Order.objects.get(pk=order.id).version, 1)

    def test_save_missing_order(self):
        ghost = OrderAggregate.new(client_id="c", order_code="GHOST123")
        ghost.id = str(uuid.uuid4())

        with self.assertRaises(NotFoundError):
            self.store.save_order(ghost)

    def test_find_by_code_returns_latest(self):
        older = self._create()
        newer = OrderAggregate.new(client_id="c2", order_code="CODE1234")
        newer.id = self.store.create_order(newer)

        found = self.store.find_order_by_code("CODE1234")

        self.assertEqual(found.id, newer.id)
        self.assertNotEqual(found.id, older.id)


class StorePortTests(TestCase):
    def test_get_store_uses_setting(self):
        with self.settings(RETAIL_STORE_BACKEND="storage.memory.InMemoryStore"):
            self.assertEqual(type(get_store()).__name__, "InMemoryStore")

        self.assertIsInstance(get_store(), DjangoStore)

    def test_resolve_save_fields(self):
        self.assertIn("items", resolve_save_fields(None))
        self.assertEqual(resolve_save_fields(["status"]), frozenset({"status"}))

        with self.assertRaises(ValueError):
            resolve_save_fields(["version"])
