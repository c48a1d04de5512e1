# orders/tests/test_api.py

import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Order, OrderItem
from products.models import Product
from users.services.identity import issue_tokens_for

User = get_user_model()


class OrderApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.widget = Product.objects.create(
            sku="WIDGET", name="Widget", price=Decimal("50.00"), colors=["red", "blue"]
        )
        self.gadget = Product.objects.create(
            sku="GADGET", name="Gadget", price=Decimal("100.00")
        )

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _create_order(self, **headers):
        response = self.client.post("/api/orders/", {}, format="json", **headers)
        self.assertEqual(response.status_code, 201, response.content)
        return response.json()

    def _add(self, order_id, sku, quantity=1, **extra):
        return self.client.post(
            f"/api/orders/{order_id}/items/",
            {"sku": sku, "quantity": quantity, **extra},
            format="json",
        )

    def _staff_client(self, role="cashier"):
        user = User.objects.create_user(
            email=f"{role}-{uuid.uuid4().hex[:6]}@example.com",
            password="pass12345",
            role=role,
        )
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens_for(user)['access']}")
        return client


class PublicOrderApiTests(OrderApiTestCase):
    """
    Public order building.

    GUARANTEES:
    - Anyone can create and build an order without a token
    - Prices come from the catalog, never from the client
    - Subtotal is recomputed from the buy list on every read
    - Errors use the JSON error envelope
    """

    def test_create_order(self):
        data = self._create_order(HTTP_X_CLIENT_ID="kiosk-7")

        self.assertRegex(data["order_code"], r"^[A-Z0-9]{8}$")
        self.assertEqual(data["status"], "pending")

        order = Order.objects.get(pk=data["order_id"])
        self.assertEqual(order.client_id, "kiosk-7")
        self.assertEqual(order.version, 0)

    def test_create_order_defaults_client(self):
        data = self._create_order()
        self.assertEqual(Order.objects.get(pk=data["order_id"]).client_id, "anonymous")

    def test_create_order_rejects_bad_list_type(self):
        response = self.client.post("/api/orders/", {"list_type": "cart"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "VALIDATION_ERROR")

    def test_add_items_and_read_subtotal(self):
        order_id = self._create_order()["order_id"]

        response = self._add(order_id, "WIDGET", 2, color="red")
        self.assertEqual(response.status_code, 201, response.content)
        body = response.json()
        self.assertEqual(body["message"], "Item added to order")
        self.assertEqual(body["item"]["sku"], "WIDGET")
        self.assertEqual(body["item"]["price"], 50.0)
        self.assertEqual(body["item"]["color"], "red")

        self._add(order_id, "GADGET", 1)

        detail = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(detail.status_code, 200)
        data = detail.json()
        self.assertEqual(len(data["items"]), 2)
        self.assertEqual(data["subtotal"], 200.0)
        self.assertEqual(data["wishlist_items"], [])

    def test_client_supplied_price_is_ignored(self):
        order_id = self._create_order()["order_id"]

        self._add(order_id, "WIDGET", 1, price="0.01")

        line = OrderItem.objects.get(order_id=order_id)
        self.assertEqual(line.price, Decimal("50.00"))

    def test_add_unknown_sku(self):
        order_id = self._create_order()["order_id"]

        response = self._add(order_id, "MISSING", 1)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"error": {"code": "NOT_FOUND", "message": "Product not found"}},
        )

    def test_add_rejects_zero_quantity(self):
        order_id = self._create_order()["order_id"]

        response = self._add(order_id, "WIDGET", 0)

        self.assertEqual(response.status_code, 400)
        self.assertIn("quantity", response.json()["error"]["details"])
        self.assertFalse(OrderItem.objects.exists())

    def test_add_to_missing_order(self):
        response = self._add(uuid.uuid4(), "WIDGET", 1)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["message"], "Order not found")

    def test_get_missing_order(self):
        response = self.client.get(f"/api/orders/{uuid.uuid4()}/")
        self.assertEqual(response.status_code, 404)

    def test_move_between_lists_by_index(self):
        order_id = self._create_order()["order_id"]
        self._add(order_id, "WIDGET", 2)
        self._add(order_id, "GADGET", 1)

        response = self.client.put(
            f"/api/orders/{order_id}/items/0/",
            {"list_type": "wishlist"},
            format="json",
        )
        self.assertEqual(response.status_code, 200, response.content)
        order = response.json()["order"]
        self.assertEqual(response.json()["message"], "Item updated")
        self.assertEqual([l["sku"] for l in order["items"]], ["GADGET"])
        self.assertEqual([l["sku"] for l in order["wishlist_items"]], ["WIDGET"])
        self.assertEqual(order["subtotal"], 100.0)

        # index 0 now addresses the wishlist
        response = self.client.put(
            f"/api/orders/{order_id}/items/0/",
            {"list_type": "buy"},
            format="json",
        )
        order = response.json()["order"]
        self.assertEqual([l["sku"] for l in order["items"]], ["GADGET", "WIDGET"])
        self.assertEqual(order["wishlist_items"], [])
        self.assertEqual(order["subtotal"], 200.0)

    def test_update_quantity_by_line_id(self):
        order_id = self._create_order()["order_id"]
        item_id = self._add(order_id, "WIDGET", 1).json()["item"]["id"]

        response = self.client.put(
            f"/api/orders/{order_id}/lines/{item_id}/",
            {"quantity": 3},
            format="json",
        )

        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()["order"]["subtotal"], 150.0)
        self.assertEqual(OrderItem.objects.get(pk=item_id).quantity, 3)

    def test_invalid_index(self):
        order_id = self._create_order()["order_id"]
        self._add(order_id, "WIDGET", 1)

        response = self.client.put(
            f"/api/orders/{order_id}/items/5/", {"quantity": 2}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["message"], "Invalid item index")

    def test_negative_index_is_invalid(self):
        order_id = self._create_order()["order_id"]
        self._add(order_id, "WIDGET", 1)

        responses = [
            self.client.put(f"/api/orders/{order_id}/items/-1/", {"quantity": 2}, format="json"),
            self.client.delete(f"/api/orders/{order_id}/items/-1/"),
        ]

        for response in responses:
            self.assertEqual(response.status_code, 400)
            self.assertEqual(
                response.json(),
                {"error": {"code": "VALIDATION_ERROR", "message": "Invalid item index"}},
            )
        self.assertEqual(OrderItem.objects.get(order_id=order_id).quantity, 1)

    def test_stale_token_is_ignored_on_public_routes(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        order_id = self._create_order()["order_id"]
        added = self._add(order_id, "WIDGET", 1)
        read = self.client.get(f"/api/orders/{order_id}/")
        product = self.client.get("/api/products/search/", {"sku": "WIDGET"})

        self.assertEqual(added.status_code, 201)
        self.assertEqual(read.status_code, 200)
        self.assertEqual(product.status_code, 200)

    def test_remove_item_by_index(self):
        order_id = self._create_order()["order_id"]
        self._add(order_id, "WIDGET", 1)
        self._add(order_id, "GADGET", 1)

        response = self.client.delete(f"/api/orders/{order_id}/items/0/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Item removed")
        self.assertEqual([l["sku"] for l in response.json()["order"]["items"]], ["GADGET"])

    def test_remove_item_by_line_id(self):
        order_id = self._create_order()["order_id"]
        item_id = self._add(order_id, "WIDGET", 1).json()["item"]["id"]

        response = self.client.delete(f"/api/orders/{order_id}/lines/{item_id}/")

        self.assertEqual(response.status_code, 200)
        self.assertFalse(OrderItem.objects.filter(pk=item_id).exists())

    def test_close_order(self):
        order_id = self._create_order()["order_id"]

        response = self.client.post(f"/api/orders/{order_id}/close/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Order closed")
        self.assertEqual(response.json()["order"]["status"], "closed")
        self.assertIsNotNone(Order.objects.get(pk=order_id).closed_at)

    def test_every_write_bumps_version(self):
        order_id = self._create_order()["order_id"]
        self._add(order_id, "WIDGET", 1)
        self.client.put(f"/api/orders/{order_id}/items/0/", {"quantity": 2}, format="json")

        self.assertEqual(Order.objects.get(pk=order_id).version, 2)


class CashierOrderApiTests(OrderApiTestCase):
    """
    Cashier tools.

    GUARANTEES:
    - Code lookup and status changes require a cashier/admin token
    - Missing token -> 401, wrong role -> 403
    """

    def setUp(self):
        super().setUp()
        self.created = self._create_order()
        self.order_id = self.created["order_id"]
        self.code = self.created["order_code"]

    def test_lookup_by_code(self):
        client = self._staff_client("cashier")
        self._add(self.order_id, "WIDGET", 2)

        response = client.get(f"/api/orders/code/{self.code.lower()}/")

        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()["id"], self.order_id)
        self.assertEqual(response.json()["subtotal"], 100.0)

    def test_lookup_unknown_code(self):
        client = self._staff_client("admin")

        response = client.get("/api/orders/code/ZZZZZZZZ/")

        self.assertEqual(response.status_code, 404)

    def test_lookup_requires_token(self):
        response = self.client.get(f"/api/orders/code/{self.code}/")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["code"], "UNAUTHORIZED")

    def test_lookup_rejects_customer_role(self):
        client = self._staff_client("customer")

        response = client.get(f"/api/orders/code/{self.code}/")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_invalid_token(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = client.get(f"/api/orders/code/{self.code}/")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["message"], "Invalid token")

    def test_set_status(self):
        client = self._staff_client("cashier")

        response = client.put(
            f"/api/orders/{self.order_id}/status/", {"status": "ready"}, format="json"
        )

        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()["message"], "Order status updated")
        self.assertEqual(Order.objects.get(pk=self.order_id).status, "ready")

    def test_set_invalid_status(self):
        client = self._staff_client("cashier")

        response = client.put(
            f"/api/orders/{self.order_id}/status/", {"status": "shipped"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["message"], "Invalid status")
        self.assertEqual(Order.objects.get(pk=self.order_id).status, "pending")

    def test_set_status_requires_token(self):
        response = self.client.put(
            f"/api/orders/{self.order_id}/status/", {"status": "ready"}, format="json"
        )
        self.assertEqual(response.status_code, 401)
