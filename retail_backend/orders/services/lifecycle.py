# orders/services/lifecycle.py

"""
ORDER LIFECYCLE SERVICE

Orchestrates every order operation:
    load (Store) -> mutate (OrderAggregate) -> persist (Store, partial fields)

DESIGN PRINCIPLES:
- Stateless between calls; all state lives behind the injected Store
- Orders are created complete (code included) in a single write
- Each operation is attempted once; no retries
- Version conflicts surface as ConflictError (see storage.port)
"""

from __future__ import annotations

import logging

from django.utils import timezone

from common.exceptions import DomainValidationError, NotFoundError
from orders.domain.aggregate import (
    LIST_BUY,
    OrderAggregate,
    OrderLine,
    coerce_quantity,
    validate_list_type,
)
from orders.domain.status import WORKFLOW_STATUSES, is_workflow_status
from orders.services.codes import generate_order_code
from products.services.lookup import ProductLookup

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "anonymous"
CLIENT_ID_MAX_LENGTH = 128

# Fields persisted per operation
ADD_FIELDS = ("items", "updated_at")
UPDATE_FIELDS = ("items", "wishlist_items", "updated_at")
REMOVE_FIELDS = ("items", "updated_at")
CLOSE_FIELDS = ("status", "closed_at", "updated_at")
STATUS_FIELDS = ("status", "updated_at")


class OrderLifecycleService:
    def __init__(self, store, *, code_generator=generate_order_code, clock=timezone.now):
        self.store = store
        self.products = ProductLookup(store)
        self.code_generator = code_generator
        self.clock = clock

    # -----------------------------
    # Helpers
    # -----------------------------
    def _load(self, order_id) -> OrderAggregate:
        order = self.store.get_order(str(order_id))
        if order is None:
            raise NotFoundError("Order not found")
        return order

    # -----------------------------
    # Commands
    # -----------------------------
    def create_order(
        self, *, client_id: str = DEFAULT_CLIENT_ID, list_type: str = LIST_BUY
    ) -> OrderAggregate:
        validate_list_type(list_type)

        client_id = (client_id or "").strip() or DEFAULT_CLIENT_ID
        if len(client_id) > CLIENT_ID_MAX_LENGTH:
            raise DomainValidationError("Client id is too long")

        order = OrderAggregate.new(
            client_id=client_id,
            order_code=self.code_generator(),
            now=self.clock(),
        )
        order.id = self.store.create_order(order)

        logger.info(
            "Order created",
            extra={
                "order_id": order.id,
                "order_code": order.order_code,
                "client_id": client_id,
                "list_type": list_type,
            },
        )
        return order

    def add_item_to_order(self, order_id, *, sku, quantity, color=None) -> OrderLine:
        quantity = coerce_quantity(quantity, minimum=1)
        product = self.products.by_sku(sku)
        order = self._load(order_id)

        line = order.add_item(product, quantity, color, now=self.clock())
        self.store.save_order(order, fields=ADD_FIELDS)

        logger.info(
            "Order item added",
            extra={"order_id": order.id, "sku": line.sku, "quantity": line.quantity},
        )
        return line

    def update_order_item(
        self, order_id, ref, *, quantity=None, list_type=None, source=None
    ) -> OrderAggregate:
        order = self._load(order_id)

        line = order.update_item(
            ref,
            quantity=quantity,
            list_type=list_type,
            source=source,
            now=self.clock(),
        )
        self.store.save_order(order, fields=UPDATE_FIELDS)

        logger.info(
            "Order item updated",
            extra={"order_id": order.id, "item_id": line.id, "list_type": list_type},
        )
        return order

    def remove_order_item(self, order_id, ref) -> OrderAggregate:
        order = self._load(order_id)

        line = order.remove_item(ref, now=self.clock())
        self.store.save_order(order, fields=REMOVE_FIELDS)

        logger.info(
            "Order item removed",
            extra={"order_id": order.id, "item_id": line.id, "sku": line.sku},
        )
        return order

    def close_order(self, order_id) -> OrderAggregate:
        order = self._load(order_id)

        order.close(now=self.clock())
        self.store.save_order(order, fields=CLOSE_FIELDS)

        logger.info("Order closed", extra={"order_id": order.id})
        return order

    def set_order_status(self, order_id, status) -> OrderAggregate:
        if not is_workflow_status(status):
            raise DomainValidationError(
                "Invalid status",
                details={"allowed": list(WORKFLOW_STATUSES)},
            )

        order = self._load(order_id)
        previous = order.status

        order.set_status(status, now=self.clock())
        self.store.save_order(order, fields=STATUS_FIELDS)

        logger.info(
            "Order status changed",
            extra={"order_id": order.id, "from_status": previous, "to_status": status},
        )
        return order

    # -----------------------------
    # Queries
    # -----------------------------
    def get_order(self, order_id) -> OrderAggregate:
        return self._load(order_id)

    def get_order_by_code(self, order_code) -> OrderAggregate:
        code = (order_code or "").strip().upper()
        order = self.store.find_order_by_code(code) if code else None
        if order is None:
            raise NotFoundError("Order not found")
        return order
