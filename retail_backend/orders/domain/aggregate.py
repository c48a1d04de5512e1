"""
PATH: orders/domain/aggregate.py

ORDER AGGREGATE

Purpose:
- In-memory representation of one order: buy list, wishlist and status.
- All item-list mutations live here; services load, mutate, persist.

Rules:
- items and wishlist_items are disjoint; a line lives in exactly one list.
- Lines are addressed by position within a list OR by their stable id.
- Price/name/sku are snapshotted from the product at add time.
- Adding never merges: the same SKU twice yields two lines.
- Subtotal is derived from items only (wishlist excluded), never stored.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from django.utils import timezone

from common.exceptions import DomainValidationError, NotFoundError
from orders.domain.status import STATUS_CLOSED, STATUS_PENDING, validate_transition

LIST_BUY = "buy"
LIST_WISHLIST = "wishlist"
LIST_TYPES = (LIST_BUY, LIST_WISHLIST)

ItemRef = Union[int, str]


# =====================================================
# INPUT GUARDS
# =====================================================


def coerce_quantity(value, *, minimum: int) -> int:
    """
    Accept ints (and integral floats like 2.0); reject bools, fractions,
    strings and anything below `minimum`.
    """
    if isinstance(value, bool):
        raise DomainValidationError("Quantity must be an integer")

    if isinstance(value, float) and value.is_integer():
        value = int(value)

    if not isinstance(value, int):
        raise DomainValidationError("Quantity must be an integer")

    if value < minimum:
        if minimum == 1:
            raise DomainValidationError("Quantity must be a positive integer")
        raise DomainValidationError(f"Quantity must be at least {minimum}")

    return value


def validate_list_type(value) -> str:
    if value not in LIST_TYPES:
        raise DomainValidationError(
            "Invalid list type",
            details={"allowed": list(LIST_TYPES)},
        )
    return value


# =====================================================
# LINE
# =====================================================


@dataclass
class OrderLine:
    product_id: str
    sku: str
    name: str
    price: Decimal
    quantity: int
    color: Optional[str] = None
    added_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product, *, quantity: int, color=None, now=None) -> "OrderLine":
        return cls(
            product_id=str(product.id),
            sku=product.sku,
            name=product.name,
            price=Decimal(str(product.price)),
            quantity=quantity,
            color=color or None,
            added_at=now or timezone.now(),
        )


# =====================================================
# AGGREGATE
# =====================================================


@dataclass
class OrderAggregate:
    client_id: str
    order_code: str
    status: str = STATUS_PENDING
    items: list[OrderLine] = field(default_factory=list)
    wishlist_items: list[OrderLine] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    id: Optional[str] = None
    version: int = 0

    @classmethod
    def new(cls, *, client_id: str, order_code: str, now=None) -> "OrderAggregate":
        now = now or timezone.now()
        return cls(
            client_id=client_id,
            order_code=order_code,
            status=STATUS_PENDING,
            created_at=now,
            updated_at=now,
        )

    # -----------------------------
    # Lookups
    # -----------------------------
    def _list_for(self, list_type: str) -> list[OrderLine]:
        return self.items if list_type == LIST_BUY else self.wishlist_items

    def _locate_index(self, index, list_type: str) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise DomainValidationError("Invalid item index")
        if not 0 <= index < len(self._list_for(list_type)):
            raise DomainValidationError("Invalid item index")
        return index

    def _locate(self, ref: ItemRef, *, lists=LIST_TYPES, default_list: str = LIST_BUY):
        """Return (list_type, position) for an index or a line id."""
        if isinstance(ref, str):
            for list_type in lists:
                for position, line in enumerate(self._list_for(list_type)):
                    if line.id == ref:
                        return list_type, position
            raise NotFoundError("Item not found")

        return default_list, self._locate_index(ref, default_list)

    def touch(self, now=None) -> None:
        self.updated_at = now or timezone.now()

    # -----------------------------
    # Mutations
    # -----------------------------
    def add_item(self, product, quantity, color=None, *, now=None) -> OrderLine:
        quantity = coerce_quantity(quantity, minimum=1)
        now = now or timezone.now()

        line = OrderLine.from_product(product, quantity=quantity, color=color, now=now)
        self.items.append(line)
        self.touch(now)
        return line

    def update_item(
        self,
        ref: ItemRef,
        *,
        quantity=None,
        list_type: Optional[str] = None,
        source: Optional[str] = None,
        now=None,
    ) -> OrderLine:
        """
        Update quantity and/or move a line between items and wishlist.

        Index refs resolve against `source` when given; otherwise against the
        wishlist when moving to "buy", else against items. Quantity is applied
        to the addressed line before any move.
        """
        if list_type is not None:
            validate_list_type(list_type)
        if source is not None:
            validate_list_type(source)
        if quantity is not None:
            quantity = coerce_quantity(quantity, minimum=0)

        if source is None:
            source = LIST_WISHLIST if list_type == LIST_BUY else LIST_BUY

        current_list, position = self._locate(ref, default_list=source)
        holder = self._list_for(current_list)
        line = holder[position]

        if quantity is not None:
            line.quantity = quantity

        if list_type is not None and list_type != current_list:
            holder.pop(position)
            self._list_for(list_type).append(line)

        self.touch(now)
        return line

    def remove_item(self, ref: ItemRef, *, now=None) -> OrderLine:
        list_type, position = self._locate(ref, lists=(LIST_BUY,))
        line = self._list_for(list_type).pop(position)
        self.touch(now)
        return line

    def set_status(self, status: str, *, now=None) -> None:
        validate_transition(order=self, target_status=status)
        self.status = status
        self.touch(now)

    def close(self, *, now=None) -> None:
        now = now or timezone.now()
        self.status = STATUS_CLOSED
        self.closed_at = now
        self.touch(now)

    # -----------------------------
    # Derived values
    # -----------------------------
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)
