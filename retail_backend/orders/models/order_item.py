# orders/models/order_item.py

"""
ORDER ITEM MODEL

Purpose:
- One line of an order, in either the buy list or the wishlist.
- sku/name/price are snapshots taken when the line was added.

Rules:
- id is stable for the life of the line (moves between lists keep it).
- position orders lines within their list.
- quantity may be 0 (written as-is by quantity updates).
"""

import uuid
from decimal import Decimal

from django.db import models

from products.models import Product
from .order import Order


class OrderItem(models.Model):
    LIST_BUY = "buy"
    LIST_WISHLIST = "wishlist"

    LIST_CHOICES = [
        (LIST_BUY, "Buy"),
        (LIST_WISHLIST, "Wishlist"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    list_type = models.CharField(max_length=16, choices=LIST_CHOICES, default=LIST_BUY)
    position = models.PositiveIntegerField(default=0)

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    sku = models.CharField(max_length=50)
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Snapshot price at time of adding to the order",
    )
    quantity = models.PositiveIntegerField()
    color = models.CharField(max_length=50, null=True, blank=True)

    added_at = models.DateTimeField()

    class Meta:
        ordering = ["list_type", "position"]
        indexes = [
            models.Index(
                fields=["order", "list_type", "position"],
                name="orderitem_list_position_idx",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * Decimal(int(self.quantity or 0))

    def __str__(self):
        return f"{self.name} x {self.quantity} ({self.list_type})"
