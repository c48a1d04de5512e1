"""
PATH: orders/models/order.py

ORDER MODEL

Purpose:
- Persisted form of an OrderAggregate (orders.domain.aggregate).
- Buy list and wishlist are OrderItem rows split by list_type, ordered by position.

Rules:
- order_code is set once at creation (unique by convention, not enforced).
- version is the optimistic-concurrency token; storage bumps it on every save.
- Subtotal is derived from buy-list lines, never stored.
- No hard delete.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.utils import timezone

from orders.domain.status import ALL_STATUSES, STATUS_CHOICES, STATUS_PENDING


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client_id = models.CharField(max_length=128, default="anonymous")

    order_code = models.CharField(
        max_length=8,
        db_index=True,
        help_text="Short code cashiers use to find the order",
    )

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING
    )

    version = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["client_id", "created_at"], name="order_client_created_idx"),
        ]

    def clean(self):
        if self.status not in ALL_STATUSES:
            raise ValidationError({"status": "Invalid status"})

    @property
    def subtotal_amount(self) -> Decimal:
        total = (
            self.lines.filter(list_type="buy")
            .annotate(
                amount=ExpressionWrapper(
                    F("quantity") * F("price"),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                )
            )
            .aggregate(total=Sum("amount"))
            .get("total")
        )
        return total or Decimal("0.00")

    def __str__(self):
        return f"Order {self.order_code} | {self.status}"
