# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.domain import NAME_MAX_LENGTH, SKU_MAX_LENGTH


class Product(models.Model):
    """
    Represents a sellable product.

    PRICING MODEL (IMPORTANT):
    - price is the current selling price
    - Order lines snapshot sku/name/price at add time; editing a Product never
      rewrites existing orders
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sku = models.CharField(max_length=SKU_MAX_LENGTH, unique=True, db_index=True)
    name = models.CharField(max_length=NAME_MAX_LENGTH, db_index=True)

    price = models.DecimalField(max_digits=12, decimal_places=2)

    description = models.TextField(blank=True, default="")
    image = models.CharField(max_length=500, blank=True, default="")

    # Available color variants (list of strings)
    colors = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        if not (self.sku or "").strip():
            raise ValidationError({"sku": "SKU is required"})

        if self.price is None or Decimal(self.price) <= 0:
            raise ValidationError({"price": "Price must be greater than zero"})

        if not isinstance(self.colors, list) or not all(
            isinstance(c, str) for c in self.colors
        ):
            raise ValidationError({"colors": "colors must be a list of strings"})
