# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- ProductSerializer: read shape for ProductData (public + admin responses).
- ProductInputSerializer: admin create + bulk import entry validation.
- ProductUpdateSerializer: admin partial update (every field optional).

Prices are rendered as JSON numbers (COERCE_DECIMAL_TO_STRING = False).
"""

from decimal import Decimal

from rest_framework import serializers

from products.domain import NAME_MAX_LENGTH, SKU_MAX_LENGTH


class ProductSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    description = serializers.CharField(read_only=True)
    image = serializers.CharField(read_only=True)
    colors = serializers.ListField(child=serializers.CharField(), read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class ProductInputSerializer(serializers.Serializer):
    sku = serializers.CharField(min_length=1, max_length=SKU_MAX_LENGTH)
    name = serializers.CharField(min_length=1, max_length=NAME_MAX_LENGTH)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")
    image = serializers.CharField(
        required=False, allow_blank=True, max_length=500, default=""
    )
    colors = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        default=list,
    )

    def validate_sku(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("SKU is required")
        return value

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value


class ProductUpdateSerializer(ProductInputSerializer):
    """Partial update: only supplied fields are validated; create defaults are skipped."""

    def __init__(self, *args, **kwargs):
        kwargs["partial"] = True
        super().__init__(*args, **kwargs)
