# orders/serializers/order.py

"""
ORDER SERIALIZERS

Read side renders OrderAggregate / OrderLine (not ORM rows):
- subtotal is computed fresh from the aggregate on every response
- price/quantity/subtotal are JSON numbers

Write side serializers validate request shape only; domain rules
(positive quantity, index range, status set) live in the aggregate.
"""

from decimal import Decimal

from rest_framework import serializers

from orders.domain.aggregate import LIST_TYPES
from orders.domain.status import ALL_STATUSES, WORKFLOW_STATUSES


# =====================================================
# READ
# =====================================================


class OrderLineSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    product_id = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    color = serializers.CharField(read_only=True, allow_null=True)
    added_at = serializers.DateTimeField(read_only=True)


class OrderSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    client_id = serializers.CharField(read_only=True)
    order_code = serializers.CharField(read_only=True)
    status = serializers.ChoiceField(choices=ALL_STATUSES, read_only=True)
    items = OrderLineSerializer(many=True, read_only=True)
    wishlist_items = OrderLineSerializer(many=True, read_only=True)
    subtotal = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
    closed_at = serializers.DateTimeField(read_only=True, allow_null=True)

    def get_subtotal(self, order) -> Decimal:
        return order.subtotal()


class OrderCreatedSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    order_code = serializers.CharField()
    status = serializers.CharField()


class OrderMessageSerializer(serializers.Serializer):
    message = serializers.CharField()
    order = OrderSerializer()


class OrderItemAddedSerializer(serializers.Serializer):
    message = serializers.CharField()
    item = OrderLineSerializer()


# =====================================================
# WRITE (request shape)
# =====================================================


class CreateOrderInputSerializer(serializers.Serializer):
    list_type = serializers.ChoiceField(choices=LIST_TYPES, required=False, default="buy")


class AddOrderItemInputSerializer(serializers.Serializer):
    sku = serializers.CharField(min_length=1, max_length=50)
    quantity = serializers.IntegerField(min_value=1)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)


class UpdateOrderItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=0, required=False)
    list_type = serializers.ChoiceField(choices=LIST_TYPES, required=False)
    source = serializers.ChoiceField(
        choices=LIST_TYPES,
        required=False,
        help_text="List the index refers to (defaults: wishlist when moving to buy, else buy)",
    )


class OrderStatusInputSerializer(serializers.Serializer):
    status = serializers.CharField(help_text=f"One of: {', '.join(WORKFLOW_STATUSES)}")
