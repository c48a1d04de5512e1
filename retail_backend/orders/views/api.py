# orders/views/api.py

"""
ORDER API VIEWS

Purpose:
- Public order building: create, add items, update/move/remove items, close
- Cashier tools: look up by order code, set workflow status

Hard rules:
- Views only parse/shape HTTP; every rule lives in OrderLifecycleService
  and the OrderAggregate.
- Money is server-owned: price is snapshotted from Product on add.
- Errors are raised as domain errors and rendered by common.api.
"""

from __future__ import annotations

from django.db import transaction
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import (
    AddOrderItemInputSerializer,
    CreateOrderInputSerializer,
    OrderCreatedSerializer,
    OrderItemAddedSerializer,
    OrderLineSerializer,
    OrderMessageSerializer,
    OrderSerializer,
    OrderStatusInputSerializer,
    UpdateOrderItemInputSerializer,
)
from orders.services.lifecycle import DEFAULT_CLIENT_ID, OrderLifecycleService
from permissions.roles import IsCashierOrAdmin
from storage.port import get_store

CLIENT_ID_HEADER = "X-Client-Id"


# =====================================================
# HELPERS
# =====================================================


def get_order_service() -> OrderLifecycleService:
    return OrderLifecycleService(get_store())


def _order_message(message: str, order) -> Response:
    return Response({"message": message, "order": OrderSerializer(order).data})


def _update_item(request, order_id, ref) -> Response:
    serializer = UpdateOrderItemInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    order = get_order_service().update_order_item(
        order_id,
        ref,
        quantity=data.get("quantity"),
        list_type=data.get("list_type"),
        source=data.get("source"),
    )
    return _order_message("Item updated", order)


def _remove_item(order_id, ref) -> Response:
    order = get_order_service().remove_order_item(order_id, ref)
    return _order_message("Item removed", order)


# =====================================================
# PUBLIC ORDER VIEWS
# =====================================================


class OrderCreateView(APIView):
    """
    Create an empty order (status pending) with a fresh 8-char order code.

    Client identity comes from the X-Client-Id header (default "anonymous").
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderCreatedSerializer

    @extend_schema(
        request=CreateOrderInputSerializer,
        responses={201: OrderCreatedSerializer},
        parameters=[
            OpenApiParameter(
                name=CLIENT_ID_HEADER,
                location=OpenApiParameter.HEADER,
                required=False,
                description="Client identifier (defaults to 'anonymous')",
            )
        ],
        description="Create a new order",
    )
    def post(self, request):
        serializer = CreateOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        client_id = request.headers.get(CLIENT_ID_HEADER) or DEFAULT_CLIENT_ID

        order = get_order_service().create_order(
            client_id=client_id,
            list_type=serializer.validated_data["list_type"],
        )

        return Response(
            {
                "order_id": order.id,
                "order_code": order.order_code,
                "status": order.status,
            },
            status=status.HTTP_201_CREATED,
        )


class OrderDetailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderSerializer

    @extend_schema(
        responses={200: OrderSerializer},
        description="Get an order with its freshly computed subtotal",
    )
    def get(self, request, order_id):
        order = get_order_service().get_order(order_id)
        return Response(OrderSerializer(order).data)


class OrderItemsView(APIView):
    """
    Add a product (by SKU) to the order's buy list.

    Money rule:
    - Price and name are snapshotted from the Product server-side.
    - Adding the same SKU twice creates two lines (no merge).
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderItemAddedSerializer

    @extend_schema(
        request=AddOrderItemInputSerializer,
        responses={201: OrderItemAddedSerializer},
        description="Add an item to an order",
    )
    @transaction.atomic
    def post(self, request, order_id):
        serializer = AddOrderItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        line = get_order_service().add_item_to_order(
            order_id,
            sku=data["sku"],
            quantity=data["quantity"],
            color=data.get("color"),
        )

        return Response(
            {"message": "Item added to order", "item": OrderLineSerializer(line).data},
            status=status.HTTP_201_CREATED,
        )


class OrderItemByIndexView(APIView):
    """
    Update / move / remove a line addressed by its position.

    PUT body: {quantity?, list_type?, source?}
    - list_type "wishlist": moves the line at `index` of the buy list
    - list_type "buy": moves the line at `index` of the wishlist
    - source overrides which list `index` refers to
    DELETE: removes the line at `index` of the buy list.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderMessageSerializer

    @extend_schema(
        request=UpdateOrderItemInputSerializer,
        responses={200: OrderMessageSerializer},
        description="Update quantity and/or move an order line by index",
    )
    @transaction.atomic
    def put(self, request, order_id, index):
        return _update_item(request, order_id, index)

    @extend_schema(
        responses={200: OrderMessageSerializer},
        description="Remove an order line by index (buy list only)",
    )
    @transaction.atomic
    def delete(self, request, order_id, index):
        return _remove_item(order_id, index)


class OrderLineView(APIView):
    """
    Same operations as OrderItemByIndexView, addressed by the line's stable id.
    Ids survive moves between lists, so clients never depend on positions.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderMessageSerializer

    @extend_schema(
        request=UpdateOrderItemInputSerializer,
        responses={200: OrderMessageSerializer},
        description="Update quantity and/or move an order line by id",
    )
    @transaction.atomic
    def put(self, request, order_id, item_id):
        return _update_item(request, order_id, str(item_id))

    @extend_schema(
        responses={200: OrderMessageSerializer},
        description="Remove an order line by id (buy list only)",
    )
    @transaction.atomic
    def delete(self, request, order_id, item_id):
        return _remove_item(order_id, str(item_id))


class OrderCloseView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = OrderMessageSerializer

    @extend_schema(
        request=None,
        responses={200: OrderMessageSerializer},
        description="Close an order (status 'closed', stamps closed_at)",
    )
    @transaction.atomic
    def post(self, request, order_id):
        order = get_order_service().close_order(order_id)
        return _order_message("Order closed", order)


# =====================================================
# CASHIER VIEWS
# =====================================================


class OrderByCodeView(APIView):
    permission_classes = [IsCashierOrAdmin]
    serializer_class = OrderSerializer

    @extend_schema(
        responses={200: OrderSerializer},
        description="Cashier lookup of an order by its 8-character code",
    )
    def get(self, request, order_code):
        order = get_order_service().get_order_by_code(order_code)
        return Response(OrderSerializer(order).data)


class OrderStatusView(APIView):
    permission_classes = [IsCashierOrAdmin]
    serializer_class = OrderMessageSerializer

    @extend_schema(
        request=OrderStatusInputSerializer,
        responses={200: OrderMessageSerializer},
        description="Set the workflow status of an order (cashier/admin)",
    )
    @transaction.atomic
    def put(self, request, order_id):
        serializer = OrderStatusInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = get_order_service().set_order_status(
            order_id, serializer.validated_data["status"]
        )
        return _order_message("Order status updated", order)
