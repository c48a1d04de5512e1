from .order import (
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

__all__ = [
    "AddOrderItemInputSerializer",
    "CreateOrderInputSerializer",
    "OrderCreatedSerializer",
    "OrderItemAddedSerializer",
    "OrderLineSerializer",
    "OrderMessageSerializer",
    "OrderSerializer",
    "OrderStatusInputSerializer",
    "UpdateOrderItemInputSerializer",
]
