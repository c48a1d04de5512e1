from .api import (
    OrderByCodeView,
    OrderCloseView,
    OrderCreateView,
    OrderDetailView,
    OrderItemByIndexView,
    OrderItemsView,
    OrderLineView,
    OrderStatusView,
)

__all__ = [
    "OrderByCodeView",
    "OrderCloseView",
    "OrderCreateView",
    "OrderDetailView",
    "OrderItemByIndexView",
    "OrderItemsView",
    "OrderLineView",
    "OrderStatusView",
]
