"""
PATH: orders/urls.py

ORDER URLS

Public:
- create / read / close an order
- add, update, move, remove items (by index or by stable line id)

Cashier/admin:
- lookup by order code
- workflow status updates
"""

from django.urls import path, register_converter

from orders.views import (
    OrderByCodeView,
    OrderCloseView,
    OrderCreateView,
    OrderDetailView,
    OrderItemByIndexView,
    OrderItemsView,
    OrderLineView,
    OrderStatusView,
)


class SignedIntConverter:
    """Like <int:>, but also matches negative numbers so they reach validation."""

    regex = r"-?\d+"

    def to_python(self, value):
        return int(value)

    def to_url(self, value):
        return str(value)


register_converter(SignedIntConverter, "signed")

app_name = "orders"

urlpatterns = [
    path("", OrderCreateView.as_view(), name="create"),
    path("code/<str:order_code>/", OrderByCodeView.as_view(), name="by-code"),

    path("<uuid:order_id>/", OrderDetailView.as_view(), name="detail"),
    path("<uuid:order_id>/close/", OrderCloseView.as_view(), name="close"),
    path("<uuid:order_id>/status/", OrderStatusView.as_view(), name="status"),

    path("<uuid:order_id>/items/", OrderItemsView.as_view(), name="items"),
    path("<uuid:order_id>/items/<signed:index>/", OrderItemByIndexView.as_view(), name="item-by-index"),
    path("<uuid:order_id>/lines/<uuid:item_id>/", OrderLineView.as_view(), name="line"),
]
