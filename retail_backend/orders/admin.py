from django.contrib import admin

from .models import Order, OrderItem

# =====================================================
# ORDER ITEM INLINE (READ-ONLY)
# =====================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    ordering = ("list_type", "position")
    readonly_fields = (
        "list_type",
        "position",
        "sku",
        "name",
        "price",
        "quantity",
        "color",
        "line_total",
        "added_at",
    )
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# ORDER ADMIN
# =====================================================


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are changed through the API (optimistic version checks live in
    storage); admin is a read-only window.
    """

    list_display = (
        "order_code",
        "status",
        "client_id",
        "subtotal_amount",
        "created_at",
        "closed_at",
    )

    readonly_fields = (
        "id",
        "order_code",
        "client_id",
        "status",
        "version",
        "subtotal_amount",
        "created_at",
        "updated_at",
        "closed_at",
    )

    search_fields = ("order_code", "client_id")
    list_filter = ("status", "created_at")

    inlines = [OrderItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
