# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:

- Products are edited in place; SKU stays unique (model constraint).
- Orders keep their own price/name snapshot, so edits here never
  rewrite existing order lines.
"""

from django.contrib import admin

from products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "price", "created_at", "updated_at")
    search_fields = ("sku", "name")
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("id", "sku", "name", "price")}),
        ("Presentation", {"fields": ("description", "image", "colors")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )
