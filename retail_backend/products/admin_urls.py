# products/admin_urls.py

"""
ADMIN PRODUCT URLS

Purpose:
- Catalog maintenance under /api/admin/products/ (cashier or admin)
"""

from django.urls import path

from products.views import (
    AdminProductImportView,
    AdminProductListCreateView,
    AdminProductUpdateView,
)

app_name = "admin-products"

urlpatterns = [
    path("", AdminProductListCreateView.as_view(), name="list-create"),
    path("import/", AdminProductImportView.as_view(), name="import"),
    path("<uuid:product_id>/", AdminProductUpdateView.as_view(), name="update"),
]
