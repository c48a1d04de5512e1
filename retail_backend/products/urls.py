# products/urls.py

"""
PRODUCTS URLS

Purpose:
- Public product lookup under /api/products/
    /api/products/search/?sku=<sku>
    /api/products/<uuid>/
"""

from django.urls import path

from products.views import ProductDetailView, ProductSearchView

app_name = "products"

urlpatterns = [
    path("search/", ProductSearchView.as_view(), name="search"),
    path("<uuid:product_id>/", ProductDetailView.as_view(), name="detail"),
]
