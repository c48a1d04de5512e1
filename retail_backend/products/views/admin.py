# products/views/admin.py

"""
ADMIN PRODUCT VIEWS

Purpose:
- Catalog maintenance for cashiers/admins:
    GET   /api/admin/products/               list (newest first, capped)
    POST  /api/admin/products/               create
    PUT   /api/admin/products/<uuid>/        update (partial)
    PATCH /api/admin/products/<uuid>/        update (partial)
    POST  /api/admin/products/import/        bulk import

Hard rules:
- Views validate request shape; uniqueness and persistence belong to
  ProductCatalogService + the Store port.
- Duplicate SKU -> 409 CONFLICT.
"""

from django.db import transaction
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import DomainValidationError
from permissions.roles import IsCashierOrAdmin
from products.serializers import (
    ProductInputSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
)
from products.services import ProductCatalogService
from storage.port import get_store

ImportResultSerializer = inline_serializer(
    name="ProductImportResult",
    fields={
        "imported": serializers.IntegerField(),
        "skipped": serializers.IntegerField(),
    },
)


def get_catalog_service() -> ProductCatalogService:
    return ProductCatalogService(get_store())


class AdminProductListCreateView(APIView):
    permission_classes = [IsCashierOrAdmin]
    serializer_class = ProductSerializer

    @extend_schema(
        responses={200: ProductSerializer(many=True)},
        description="List products, newest first (at most 100)",
    )
    def get(self, request):
        products = get_catalog_service().list_products()
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        request=ProductInputSerializer,
        responses={201: ProductSerializer},
        description="Create a product (SKU must be unique)",
    )
    @transaction.atomic
    def post(self, request):
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_catalog_service().create_product(**serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class AdminProductUpdateView(APIView):
    permission_classes = [IsCashierOrAdmin]
    serializer_class = ProductSerializer

    def _update(self, request, product_id):
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_catalog_service().update_product(
            product_id, **serializer.validated_data
        )
        return Response(ProductSerializer(product).data)

    @extend_schema(
        request=ProductUpdateSerializer,
        responses={200: ProductSerializer},
        description="Update a product (only supplied fields change)",
    )
    @transaction.atomic
    def put(self, request, product_id):
        return self._update(request, product_id)

    @extend_schema(
        request=ProductUpdateSerializer,
        responses={200: ProductSerializer},
        description="Update a product (only supplied fields change)",
    )
    @transaction.atomic
    def patch(self, request, product_id):
        return self._update(request, product_id)


class AdminProductImportView(APIView):
    """
    Body is either a JSON array of products or {"products": [...]}.

    Entries that fail validation or reuse an existing SKU are skipped and
    counted; the rest are created.
    """

    permission_classes = [IsCashierOrAdmin]

    @extend_schema(
        request=ProductInputSerializer(many=True),
        responses={200: ImportResultSerializer},
        description="Bulk import products",
    )
    @transaction.atomic
    def post(self, request):
        entries = request.data
        if isinstance(entries, dict):
            entries = entries.get("products")

        if not isinstance(entries, list):
            raise DomainValidationError("Expected a list of products")

        result = get_catalog_service().import_products(entries)
        return Response({"imported": result.imported, "skipped": result.skipped})
