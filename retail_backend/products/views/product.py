# products/views/product.py

"""
PUBLIC PRODUCT VIEWS

Purpose:
- Product lookup for the storefront (AllowAny):
    GET /api/products/search/?sku=<sku>
    GET /api/products/<uuid>/

Rules:
- Read-only; every lookup goes through ProductLookup and the Store port.
- A miss is 404 "Product not found".
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import DomainValidationError
from products.serializers import ProductSerializer
from products.services import ProductLookup
from storage.port import get_store


def get_product_lookup() -> ProductLookup:
    return ProductLookup(get_store())


class ProductSearchView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = ProductSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="sku",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Exact product SKU",
            )
        ],
        responses={200: ProductSerializer},
        description="Find a product by exact SKU",
    )
    def get(self, request):
        sku = request.query_params.get("sku")
        if not sku:
            raise DomainValidationError("SKU parameter is required")

        product = get_product_lookup().by_sku(sku)
        return Response(ProductSerializer(product).data)


class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = ProductSerializer

    @extend_schema(
        responses={200: ProductSerializer},
        description="Get a product by id",
    )
    def get(self, request, product_id):
        product = get_product_lookup().by_id(product_id)
        return Response(ProductSerializer(product).data)
