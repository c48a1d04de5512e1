# products/services/catalog.py

"""
PRODUCT CATALOG SERVICE (admin)

Purpose:
- Create / update / bulk import / list products through the Store port.

Rules:
- SKU is unique: duplicate create -> ConflictError("SKU already exists")
- Import is best-effort: invalid entries and duplicate SKUs are skipped and counted
- Listing is capped (no pagination)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from common.exceptions import ConflictError, DomainValidationError, NotFoundError
from products.domain import ProductData
from products.serializers import ProductInputSerializer

logger = logging.getLogger(__name__)

PRODUCT_LIST_LIMIT = 100


@dataclass(frozen=True)
class ImportResult:
    imported: int
    skipped: int


class ProductCatalogService:
    def __init__(self, store):
        self.store = store

    def create_product(
        self,
        *,
        sku: str,
        name: str,
        price,
        description: str = "",
        image: str = "",
        colors=None,
    ) -> ProductData:
        if self.store.find_product_by_sku(sku) is not None:
            raise ConflictError("SKU already exists")

        product_id = self.store.create_product(
            {
                "sku": sku,
                "name": name,
                "price": price,
                "description": description or "",
                "image": image or "",
                "colors": list(colors or []),
            }
        )
        logger.info("Product created", extra={"product_id": product_id, "sku": sku})
        return self.store.get_product(product_id)

    def update_product(self, product_id, **changes) -> ProductData:
        current = self.store.get_product(str(product_id))
        if current is None:
            raise NotFoundError("Product not found")

        new_sku = changes.get("sku")
        if new_sku and new_sku != current.sku:
            clash = self.store.find_product_by_sku(new_sku)
            if clash is not None and clash.id != current.id:
                raise ConflictError("SKU already exists")

        updated = self.store.update_product(current.id, changes)
        if updated is None:
            raise NotFoundError("Product not found")

        logger.info(
            "Product updated",
            extra={"product_id": current.id, "fields": sorted(changes)},
        )
        return updated

    def import_products(self, entries) -> ImportResult:
        if not isinstance(entries, (list, tuple)):
            raise DomainValidationError("Expected a list of products")

        imported = 0
        skipped = 0
        seen_skus = set()

        for entry in entries:
            serializer = ProductInputSerializer(data=entry)
            if not serializer.is_valid():
                skipped += 1
                continue

            data = serializer.validated_data
            if data["sku"] in seen_skus:
                skipped += 1
                continue

            try:
                self.create_product(**data)
            except ConflictError:
                skipped += 1
                continue

            seen_skus.add(data["sku"])
            imported += 1

        logger.info(
            "Product import finished",
            extra={"imported": imported, "skipped": skipped},
        )
        return ImportResult(imported=imported, skipped=skipped)

    def list_products(self, limit: int = PRODUCT_LIST_LIMIT) -> list[ProductData]:
        return self.store.list_products(min(int(limit), PRODUCT_LIST_LIMIT))
