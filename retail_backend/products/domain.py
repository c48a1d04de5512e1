# products/domain.py

"""
PRODUCT VALUE OBJECT

ProductData is what the Store port hands to services: a detached, immutable
snapshot of a Product row. Services never touch the ORM model directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

SKU_MAX_LENGTH = 50
NAME_MAX_LENGTH = 200


@dataclass(frozen=True)
class ProductData:
    id: str
    sku: str
    name: str
    price: Decimal
    description: str = ""
    image: str = ""
    colors: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def with_changes(self, **changes) -> "ProductData":
        if "colors" in changes:
            changes["colors"] = tuple(changes["colors"] or ())
        return replace(self, **changes)
