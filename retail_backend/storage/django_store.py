# storage/django_store.py

"""
DJANGO ORM STORE

Production adapter for the Store port.

Order writes:
- Guarded by optimistic concurrency:
    UPDATE ... WHERE id = :id AND version = :loaded_version
  0 rows -> order missing (NotFoundError) or modified meanwhile (ConflictError).
- Line lists are replaced wholesale inside the same transaction, keeping
  each line's stable id.

Product writes:
- SKU uniqueness is enforced by the DB; IntegrityError -> ConflictError.
"""

from __future__ import annotations

import logging
import uuid

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F

from common.exceptions import ConflictError, DomainValidationError, NotFoundError
from orders.domain.aggregate import LIST_BUY, LIST_WISHLIST, OrderAggregate, OrderLine
from orders.models import Order, OrderItem
from products.domain import ProductData
from products.models import Product
from storage.port import Store, resolve_save_fields

logger = logging.getLogger(__name__)

_SCALAR_ORDER_FIELDS = ("status", "updated_at", "closed_at")
_LINE_FIELDS = {"items": LIST_BUY, "wishlist_items": LIST_WISHLIST}


def _is_valid_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True


# =====================================================
# MAPPING (ORM <-> domain)
# =====================================================


def product_to_data(product: Product) -> ProductData:
    return ProductData(
        id=str(product.id),
        sku=product.sku,
        name=product.name,
        price=product.price,
        description=product.description or "",
        image=product.image or "",
        colors=tuple(product.colors or ()),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _line_from_row(row: OrderItem) -> OrderLine:
    return OrderLine(
        id=str(row.id),
        product_id=str(row.product_id),
        sku=row.sku,
        name=row.name,
        price=row.price,
        quantity=row.quantity,
        color=row.color,
        added_at=row.added_at,
    )


def order_to_aggregate(order: Order) -> OrderAggregate:
    items, wishlist = [], []
    for row in order.lines.all():
        target = items if row.list_type == LIST_BUY else wishlist
        target.append(_line_from_row(row))

    return OrderAggregate(
        id=str(order.id),
        client_id=order.client_id,
        order_code=order.order_code,
        status=order.status,
        items=items,
        wishlist_items=wishlist,
        created_at=order.created_at,
        updated_at=order.updated_at,
        closed_at=order.closed_at,
        version=order.version,
    )


def _rows_for(order_id: str, list_type: str, lines) -> list[OrderItem]:
    return [
        OrderItem(
            id=line.id,
            order_id=order_id,
            list_type=list_type,
            position=position,
            product_id=line.product_id,
            sku=line.sku,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
            color=line.color,
            added_at=line.added_at,
        )
        for position, line in enumerate(lines)
    ]


class DjangoStore(Store):
    # -----------------------------
    # Orders
    # -----------------------------
    def _orders(self):
        return Order.objects.prefetch_related("lines")

    def get_order(self, order_id):
        if not _is_valid_uuid(order_id):
            return None
        order = self._orders().filter(pk=order_id).first()
        return order_to_aggregate(order) if order else None

    @transaction.atomic
    def create_order(self, order):
        row = Order.objects.create(
            client_id=order.client_id,
            order_code=order.order_code,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            closed_at=order.closed_at,
            version=0,
        )
        OrderItem.objects.bulk_create(
            _rows_for(row.id, LIST_BUY, order.items)
            + _rows_for(row.id, LIST_WISHLIST, order.wishlist_items)
        )
        return str(row.id)

    def save_order(self, order, *, fields=None):
        fields = resolve_save_fields(fields)
        values = {name: getattr(order, name) for name in _SCALAR_ORDER_FIELDS if name in fields}

        with transaction.atomic():
            updated = Order.objects.filter(pk=order.id, version=order.version).update(
                version=F("version") + 1,
                **values,
            )

            if not updated:
                if not Order.objects.filter(pk=order.id).exists():
                    raise NotFoundError("Order not found")
                logger.warning(
                    "Order version conflict",
                    extra={"order_id": order.id, "version": order.version},
                )
                raise ConflictError("Order was modified concurrently; reload and retry")

            list_types = [lt for name, lt in _LINE_FIELDS.items() if name in fields]
            if list_types:
                # Delete every affected list before recreating, so a line moving
                # between lists never collides with its own primary key.
                OrderItem.objects.filter(order_id=order.id, list_type__in=list_types).delete()
                rows = []
                for name, list_type in _LINE_FIELDS.items():
                    if list_type in list_types:
                        rows += _rows_for(order.id, list_type, getattr(order, name))
                OrderItem.objects.bulk_create(rows)

        order.version += 1

    def find_order_by_code(self, order_code):
        order = self._orders().filter(order_code=order_code).order_by("-created_at").first()
        return order_to_aggregate(order) if order else None

    # -----------------------------
    # Products
    # -----------------------------
    def get_product(self, product_id):
        if not _is_valid_uuid(product_id):
            return None
        product = Product.objects.filter(pk=product_id).first()
        return product_to_data(product) if product else None

    def find_product_by_sku(self, sku):
        product = Product.objects.filter(sku=sku).first()
        return product_to_data(product) if product else None

    def create_product(self, data):
        product = Product(
            sku=data["sku"],
            name=data["name"],
            price=data["price"],
            description=data.get("description", ""),
            image=data.get("image", ""),
            colors=list(data.get("colors") or []),
        )
        try:
            product.full_clean(validate_unique=False)
            with transaction.atomic():
                product.save()
        except IntegrityError as exc:
            raise ConflictError("SKU already exists") from exc
        except DjangoValidationError as exc:
            raise _domain_validation(exc) from exc
        return str(product.id)

    def update_product(self, product_id, changes):
        if not _is_valid_uuid(product_id):
            return None
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return None

        for name, value in changes.items():
            if name == "colors":
                value = list(value or [])
            setattr(product, name, value)

        try:
            product.full_clean(validate_unique=False)
            with transaction.atomic():
                product.save()
        except IntegrityError as exc:
            raise ConflictError("SKU already exists") from exc
        except DjangoValidationError as exc:
            raise _domain_validation(exc) from exc
        return product_to_data(product)

    def list_products(self, limit):
        return [product_to_data(p) for p in Product.objects.order_by("-created_at")[:limit]]


def _domain_validation(exc: DjangoValidationError) -> DomainValidationError:
    details = getattr(exc, "message_dict", None) or {"non_field_errors": exc.messages}
    return DomainValidationError("Invalid product", details=details)
