# products/tests/test_catalog.py

from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from common.exceptions import ConflictError, DomainValidationError, NotFoundError
from products.models import Product
from products.services import ProductCatalogService, ProductLookup
from storage.django_store import DjangoStore
from storage.memory import InMemoryStore


class ProductCatalogServiceTests(SimpleTestCase):
    """
    Catalog service against the in-memory store.

    GUARANTEES:
    - SKUs stay unique on create and update
    - Import skips invalid and duplicate entries and reports counts
    - Listing is newest first and capped
    """

    def setUp(self):
        self.store = InMemoryStore()
        self.catalog = ProductCatalogService(self.store)

    def test_create_and_lookup(self):
        product = self.catalog.create_product(sku="CAP-1", name="Cap", price=Decimal("9.99"))

        lookup = ProductLookup(self.store)
        self.assertEqual(lookup.by_sku("CAP-1").id, product.id)
        self.assertEqual(lookup.by_id(product.id).name, "Cap")

    def test_duplicate_sku_conflicts(self):
        self.catalog.create_product(sku="CAP-1", name="Cap", price=Decimal("9.99"))

        with self.assertRaises(ConflictError):
            self.catalog.create_product(sku="CAP-1", name="Other", price=Decimal("1.00"))

    def test_update_product(self):
        product = self.catalog.create_product(sku="CAP-1", name="Cap", price=Decimal("9.99"))

        updated = self.catalog.update_product(product.id, price=Decimal("12.00"))

        self.assertEqual(updated.price, Decimal("12.00"))
        self.assertEqual(updated.sku, "CAP-1")

    def test_update_to_taken_sku_conflicts(self):
        self.catalog.create_product(sku="CAP-1", name="Cap", price=Decimal("9.99"))
        other = self.catalog.create_product(sku="CAP-2", name="Cap 2", price=Decimal("9.99"))

        with self.assertRaises(ConflictError):
            self.catalog.update_product(other.id, sku="CAP-1")

    def test_update_missing_product(self):
        with self.assertRaises(NotFoundError):
            self.catalog.update_product("missing", name="x")

    def test_import_counts(self):
        self.catalog.create_product(sku="EXISTING", name="Existing", price=Decimal("1.00"))

        result = self.catalog.import_products(
            [
                {"sku": "NEW-1", "name": "New 1", "price": "5.00"},
                {"sku": "NEW-2", "name": "New 2", "price": 7, "colors": ["red"]},
                {"sku": "NEW-1", "name": "Repeat", "price": "5.00"},
                {"sku": "EXISTING", "name": "Dup", "price": "1.00"},
                {"sku": "", "name": "No sku", "price": "1.00"},
                {"sku": "BAD-PRICE", "name": "Bad", "price": "0"},
                "not-an-object",
            ]
        )

        self.assertEqual(result.imported, 2)
        self.assertEqual(result.skipped, 5)
        self.assertEqual(ProductLookup(self.store).by_sku("NEW-2").colors, ("red",))

    def test_import_requires_list(self):
        with self.assertRaises(DomainValidationError):
            self.catalog.import_products({"sku": "X"})

    def test_list_products_is_capped(self):
        for i in range(105):
            self.catalog.create_product(sku=f"SKU-{i}", name=f"P{i}", price=Decimal("1.00"))

        self.assertEqual(len(self.catalog.list_products()), 100)
        self.assertEqual(len(self.catalog.list_products(limit=500)), 100)
        self.assertEqual(len(self.catalog.list_products(limit=3)), 3)


class ProductLookupTests(SimpleTestCase):
    def setUp(self):
        self.lookup = ProductLookup(InMemoryStore())

    def test_missing_sku(self):
        with self.assertRaises(NotFoundError):
            self.lookup.by_sku("NOPE")

    def test_sku_length_is_validated(self):
        for bad in ("", "   ", "X" * 51, None):
            with self.assertRaises(DomainValidationError):
                self.lookup.by_sku(bad)


class DjangoCatalogTests(TestCase):
    """
    Catalog service against the ORM store.

    GUARANTEES:
    - The DB unique constraint surfaces as ConflictError
    - Model validation surfaces as DomainValidationError
    """

    def setUp(self):
        self.catalog = ProductCatalogService(DjangoStore())

    def test_create_persists(self):
        product = self.catalog.create_product(
            sku="BAG-1", name="Bag", price=Decimal("30.00"), colors=["green"]
        )

        row = Product.objects.get(pk=product.id)
        self.assertEqual(row.sku, "BAG-1")
        self.assertEqual(row.colors, ["green"])

    def test_store_level_duplicate_is_conflict(self):
        Product.objects.create(sku="BAG-1", name="Bag", price=Decimal("30.00"))

        with self.assertRaises(ConflictError):
            DjangoStore().create_product({"sku": "BAG-1", "name": "Again", "price": Decimal("1.00")})

    def test_model_validation_is_domain_error(self):
        with self.assertRaises(DomainValidationError):
            DjangoStore().create_product({"sku": "BAG-2", "name": "Bag", "price": Decimal("0")})
