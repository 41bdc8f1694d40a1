"""
Integration tests for the checkout workflow against a real PostgreSQL

Requires TEST_DATABASE_URL pointing at a disposable database (PostgreSQL 13+).
Every test starts from empty tables.
"""
import pytest
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from storefront.core.database import Database
from storefront.core.errors import InsufficientStockError, NotFoundError
from storefront.domain.order import CustomerInfo
from storefront.domain.product import ProductCreate
from storefront.repositories import ProductRepository
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService, CartLine

pytestmark = pytest.mark.integration

CUSTOMER = CustomerInfo(name="Ada Lovelace", email="ada@example.com", address="12 Analytical St")


@pytest.fixture(scope="module")
def db(test_database_url):
    db = Database(test_database_url, min_connections=1, max_connections=5)
    db.connect(max_retries=1)
    db.init_schema()
    yield db
    db.close()


@pytest.fixture(autouse=True)
def clean_tables(db):
    with db.transaction() as cursor:
        cursor.execute("TRUNCATE products, customers, orders")
    yield


@pytest.fixture
def catalog(db):
    service = CatalogService(db)
    p1 = service.create_product(ProductCreate(name="P1", price=Decimal("10.00"), description="first", stock=5))
    p2 = service.create_product(ProductCreate(name="P2", price=Decimal("20.00"), description="second", stock=0))
    return p1, p2


def count_rows(db, table):
    with db.transaction() as cursor:
        cursor.execute(f"SELECT COUNT(*) AS total FROM {table}")
        return cursor.fetchone()["total"]


def stock_of(db, product_id):
    with db.transaction() as cursor:
        return ProductRepository(cursor).find_by_id(product_id).stock


class TestPlaceOrder:

    def test_successful_order_decrements_stock(self, db, catalog):
        p1, _ = catalog

        order = OrderService(db).place_order([CartLine(product_id=p1.id, quantity=2)], CUSTOMER)

        assert order.total == Decimal("20.00")
        assert order.status.value == "pending"
        assert stock_of(db, p1.id) == 3
        assert count_rows(db, "customers") == 1
        assert count_rows(db, "orders") == 1

    def test_insufficient_stock_has_no_side_effects(self, db, catalog):
        _, p2 = catalog

        with pytest.raises(InsufficientStockError):
            OrderService(db).place_order([CartLine(product_id=p2.id, quantity=1)], CUSTOMER)

        assert stock_of(db, p2.id) == 0
        assert count_rows(db, "customers") == 0
        assert count_rows(db, "orders") == 0

    def test_unknown_product_has_no_side_effects(self, db, catalog):
        p1, _ = catalog

        with pytest.raises(NotFoundError):
            OrderService(db).place_order([
                CartLine(product_id=p1.id, quantity=1),
                CartLine(product_id="nonexistent-id", quantity=1),
            ], CUSTOMER)

        assert stock_of(db, p1.id) == 5
        assert count_rows(db, "customers") == 0

    def test_repeated_lines_cannot_oversell(self, db, catalog):
        p1, _ = catalog

        with pytest.raises(InsufficientStockError):
            OrderService(db).place_order([
                CartLine(product_id=p1.id, quantity=3),
                CartLine(product_id=p1.id, quantity=3),
            ], CUSTOMER)

        assert stock_of(db, p1.id) == 5
        assert count_rows(db, "orders") == 0

    def test_repeat_customer_gets_a_new_record(self, db, catalog):
        p1, _ = catalog
        service = OrderService(db)

        first = service.place_order([CartLine(product_id=p1.id, quantity=1)], CUSTOMER)
        second = service.place_order([CartLine(product_id=p1.id, quantity=1)], CUSTOMER)

        assert first.customer_id != second.customer_id
        assert count_rows(db, "customers") == 2

    def test_concurrent_orders_for_last_unit(self, db):
        product = CatalogService(db).create_product(
            ProductCreate(name="Last One", price=Decimal("5.00"), description="", stock=1)
        )
        service = OrderService(db)
        barrier = threading.Barrier(2)

        def attempt():
            barrier.wait()
            try:
                service.place_order([CartLine(product_id=product.id, quantity=1)], CUSTOMER)
                return "ok"
            except InsufficientStockError:
                return "insufficient"

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = sorted(pool.map(lambda _: attempt(), range(2)))

        assert results == ["insufficient", "ok"]
        assert stock_of(db, product.id) == 0
        assert count_rows(db, "orders") == 1


class TestCatalogAndHistory:

    def test_deleting_product_keeps_order_snapshot(self, db, catalog):
        p1, _ = catalog
        OrderService(db).place_order([CartLine(product_id=p1.id, quantity=2)], CUSTOMER)

        CatalogService(db).delete_product(p1.id)

        order = OrderService(db).list_orders()[0]
        assert order.items[0].product_id == p1.id
        assert order.items[0].product_name == "P1"
        assert order.items[0].price == Decimal("10.00")
        assert order.items[0].subtotal == Decimal("20.00")

    def test_listings_are_newest_first(self, db, catalog):
        p1, p2 = catalog
        service = OrderService(db)
        first = service.place_order([CartLine(product_id=p1.id, quantity=1)], CUSTOMER)
        second = service.place_order([CartLine(product_id=p1.id, quantity=1)], CUSTOMER)

        assert [p.id for p in CatalogService(db).list_products()] == [p2.id, p1.id]
        assert [o.id for o in service.list_orders()] == [second.id, first.id]

    def test_new_product_defaults(self, db):
        product = CatalogService(db).create_product(ProductCreate(name="Defaults", price=Decimal("1.00")))

        assert product.stock == 0
        assert product.image == "/images/placeholder.jpg"
