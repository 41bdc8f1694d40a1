"""
Unit tests for CatalogService
"""
import pytest
import psycopg2
from decimal import Decimal
from unittest.mock import patch

from storefront.core.errors import NotFoundError, InternalError
from storefront.domain.product import ProductCreate
from storefront.services.catalog_service import CatalogService, SAMPLE_PRODUCTS


@pytest.fixture
def product_repo():
    with patch("storefront.services.catalog_service.ProductRepository") as repo_cls:
        yield repo_cls.return_value


class TestCatalogService:

    def test_delete_missing_product_raises_not_found(self, fake_db, product_repo):
        product_repo.delete.return_value = False

        with pytest.raises(NotFoundError) as exc_info:
            CatalogService(fake_db).delete_product("missing")

        assert exc_info.value.message == "Product not found"

    def test_delete_existing_product(self, fake_db, product_repo):
        product_repo.delete.return_value = True

        CatalogService(fake_db).delete_product("p1")

        product_repo.delete.assert_called_once_with("p1")
        assert fake_db.commits == 1

    def test_create_product_passes_model_through(self, fake_db, product_repo):
        product = ProductCreate(name="Buckets", price=Decimal("29.99"), description="S3", stock=50)
        product_repo.create.return_value.name = "Buckets"

        CatalogService(fake_db).create_product(product)

        product_repo.create.assert_called_once_with(product)

    def test_list_products_wraps_database_errors(self, fake_db, product_repo):
        product_repo.find_all.side_effect = psycopg2.OperationalError("connection refused")

        with pytest.raises(InternalError) as exc_info:
            CatalogService(fake_db).list_products()

        assert exc_info.value.message == "Failed to fetch products"

    def test_seed_if_empty_inserts_sample_products(self, fake_db, product_repo):
        product_repo.count.return_value = 0

        inserted = CatalogService(fake_db).seed_if_empty()

        assert inserted == 3
        assert [c.args[0].name for c in product_repo.create.call_args_list] == \
            ["Buckets", "Load Balancers", "Microsoft Azure"]

    def test_seed_if_empty_skips_populated_catalog(self, fake_db, product_repo):
        product_repo.count.return_value = 7

        assert CatalogService(fake_db).seed_if_empty() == 0
        product_repo.create.assert_not_called()

    def test_sample_products_have_stock_and_placeholder_image(self):
        assert [p.stock for p in SAMPLE_PRODUCTS] == [50, 30, 25]
        assert all(p.image == "/images/placeholder.jpg" for p in SAMPLE_PRODUCTS)

    def test_admin_overview_returns_products_and_orders(self, fake_db, product_repo):
        with patch("storefront.services.catalog_service.OrderRepository") as order_cls:
            order_cls.return_value.find_all.return_value = ["o1"]
            product_repo.find_all.return_value = ["p1"]

            overview = CatalogService(fake_db).admin_overview()

        assert overview == {"products": ["p1"], "orders": ["o1"]}
