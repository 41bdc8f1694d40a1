"""
Catalog Service
Product listing, creation, deletion and first-run seeding

Author: TM3
Date: 2025-10-03
"""
import logging
from decimal import Decimal
from typing import Dict, List

import psycopg2

from storefront.core.database import Database
from storefront.core.errors import NotFoundError, InternalError
from storefront.domain.product import Product, ProductCreate
from storefront.repositories import ProductRepository, OrderRepository

logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    ProductCreate(
        name="Buckets",
        price=Decimal("29.99"),
        description="Amazon S3 Buckets for scalable storage",
        stock=50
    ),
    ProductCreate(
        name="Load Balancers",
        price=Decimal("34.99"),
        description="Customizable load balancers for your applications",
        stock=30
    ),
    ProductCreate(
        name="Microsoft Azure",
        price=Decimal("24.99"),
        description="Cloud computing services for building, testing, and deploying applications",
        stock=25
    ),
]


class CatalogService:
    """Service for catalog management. Deleting a product never touches orders."""

    def __init__(self, db: Database):
        self.db = db

    def list_products(self) -> List[Product]:
        """All products, most recent first"""
        try:
            with self.db.transaction() as cursor:
                return ProductRepository(cursor).find_all()
        except psycopg2.Error as e:
            logger.error(f"Error fetching products: {e}")
            raise InternalError("Failed to fetch products") from e

    def create_product(self, product: ProductCreate) -> Product:
        try:
            with self.db.transaction() as cursor:
                created = ProductRepository(cursor).create(product)
        except psycopg2.Error as e:
            logger.error(f"Error creating product: {e}")
            raise InternalError("Failed to create product") from e

        logger.info(f"Product {created.id} created: {created.name}")
        return created

    def delete_product(self, product_id: str):
        """
        Delete a product

        Raises:
            NotFoundError: no product with that id
        """
        try:
            with self.db.transaction() as cursor:
                deleted = ProductRepository(cursor).delete(product_id)
        except psycopg2.Error as e:
            logger.error(f"Error deleting product: {e}")
            raise InternalError("Failed to delete product") from e

        if not deleted:
            raise NotFoundError("Product not found")

        logger.info(f"Product {product_id} deleted")

    def seed_if_empty(self) -> int:
        """
        Insert the sample products when the catalog is empty

        Returns:
            Number of products inserted (0 when the catalog already had data)
        """
        with self.db.transaction() as cursor:
            repo = ProductRepository(cursor)
            if repo.count() > 0:
                return 0

            logger.info("Seeding sample products...")
            for product in SAMPLE_PRODUCTS:
                repo.create(product)

        logger.info(f"{len(SAMPLE_PRODUCTS)} sample products created")
        return len(SAMPLE_PRODUCTS)

    def admin_overview(self) -> Dict[str, list]:
        """Products and orders for the admin page, both most recent first"""
        try:
            with self.db.transaction() as cursor:
                return {
                    "products": ProductRepository(cursor).find_all(),
                    "orders": OrderRepository(cursor).find_all(),
                }
        except psycopg2.Error as e:
            logger.error(f"Error loading admin data: {e}")
            raise InternalError("Failed to load admin data") from e
