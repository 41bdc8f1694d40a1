"""
Legacy SQL Migration
Copies products, customers and orders from the legacy relational database
into the application store

Source tables:
- products (id, name, price, description, stock, image)
- customers (id, name, email, address)
- orders (id, customer_id, total, status, created_at)
- order_items (order_id, product_id, product_name, price, quantity, subtotal)

Target tables:
- products, customers, orders (items embedded on each order)

This is a run-once batch job. Target tables are emptied before each phase,
so running it twice replaces the data instead of duplicating it; nothing is
resumable if a phase fails halfway.

Author: TM3
Date: 2025-11-12
"""
import time
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, URL

from storefront.core.config import Settings
from storefront.core.database import Database
from storefront.domain.order import CustomerInfo, OrderCreate, OrderItem, OrderStatus
from storefront.domain.product import ProductCreate, PLACEHOLDER_IMAGE
from storefront.repositories import ProductRepository, CustomerRepository, OrderRepository

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    products_migrated: int
    customers_migrated: int
    orders_migrated: int
    duration_seconds: float


def build_legacy_engine(settings: Settings) -> Engine:
    """Create a SQLAlchemy engine for the legacy database from LEGACY_DB_* settings"""
    url = URL.create(
        drivername=settings.LEGACY_DB_DRIVER,
        username=settings.LEGACY_DB_USER,
        password=settings.LEGACY_DB_PASSWORD or None,
        host=settings.LEGACY_DB_HOST,
        port=settings.LEGACY_DB_PORT,
        database=settings.LEGACY_DB_NAME,
    )
    return create_engine(url, pool_pre_ping=True)


def _normalize_status(value: Optional[str]) -> OrderStatus:
    if not value:
        return OrderStatus.PENDING
    try:
        return OrderStatus(value.lower())
    except ValueError:
        logger.warning(f"Unknown legacy order status '{value}', importing as pending")
        return OrderStatus.PENDING


class LegacyMigration:
    """Reads legacy rows through SQLAlchemy and writes them through the repositories"""

    def __init__(self, source: Engine, db: Database):
        self.source = source
        self.db = db

    def _fetch(self, query: str) -> List[dict]:
        with self.source.connect() as conn:
            return [dict(row) for row in conn.execute(text(query)).mappings().all()]

    def migrate_products(self) -> int:
        logger.info("Migrating products...")
        rows = self._fetch("""
            SELECT id, name, price, description, stock, image
            FROM products
        """)

        with self.db.transaction() as cursor:
            repo = ProductRepository(cursor)
            repo.delete_all()
            for row in rows:
                repo.create(ProductCreate(
                    name=row['name'],
                    price=Decimal(str(row['price'])),
                    description=row['description'],
                    stock=row['stock'] or 0,
                    image=row['image'] or PLACEHOLDER_IMAGE
                ))

        logger.info(f"Migrated {len(rows)} products")
        return len(rows)

    def migrate_customers(self) -> Dict[object, dict]:
        """
        Copy customers

        Returns:
            Legacy customer id -> {"id": new id, "name": ..., "email": ...}
        """
        logger.info("Migrating customers...")
        rows = self._fetch("""
            SELECT id, name, email, address
            FROM customers
        """)

        customers = {}
        with self.db.transaction() as cursor:
            repo = CustomerRepository(cursor)
            repo.delete_all()
            for row in rows:
                created = repo.create(CustomerInfo(
                    name=row['name'],
                    email=row['email'],
                    address=row['address']
                ))
                customers[row['id']] = {
                    "id": created.id,
                    "name": row['name'],
                    "email": row['email'],
                }

        logger.info(f"Migrated {len(rows)} customers")
        return customers

    def migrate_orders(self, customers: Dict[object, dict]) -> int:
        logger.info("Migrating orders...")
        order_rows = self._fetch("""
            SELECT id, customer_id, total, status, created_at
            FROM orders
        """)
        item_rows = self._fetch("""
            SELECT order_id, product_id, product_name, price, quantity, subtotal
            FROM order_items
        """)

        items_by_order: Dict[object, List[OrderItem]] = {}
        for it in item_rows:
            items_by_order.setdefault(it['order_id'], []).append(OrderItem(
                product_id=str(it['product_id']),
                product_name=it['product_name'],
                price=Decimal(str(it['price'])),
                quantity=it['quantity'],
                subtotal=Decimal(str(it['subtotal']))
            ))

        with self.db.transaction() as cursor:
            repo = OrderRepository(cursor)
            repo.delete_all()
            for row in order_rows:
                customer = customers.get(row['customer_id'])
                repo.create(OrderCreate(
                    customer_id=customer['id'] if customer else None,
                    customer_name=(customer or {}).get('name') or "Unknown",
                    customer_email=(customer or {}).get('email') or "Unknown",
                    total=Decimal(str(row['total'])),
                    status=_normalize_status(row['status']),
                    items=items_by_order.get(row['id'], []),
                    created_at=row['created_at']
                ))

        logger.info(f"Migrated {len(order_rows)} orders")
        return len(order_rows)

    def run(self) -> MigrationResult:
        """Run every phase in order: products, customers, orders"""
        start = time.time()
        logger.info("Starting legacy SQL migration...")

        products = self.migrate_products()
        customers = self.migrate_customers()
        orders = self.migrate_orders(customers)

        result = MigrationResult(
            products_migrated=products,
            customers_migrated=len(customers),
            orders_migrated=orders,
            duration_seconds=round(time.time() - start, 2)
        )
        logger.info(f"Migration completed successfully in {result.duration_seconds}s")
        return result
