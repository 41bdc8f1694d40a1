"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.
Line items live in the orders.items JSONB column, so reading an order never
joins against products.

Author: TM3
Date: 2025-10-17
"""
from typing import List, Optional

from psycopg2.extras import Json

from storefront.domain.order import Order, OrderCreate


ORDER_COLUMNS = """
    id, customer_id, customer_name, customer_email,
    total, status, items, created_at
"""


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    """

    def __init__(self, cursor):
        self.cursor = cursor

    @staticmethod
    def _map_row_to_order(row: dict) -> Order:
        """Helper method to map database row (with JSONB items) to Order"""
        return Order(
            id=row['id'],
            customer_id=row['customer_id'],
            customer_name=row['customer_name'],
            customer_email=row['customer_email'],
            total=row['total'],
            status=row['status'],
            items=row['items'] or [],
            created_at=row['created_at']
        )

    def find_all(self) -> List[Order]:
        """
        Find every order, most recently created first

        Returns:
            List of orders with their embedded items
        """
        self.cursor.execute(f"""
            SELECT {ORDER_COLUMNS}
            FROM orders
            ORDER BY created_at DESC
        """)

        return [self._map_row_to_order(row) for row in self.cursor.fetchall()]

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID

        Returns:
            Order or None if not found
        """
        self.cursor.execute(f"""
            SELECT {ORDER_COLUMNS}
            FROM orders
            WHERE id = %s
        """, (order_id,))

        row = self.cursor.fetchone()
        if not row:
            return None

        return self._map_row_to_order(row)

    def create(self, order: OrderCreate) -> Order:
        """
        Insert an order with its line items

        Items are stored with the same camelCase keys the API exposes.
        created_at is taken from the store clock unless the caller supplies
        one (historical imports).
        """
        items = [item.model_dump(mode="json", by_alias=True) for item in order.items]

        self.cursor.execute(f"""
            INSERT INTO orders (
                customer_id, customer_name, customer_email,
                total, status, items, created_at
            ) VALUES (
                %s, %s, %s, %s, %s, %s, COALESCE(%s, clock_timestamp())
            )
            RETURNING {ORDER_COLUMNS}
        """, (
            order.customer_id,
            order.customer_name,
            order.customer_email,
            order.total,
            order.status.value,
            Json(items),
            order.created_at
        ))

        return self._map_row_to_order(self.cursor.fetchone())

    def delete_all(self) -> int:
        self.cursor.execute("DELETE FROM orders")
        return self.cursor.rowcount
