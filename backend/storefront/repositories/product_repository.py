"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
Repositories work on a cursor handed in by the caller so several of them
can share one transaction.

Author: TM3
Date: 2025-10-17
"""
from typing import List, Optional

from storefront.domain.product import Product, ProductCreate


PRODUCT_COLUMNS = "id, name, price, description, stock, image, created_at"


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    def __init__(self, cursor):
        self.cursor = cursor

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Helper method to map database row to Product domain model"""
        return Product(
            id=row['id'],
            name=row['name'],
            price=row['price'],
            description=row['description'],
            stock=row['stock'],
            image=row['image'],
            created_at=row['created_at']
        )

    def find_all(self) -> List[Product]:
        """
        Find every product, most recently created first

        Returns:
            List of products
        """
        self.cursor.execute(f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            ORDER BY created_at DESC
        """)

        return [self._map_row_to_product(row) for row in self.cursor.fetchall()]

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        self.cursor.execute(f"""
            SELECT {PRODUCT_COLUMNS}
            FROM products
            WHERE id = %s
        """, (product_id,))

        row = self.cursor.fetchone()
        if not row:
            return None

        return self._map_row_to_product(row)

    def count(self) -> int:
        """Count all products"""
        self.cursor.execute("SELECT COUNT(*) as total FROM products")
        return self.cursor.fetchone()['total']

    def create(self, product: ProductCreate) -> Product:
        """
        Insert a product and return it with its store-assigned ID

        Args:
            product: Fields for the new product

        Returns:
            The created Product
        """
        self.cursor.execute(f"""
            INSERT INTO products (name, price, description, stock, image)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {PRODUCT_COLUMNS}
        """, (
            product.name,
            product.price,
            product.description,
            product.stock,
            product.image
        ))

        return self._map_row_to_product(self.cursor.fetchone())

    def delete(self, product_id: str) -> bool:
        """
        Delete product by ID

        Returns:
            True if a product was deleted, False if it did not exist
        """
        self.cursor.execute("DELETE FROM products WHERE id = %s", (product_id,))
        return self.cursor.rowcount > 0

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """
        Atomically take quantity units out of stock

        The check and the write are one conditional UPDATE, so concurrent
        orders can never push stock below zero: a competing writer blocks on
        the row lock and then re-evaluates the condition.

        Returns:
            True if stock was decremented, False if there was not enough
        """
        self.cursor.execute("""
            UPDATE products
            SET stock = stock - %s
            WHERE id = %s AND stock >= %s
        """, (quantity, product_id, quantity))

        return self.cursor.rowcount == 1

    def delete_all(self) -> int:
        """Remove every product. Returns the number of rows deleted."""
        self.cursor.execute("DELETE FROM products")
        return self.cursor.rowcount
