"""
Customer Repository - Data Access Layer for Customers

Customers are write-only from the application's point of view: one record
is created per checkout and never looked up again.
"""
from storefront.domain.order import Customer, CustomerInfo


class CustomerRepository:
    """Repository for Customer data access"""

    def __init__(self, cursor):
        self.cursor = cursor

    def create(self, info: CustomerInfo) -> Customer:
        """
        Insert a new customer record

        No lookup by email is done; a repeat customer gets a new record.
        """
        self.cursor.execute("""
            INSERT INTO customers (name, email, address)
            VALUES (%s, %s, %s)
            RETURNING id, name, email, address, created_at
        """, (info.name, info.email, info.address))

        return Customer(**self.cursor.fetchone())

    def delete_all(self) -> int:
        self.cursor.execute("DELETE FROM customers")
        return self.cursor.rowcount
