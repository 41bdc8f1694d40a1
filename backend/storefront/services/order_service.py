"""
Order Service
Places orders from a submitted cart and lists order history

Author: TM3
Date: 2025-10-03
"""
import logging
from decimal import Decimal
from typing import List, Optional

import psycopg2
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.core.database import Database
from storefront.core.errors import (
    StorefrontError,
    ValidationError,
    NotFoundError,
    InsufficientStockError,
    InternalError,
)
from storefront.domain.order import Order, OrderCreate, OrderItem, CustomerInfo
from storefront.repositories import ProductRepository, CustomerRepository, OrderRepository

logger = logging.getLogger(__name__)


class CartLine(BaseModel):
    """One {productId, quantity} entry submitted from the cart"""
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderService:
    """
    Service for the checkout workflow

    Handles:
    - Product lookup and stock verification
    - Total computation from current prices
    - Customer and order record creation
    - Stock decrement

    Everything runs in one store transaction: an order either commits with
    its customer and all its stock decrements, or nothing is written.
    """

    def __init__(self, db: Database):
        self.db = db

    def place_order(self, items: Optional[List[CartLine]], customer_info: Optional[CustomerInfo]) -> Order:
        """
        Place an order for the given cart lines

        Args:
            items: Cart lines in submission order
            customer_info: Contact details from the checkout form

        Returns:
            The created Order with its store-assigned id and timestamp

        Raises:
            ValidationError: items empty or customer_info missing
            NotFoundError: a product id does not exist
            InsufficientStockError: a product has fewer units than requested
            InternalError: any persistence failure
        """
        if not items or customer_info is None:
            raise ValidationError("Items and customer info are required")

        try:
            with self.db.transaction() as cursor:
                products = ProductRepository(cursor)

                total = Decimal("0")
                order_items = []

                for line in items:
                    product = products.find_by_id(line.product_id)
                    if product is None:
                        raise NotFoundError(f"Product {line.product_id} not found")
                    if product.stock < line.quantity:
                        raise InsufficientStockError(product.name)

                    subtotal = product.price * line.quantity
                    total += subtotal

                    order_items.append(OrderItem(
                        product_id=product.id,
                        product_name=product.name,
                        price=product.price,
                        quantity=line.quantity,
                        subtotal=subtotal
                    ))

                customer = CustomerRepository(cursor).create(customer_info)

                order = OrderRepository(cursor).create(OrderCreate(
                    customer_id=customer.id,
                    customer_name=customer.name,
                    customer_email=customer.email,
                    total=total,
                    items=order_items
                ))

                # Stock may have changed since the reads above; rows are
                # locked in product id order.
                for item in sorted(order_items, key=lambda i: i.product_id):
                    if not products.decrement_stock(item.product_id, item.quantity):
                        raise InsufficientStockError(item.product_name)

        except StorefrontError as e:
            logger.warning(f"Order rejected: {e.message}")
            raise
        except psycopg2.Error as e:
            logger.error(f"Error creating order: {e}")
            raise InternalError("Failed to create order") from e

        logger.info(
            f"Order {order.id} placed: {order.item_count} items "
            f"({order.total_quantity} units), total {order.total}"
        )
        return order

    def list_orders(self) -> List[Order]:
        """All orders, most recent first"""
        try:
            with self.db.transaction() as cursor:
                return OrderRepository(cursor).find_all()
        except psycopg2.Error as e:
            logger.error(f"Error fetching orders: {e}")
            raise InternalError("Failed to fetch orders") from e
