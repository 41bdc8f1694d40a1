"""
Order Domain Models

Represents order-related entities: customers, orders and their line items.
Line items and the customer fields on an order are snapshots taken at
checkout time; they never follow later changes to products or customers.

Author: TM3
Date: 2025-10-17
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from storefront.domain.product import Money


CAMEL_CASE = ConfigDict(
    from_attributes=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class OrderStatus(str, Enum):
    """Order lifecycle states. New orders always start as pending."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderItem(BaseModel):
    """
    Order Item - one product/quantity line with its price snapshot

    Fields:
        product_id: Product the line was bought from
        product_name: Product name at order time
        price: Unit price at order time
        quantity: Number of units ordered
        subtotal: price * quantity
    """

    product_id: str = Field(..., description="Product ID")
    product_name: str = Field(..., description="Product name at order time")
    price: Money = Field(..., description="Unit price at order time", ge=0)
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    subtotal: Money = Field(..., description="Line subtotal", ge=0)

    model_config = CAMEL_CASE


class Customer(BaseModel):
    """Customer contact record, created once per checkout"""

    id: str = Field(..., description="Customer ID")
    name: Optional[str] = Field(None, description="Customer name")
    email: Optional[str] = Field(None, description="Customer email")
    address: Optional[str] = Field(None, description="Customer address")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = CAMEL_CASE


class CustomerInfo(BaseModel):
    """Contact details submitted with the checkout form"""
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class Order(BaseModel):
    """
    Order domain model - an immutable snapshot of a checkout

    Fields:
        id: Store-assigned order ID
        customer_id: Customer record created for this order
        customer_name: Customer name snapshot
        customer_email: Customer email snapshot
        total: Sum of line subtotals
        status: Order status (pending for every new order)
        items: Ordered line items
        created_at: When order was placed
    """

    id: str = Field(..., description="Order ID")
    customer_id: Optional[str] = Field(None, description="Customer ID")
    customer_name: Optional[str] = Field(None, description="Customer name snapshot")
    customer_email: Optional[str] = Field(None, description="Customer email snapshot")
    total: Money = Field(..., description="Order total", ge=0)
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    items: List[OrderItem] = Field(default_factory=list, description="Order items")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = CAMEL_CASE

    @property
    def item_count(self) -> int:
        """Total number of lines in order"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    total: Decimal = Field(..., ge=0)
    status: OrderStatus = OrderStatus.PENDING
    items: List[OrderItem] = Field(default_factory=list)
    # Only set when importing historical orders
    created_at: Optional[datetime] = None
