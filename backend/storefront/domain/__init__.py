"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: TM3
Date: 2025-10-17
"""
from storefront.domain.product import Product, ProductCreate, PLACEHOLDER_IMAGE
from storefront.domain.order import Order, OrderItem, OrderCreate, OrderStatus, Customer, CustomerInfo

__all__ = [
    'Product',
    'ProductCreate',
    'PLACEHOLDER_IMAGE',
    'Order',
    'OrderItem',
    'OrderCreate',
    'OrderStatus',
    'Customer',
    'CustomerInfo',
]
