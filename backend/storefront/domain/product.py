"""
Product Domain Model

Represents a product entity in the store catalog.
This is the single source of truth for product data structure.

Author: TM3
Date: 2025-10-17
"""
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Optional, Annotated
from datetime import datetime
from decimal import Decimal


PLACEHOLDER_IMAGE = "/images/placeholder.jpg"

# Column limits: stock is INTEGER, price is NUMERIC(12, 2)
MAX_STOCK = 2_147_483_647
MAX_PRICE = Decimal("9999999999.99")

# Money is kept as Decimal in Python and rendered as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Store-assigned product ID
        name: Product name
        price: Current selling price
        description: Product description (optional)
        stock: Units available for sale, never negative
        image: Image URL or path
        created_at: When product was created
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name", min_length=1)
    price: Money = Field(..., description="Selling price", ge=0)
    description: Optional[str] = Field(None, description="Product description")
    stock: int = Field(0, description="Units in stock", ge=0)
    image: str = Field(PLACEHOLDER_IMAGE, description="Image URL or path")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1)
    price: Money = Field(..., ge=0, le=MAX_PRICE)
    description: Optional[str] = None
    stock: int = Field(0, ge=0, le=MAX_STOCK)
    image: str = PLACEHOLDER_IMAGE
