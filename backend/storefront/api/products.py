"""
Products API Endpoints
Handles product catalog listing and admin management

Author: TM3
Date: 2025-10-03
Updated: 2025-10-17 (refactor: use CatalogService for data access)
"""
import math
import re
from decimal import Decimal
from fastapi import APIRouter, Depends
from typing import Optional, List, Union
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from storefront.core.database import Database, get_database
from storefront.core.errors import ValidationError
from storefront.domain.product import Product, ProductCreate
from storefront.services.catalog_service import CatalogService

router = APIRouter()


# Request models
class ProductCreateRequest(BaseModel):
    name: Optional[str] = None
    price: Optional[Union[Decimal, str]] = None
    description: Optional[str] = None
    stock: Optional[Union[int, float, str]] = None
    image: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Buckets",
                "price": 29.99,
                "description": "Amazon S3 Buckets for scalable storage",
                "stock": 50
            }
        }


# Numeric prefix of a submitted string: "29.99 USD" -> 29.99, "7abc" -> 7
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def _parse_price(value: Union[Decimal, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    match = _LEADING_NUMBER.match(value)
    if not match:
        raise ValidationError("Invalid product: price must be a number")
    return Decimal(match.group(1))


def _parse_stock(value: Union[int, float, str]) -> int:
    """Integer part of the submitted stock, so 5.5 and "5.5" both give 5"""
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Invalid product: stock must be a number")
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INTEGER.match(value)
    if not match:
        raise ValidationError("Invalid product: stock must be a number")
    return int(match.group(1))


# Dependency: Get catalog service
def get_catalog_service(db: Database = Depends(get_database)) -> CatalogService:
    return CatalogService(db)


@router.get("", response_model=List[Product])
def get_products(service: CatalogService = Depends(get_catalog_service)):
    """Get all products, most recently created first"""
    return service.list_products()


@router.post("", response_model=Product, status_code=201)
def create_product(
    request: ProductCreateRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Create a product

    name, price, description and stock are required; image falls back to
    the placeholder.
    """
    if not request.name or request.price is None or request.description is None or request.stock is None:
        raise ValidationError("All fields are required")

    fields = {
        "name": request.name,
        "price": _parse_price(request.price),
        "description": request.description,
        "stock": _parse_stock(request.stock),
    }
    if request.image:
        fields["image"] = request.image

    try:
        product = ProductCreate(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid product: {e.errors()[0]['msg']}") from e

    return service.create_product(product)


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """Delete a product. Existing orders keep their line item snapshots."""
    service.delete_product(product_id)
    return {"message": "Product deleted successfully"}
