"""
Orders API Endpoints
Checkout and order history

Author: TM3
Date: 2025-10-03
Updated: 2025-10-17 (refactor: use OrderService for the checkout workflow)
"""
from fastapi import APIRouter, Depends
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.core.database import Database, get_database
from storefront.domain.order import Order, CustomerInfo
from storefront.services.order_service import OrderService, CartLine

router = APIRouter()


class PlaceOrderRequest(BaseModel):
    items: Optional[List[CartLine]] = None
    customer_info: Optional[CustomerInfo] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "items": [{"productId": "8c0f4c1e-5f0e-4a57-9a51-4a8d1f7e2b10", "quantity": 2}],
                "customerInfo": {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 Analytical St"}
            }
        }
    )


# Dependency: Get order service
def get_order_service(db: Database = Depends(get_database)) -> OrderService:
    return OrderService(db)


@router.post("", response_model=Order, status_code=201)
def place_order(
    request: PlaceOrderRequest,
    service: OrderService = Depends(get_order_service)
):
    """
    Place an order from the cart

    Verifies every product and its stock, records the customer and the
    order, and takes the ordered units out of stock. Nothing is written
    when any line fails.
    """
    return service.place_order(request.items, request.customer_info)


@router.get("", response_model=List[Order])
def get_orders(service: OrderService = Depends(get_order_service)):
    """Get all orders, most recent first"""
    return service.list_orders()
