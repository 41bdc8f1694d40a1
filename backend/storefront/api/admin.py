"""
Admin API - Store overview for the admin page

Author: TM3
Date: 2025-11-12
"""
from fastapi import APIRouter, Depends
from typing import List
from pydantic import BaseModel

from storefront.api.products import get_catalog_service
from storefront.domain.order import Order
from storefront.domain.product import Product
from storefront.services.catalog_service import CatalogService

router = APIRouter()


class AdminOverview(BaseModel):
    products: List[Product]
    orders: List[Order]


@router.get("/overview", response_model=AdminOverview)
def get_overview(service: CatalogService = Depends(get_catalog_service)):
    """
    Products and orders for the admin page

    Both lists are most recent first.
    """
    return service.admin_overview()
