from typing import Optional

from fastapi import APIRouter, Query

from stocker.constants import ToastVariant
from stocker.deps import CatalogSource
from stocker.schemas import ProductList
from stocker.services.notification_service import bus
from stocker.services.product_source import ProductSource, ProductSourceError

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductList)
async def route_list_products(
    limit: Optional[int] = Query(None, ge=0, description="Page size; omitted = source default, 0 = all"),
    skip: int = Query(0, ge=0, description="Number of products to skip"),
    source: ProductSource = CatalogSource,
):
    """One page of the product catalog in a stable {products, total, skip, limit} envelope."""
    try:
        result = await source.list(limit=limit, skip=skip)
    except ProductSourceError as e:
        bus.notify("Error", str(e), ToastVariant.DESTRUCTIVE)
        raise
    bus.notify("Success", f"Loaded {len(result.products)} products")
    return result
