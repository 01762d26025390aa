from typing import List

from fastapi import APIRouter, Query

from stocker.config import get_settings
from stocker.constants import PriceRange, SortKey, StockFilter
from stocker.deps import CatalogSource, CurrentEmail
from stocker.schemas import Product, TablePage, TableQuery
from stocker.services.product_source import ProductSource
from stocker.services.product_table_service import build_table_page
from stocker.services.stats_service import get_analytics_stats, get_home_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


async def _load_products(source: ProductSource) -> List[Product]:
    settings = get_settings()
    result = await source.list(limit=settings.DASHBOARD_PRODUCTS_LIMIT)
    return result.products


@router.get("/home")
async def dashboard_home(email: str = CurrentEmail, source: ProductSource = CatalogSource):
    """Home page counters, sales series and category share."""
    products = await _load_products(source)
    return {"user_email": email, **get_home_stats(products)}


@router.get("/products", response_model=TablePage)
async def dashboard_products(
    search: str = Query("", description="Matches title, brand or SKU (case-insensitive)"),
    category: str = Query("all"),
    stock: StockFilter = Query(StockFilter.ALL),
    price: PriceRange = Query(PriceRange.ALL),
    sort: SortKey = Query(SortKey.TITLE),
    page: int = Query(1, ge=1),
    email: str = CurrentEmail,
    source: ProductSource = CatalogSource,
):
    products = await _load_products(source)
    query = TableQuery(search=search, category=category, stock=stock, price=price, sort=sort, page=page)
    return build_table_page(products, query)


@router.get("/analytics")
async def dashboard_analytics(email: str = CurrentEmail, source: ProductSource = CatalogSource):
    """Chart data for the analytics page."""
    products = await _load_products(source)
    return get_analytics_stats(products)
