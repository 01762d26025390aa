"""Product table: filter, sort and paginate the in-memory product list.

Everything here is a pure function of (products, query), so the table can be
recomputed for every request without touching the catalog source twice.
"""
import math
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from stocker.constants import AvailabilityStatus, PriceRange, SortKey, StockFilter
from stocker.schemas import Product, TablePage, TableQuery, TableRow

ITEMS_PER_PAGE = 15

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def matches_search(product: Product, term: str) -> bool:
    term = (term or "").strip().lower()
    if not term:
        return True
    return (
        term in product.title.lower()
        or term in product.brand.lower()
        or term in product.sku.lower()
    )


def matches_category(product: Product, category: str) -> bool:
    return not category or category == "all" or product.category == category


def matches_stock(product: Product, stock: StockFilter) -> bool:
    status = product.availabilityStatus
    if stock == StockFilter.IN_STOCK:
        return product.stock > 0 and status == AvailabilityStatus.IN_STOCK.value
    if stock == StockFilter.LOW_STOCK:
        return status == AvailabilityStatus.LOW_STOCK.value
    if stock == StockFilter.OUT_OF_STOCK:
        return status == AvailabilityStatus.OUT_OF_STOCK.value
    return True


def matches_price(product: Product, price: PriceRange) -> bool:
    p = product.price
    if price == PriceRange.UNDER_50:
        return p < 50
    if price == PriceRange.FROM_50_TO_100:
        return 50 <= p <= 100
    if price == PriceRange.FROM_100_TO_500:
        return 100 < p <= 500
    if price == PriceRange.OVER_500:
        return p > 500
    return True


def filter_products(products: List[Product], query: TableQuery) -> List[Product]:
    return [
        p for p in products
        if matches_search(p, query.search)
        and matches_category(p, query.category)
        and matches_stock(p, query.stock)
        and matches_price(p, query.price)
    ]


def _created_at(product: Product) -> datetime:
    raw = product.meta.createdAt
    if not raw:
        return _EPOCH
    try:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# key function + descending flag per sort option
_SORTS: Dict[SortKey, tuple[Callable[[Product], object], bool]] = {
    SortKey.TITLE: (lambda p: p.title.casefold(), False),
    SortKey.PRICE_LOW: (lambda p: p.price, False),
    SortKey.PRICE_HIGH: (lambda p: p.price, True),
    SortKey.RATING_HIGH: (lambda p: p.rating, True),
    SortKey.RATING_LOW: (lambda p: p.rating, False),
    SortKey.STOCK_HIGH: (lambda p: p.stock, True),
    SortKey.STOCK_LOW: (lambda p: p.stock, False),
    SortKey.DISCOUNT: (lambda p: p.discountPercentage, True),
    SortKey.NEWEST: (_created_at, True),
    SortKey.WEIGHT: (lambda p: p.weight, True),
}


def sort_products(products: List[Product], sort: SortKey) -> List[Product]:
    """Single-key sort; ties keep their original order (sorted() is stable, also with reverse)."""
    key, descending = _SORTS.get(sort, _SORTS[SortKey.TITLE])
    return sorted(products, key=key, reverse=descending)


def total_pages(count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    return math.ceil(count / page_size)


def paginate(items: List[Product], page: int, page_size: int = ITEMS_PER_PAGE) -> List[Product]:
    start = (page - 1) * page_size
    return items[start:start + page_size]


def page_window(current: int, total: int) -> List[Optional[int]]:
    """Page buttons: first, last and current±1, with None for the ellipsis at current±2."""
    window: List[Optional[int]] = []
    for page in range(1, total + 1):
        if page == 1 or page == total or current - 1 <= page <= current + 1:
            window.append(page)
        elif page == current - 2 or page == current + 2:
            window.append(None)
    return window


def stock_label(product: Product) -> str:
    if product.availabilityStatus == AvailabilityStatus.OUT_OF_STOCK.value:
        return AvailabilityStatus.OUT_OF_STOCK.value
    if product.availabilityStatus == AvailabilityStatus.LOW_STOCK.value:
        return AvailabilityStatus.LOW_STOCK.value
    return AvailabilityStatus.IN_STOCK.value


def discounted_price(price: float, discount: float) -> float:
    return price - (price * discount / 100)


def categories(products: List[Product]) -> List[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in products))


def build_table_page(products: List[Product], query: TableQuery) -> TablePage:
    rows = sort_products(filter_products(products, query), query.sort)
    pages = total_pages(len(rows))
    current = paginate(rows, query.page)
    start = (query.page - 1) * ITEMS_PER_PAGE

    return TablePage(
        rows=[
            TableRow(
                product=p,
                stock_label=stock_label(p),
                discounted_price=round(discounted_price(p.price, p.discountPercentage), 2),
            )
            for p in current
        ],
        categories=categories(products),
        page=query.page,
        page_size=ITEMS_PER_PAGE,
        total_pages=pages,
        total_items=len(rows),
        showing_from=start + 1 if current else 0,
        showing_to=start + len(current) if current else 0,
        page_window=page_window(query.page, pages),
    )
