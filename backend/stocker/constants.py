from enum import Enum


class ProductSourceKind(str, Enum):
    """Backends able to serve the product catalog."""
    REMOTE = "remote"  # upstream HTTP API (dummyjson compatible)
    STATIC = "static"  # local JSON fixture


class AvailabilityStatus(str, Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


class StockFilter(str, Enum):
    ALL = "all"
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class PriceRange(str, Enum):
    ALL = "all"
    UNDER_50 = "under-50"
    FROM_50_TO_100 = "50-100"
    FROM_100_TO_500 = "100-500"
    OVER_500 = "over-500"


class SortKey(str, Enum):
    """Product table sort options (single active key)."""
    TITLE = "title"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING_HIGH = "rating-high"
    RATING_LOW = "rating-low"
    STOCK_HIGH = "stock-high"
    STOCK_LOW = "stock-low"
    DISCOUNT = "discount"
    NEWEST = "newest"
    WEIGHT = "weight"


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"
