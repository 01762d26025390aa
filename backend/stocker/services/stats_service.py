from collections import defaultdict
from typing import Dict, List

from stocker.schemas import Product
from stocker.utils.logger import get_logger

logger = get_logger("stats_service")

CHART_COLORS = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#06B6D4", "#84CC16", "#F97316"]
HOME_COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6"]

PRICE_RANGES = [
    {"range": "$0-$10", "min": 0, "max": 10},
    {"range": "$10-$50", "min": 10, "max": 50},
    {"range": "$50-$100", "min": 50, "max": 100},
    {"range": "$100-$500", "min": 100, "max": 500},
    {"range": "$500+", "min": 500, "max": float("inf")},
]
RATING_RANGES = [
    {"range": "4.5-5.0", "min": 4.5, "max": 5.0},
    {"range": "4.0-4.5", "min": 4.0, "max": 4.5},
    {"range": "3.5-4.0", "min": 3.5, "max": 4.0},
    {"range": "3.0-3.5", "min": 3.0, "max": 3.5},
    {"range": "0-3.0", "min": 0, "max": 3.0},
]

# No order history exists: these series are illustrative figures for the charts
MONTHLY_TRENDS = [
    {"month": "Jan", "products": 45, "revenue": 12000, "orders": 89},
    {"month": "Feb", "products": 52, "revenue": 15000, "orders": 112},
    {"month": "Mar", "products": 61, "revenue": 18000, "orders": 145},
    {"month": "Apr", "products": 58, "revenue": 22000, "orders": 167},
    {"month": "May", "products": 65, "revenue": 25000, "orders": 198},
    {"month": "Jun", "products": 72, "revenue": 28000, "orders": 234},
    {"month": "Jul", "products": 75, "revenue": 31000, "orders": 250},
]
SALES_SERIES = [
    {"name": "Jan", "value": 2400},
    {"name": "Feb", "value": 1398},
    {"name": "Mar", "value": 4200},
    {"name": "Apr", "value": 3908},
    {"name": "May", "value": 4800},
    {"name": "Jun", "value": 3800},
    {"name": "Jul", "value": 4300},
]
RECENT_ORDERS = [
    {"id": "ORD-001", "customer": "John Doe", "amount": 250.00, "status": "Completed"},
    {"id": "ORD-002", "customer": "Jane Smith", "amount": 180.00, "status": "Pending"},
    {"id": "ORD-003", "customer": "Mike Johnson", "amount": 320.00, "status": "Processing"},
    {"id": "ORD-004", "customer": "Sarah Wilson", "amount": 95.00, "status": "Completed"},
]

ANALYTICS_LOW_STOCK = 10
HOME_LOW_STOCK = 20
TOP_RATED_MIN = 4.5
TOP_N = 5
TOP_BRANDS_N = 8


def _avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percentage(count: int, total: int) -> float:
    return (count / total) * 100 if total else 0.0


def _capped(score: float) -> float:
    return round(max(0.0, min(score, 100.0)), 2)


def get_overview(products: List[Product]) -> Dict:
    """Headline metrics for the analytics page."""
    low_stock = [p for p in products if p.stock < ANALYTICS_LOW_STOCK]
    return {
        "total_products": len(products),
        "total_value": round(sum(p.price * p.stock for p in products), 2),
        "average_rating": round(_avg([p.rating for p in products]), 2),
        "average_discount": round(_avg([p.discountPercentage for p in products]), 2),
        "low_stock_count": len(low_stock),
        "low_stock_products": [p.model_dump() for p in low_stock[:TOP_N]],
    }


def category_distribution(products: List[Product]) -> List[Dict]:
    """Count and share per category, largest first (ties keep first-seen order)."""
    counts: Dict[str, int] = defaultdict(int)
    for p in products:
        counts[p.category] += 1
    rows = [
        {"name": category, "value": count, "percentage": round(_percentage(count, len(products)), 2)}
        for category, count in counts.items()
    ]
    return sorted(rows, key=lambda r: r["value"], reverse=True)


def top_brands(products: List[Product], limit: int = TOP_BRANDS_N) -> List[Dict]:
    counts: Dict[str, int] = defaultdict(int)
    for p in products:
        if p.brand:
            counts[p.brand] += 1
    rows = [{"name": brand, "value": count} for brand, count in counts.items()]
    return sorted(rows, key=lambda r: r["value"], reverse=True)[:limit]


def distribution(products: List[Product], ranges: List[Dict], field: str) -> List[Dict]:
    """Histogram over fixed [min, max) buckets.

    The bucket reaching the table's overall maximum also takes values equal
    to it, so a 5.0 rating lands in "4.5-5.0".
    """
    top = max(r["max"] for r in ranges)
    result = []
    for r in ranges:
        count = 0
        for p in products:
            value = getattr(p, field)
            if r["min"] <= value < r["max"] or (r["max"] == top and value == top):
                count += 1
        result.append({
            "name": r["range"],
            "value": count,
            "percentage": round(_percentage(count, len(products)), 2),
        })
    return result


def performance_scores(products: List[Product]) -> List[Dict]:
    """Radar chart axes, each normalized to 0-100 and capped."""
    total = len(products)
    low_stock = sum(1 for p in products if p.stock < ANALYTICS_LOW_STOCK)
    category_count = len({p.category for p in products})
    brand_count = len(top_brands(products))
    avg_rating = _avg([p.rating for p in products])
    avg_discount = _avg([p.discountPercentage for p in products])

    axes = [
        ("Quality", avg_rating * 20),
        ("Variety", (category_count / 10) * 100),
        ("Stock Health", _percentage(total - low_stock, total)),
        ("Value for Money", (avg_discount / 20) * 100),
        ("Brand Diversity", (brand_count / 15) * 100),
    ]
    return [{"subject": subject, "score": _capped(score), "full_mark": 100} for subject, score in axes]


def top_rated(products: List[Product], limit: int = TOP_N) -> List[Product]:
    rated = [p for p in products if p.rating >= TOP_RATED_MIN]
    return sorted(rated, key=lambda p: p.rating, reverse=True)[:limit]


def highly_discounted(products: List[Product], limit: int = TOP_N) -> List[Product]:
    discounted = [p for p in products if p.discountPercentage > 0]
    return sorted(discounted, key=lambda p: p.discountPercentage, reverse=True)[:limit]


def top_priced(products: List[Product], limit: int = TOP_N) -> List[Product]:
    return sorted(products, key=lambda p: p.price, reverse=True)[:limit]


def build_insights(overview: Dict, categories: List[Dict]) -> List[Dict]:
    insights = []
    if categories:
        leader = categories[0]
        insights.append({
            "kind": "top_category",
            "title": "Top Category",
            "description": (
                f"{leader['name']} ({leader['value']} products) is your leading category. "
                "Focus marketing efforts here."
            ),
        })
    if overview["average_rating"] > 0:
        insights.append({
            "kind": "quality",
            "title": "Quality Assurance",
            "description": (
                f"Your products maintain a strong average rating of {overview['average_rating']:.1f}. "
                "Leverage this in promotions."
            ),
        })
    if overview["low_stock_count"] > 0:
        insights.append({
            "kind": "low_stock",
            "title": "Action Needed: Low Stock",
            "description": (
                f"{overview['low_stock_count']} products are currently low on stock and require "
                "immediate attention to prevent lost sales."
            ),
        })
    if overview["average_discount"] > 0:
        insights.append({
            "kind": "discount",
            "title": "Discount Strategy",
            "description": (
                f"An average discount of {overview['average_discount']:.1f}% is applied across products. "
                "Review if this aligns with profit goals."
            ),
        })
    return insights


def get_analytics_stats(products: List[Product]) -> Dict:
    """Everything the analytics page charts, from one product list."""
    overview = get_overview(products)
    categories = category_distribution(products)
    for i, row in enumerate(categories):
        row["color"] = CHART_COLORS[i % len(CHART_COLORS)]

    logger.debug(f"Analytics computed for {len(products)} products")
    return {
        "overview": overview,
        "category_distribution": categories,
        "top_brands": top_brands(products),
        "price_distribution": distribution(products, PRICE_RANGES, "price"),
        "rating_distribution": distribution(products, RATING_RANGES, "rating"),
        "performance": performance_scores(products),
        "top_rated": [p.model_dump() for p in top_rated(products)],
        "highly_discounted": [p.model_dump() for p in highly_discounted(products)],
        "top_priced": [p.model_dump() for p in top_priced(products)],
        "insights": build_insights(overview, categories),
        "monthly_trends": MONTHLY_TRENDS,
    }


def get_home_stats(products: List[Product]) -> Dict:
    """Home page counters and charts. Sales figures assume a nominal stock of 100 per item."""
    if not products:
        return {
            "counters": {"products": 0, "categories": 0, "low_stock": 0, "total_sales": 0, "revenue": 0},
            "sales": [],
            "categories": [],
            "recent_orders": RECENT_ORDERS,
        }

    counts: Dict[str, int] = defaultdict(int)
    for p in products:
        counts[p.category] += 1

    counters = {
        "products": len(products),
        "categories": len(counts),
        "low_stock": sum(1 for p in products if p.stock < HOME_LOW_STOCK),
        "total_sales": sum(100 - p.stock for p in products),
        "revenue": round(sum(p.price * (100 - p.stock) for p in products)),
    }
    category_share = [
        {
            "name": category[:1].upper() + category[1:],
            "value": count,
            "color": HOME_COLORS[i % len(HOME_COLORS)],
        }
        for i, (category, count) in enumerate(counts.items())
    ]
    return {
        "counters": counters,
        "sales": SALES_SERIES,
        "categories": category_share,
        "recent_orders": RECENT_ORDERS,
    }
