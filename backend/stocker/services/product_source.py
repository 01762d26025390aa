import json
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from stocker.config import get_settings
from stocker.constants import ProductSourceKind
from stocker.schemas import Product, ProductList
from stocker.utils.logger import get_logger

logger = get_logger("product_source")

BUNDLED_PRODUCTS_FILE = Path(__file__).resolve().parents[1] / "data" / "products.json"


class ProductSourceError(RuntimeError):
    pass


def _window(items: List[Any], *, skip: int, limit: Optional[int]) -> List[Any]:
    """Apply skip then limit; limit None or 0 keeps everything after skip."""
    items = items[skip:]
    if limit:
        items = items[:limit]
    return items


def _envelope(raw_products: List[Any], *, total: int, skip: int, limit: int) -> ProductList:
    try:
        products = [Product.model_validate(p) for p in raw_products]
    except ValidationError as e:
        raise ProductSourceError(f"Malformed product payload: {e.error_count()} invalid field(s)") from e
    return ProductList(products=products, total=total, skip=skip, limit=limit)


class ProductSource:
    """Paginated read access to the product catalog."""

    async def list(self, *, limit: Optional[int] = None, skip: int = 0) -> ProductList:
        raise NotImplementedError


class RemoteProductSource(ProductSource):
    """dummyjson-compatible HTTP API (`GET <url>?limit=&skip=`)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        default_limit: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_limit = default_limit
        self._transport = transport

    async def _fetch(self, params: dict) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise ProductSourceError(f"Failed to fetch products: {e}") from e

        if resp.status_code >= 400:
            raise ProductSourceError(
                f"Failed to fetch products: {resp.status_code} {resp.reason_phrase}"
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise ProductSourceError("Failed to fetch products: response is not JSON") from e
        if not isinstance(data, dict):
            raise ProductSourceError("Failed to fetch products: unexpected payload")
        return data

    async def list(self, *, limit: Optional[int] = None, skip: int = 0) -> ProductList:
        effective_limit = self.default_limit if limit is None else limit
        data = await self._fetch({"limit": effective_limit, "skip": skip})

        raw = data.get("products") or []
        if not isinstance(raw, list):
            raise ProductSourceError("Failed to fetch products: 'products' is not a list")

        # Upstream echoes skip when it applied it; otherwise page locally
        upstream_skipped = "skip" in data
        received = len(raw)
        raw = _window(raw, skip=0 if upstream_skipped else skip, limit=effective_limit)

        total = data.get("total") or (received + skip if upstream_skipped else received)
        echoed_limit = limit if limit is not None else (data.get("limit") or len(raw))
        return _envelope(raw, total=int(total), skip=skip, limit=int(echoed_limit))


class StaticProductSource(ProductSource):
    """Products read from a local JSON file (a list, or an object with a 'products' list)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._items: List[Any] | None = None

    def _load(self) -> List[Any]:
        if self._items is None:
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise ProductSourceError(f"Failed to load products from {self.path.name}: {e}") from e
            if isinstance(data, dict):
                data = data.get("products")
            if not isinstance(data, list):
                raise ProductSourceError(f"Failed to load products from {self.path.name}: no product list")
            self._items = data
            logger.info(f"Loaded {len(data)} products from {self.path}")
        return self._items

    async def list(self, *, limit: Optional[int] = None, skip: int = 0) -> ProductList:
        items = self._load()
        window = _window(items, skip=skip, limit=limit)
        return _envelope(
            window,
            total=len(items),
            skip=skip,
            limit=limit if limit is not None else len(window),
        )


def build_product_source(kind: str) -> ProductSource:
    settings = get_settings()
    try:
        kind = ProductSourceKind((kind or "").lower())
    except ValueError:
        raise ValueError(f"Unknown PRODUCT_SOURCE: {kind!r} (expected 'remote' or 'static')")

    if kind == ProductSourceKind.STATIC:
        return StaticProductSource(settings.PRODUCTS_FILE or BUNDLED_PRODUCTS_FILE)
    return RemoteProductSource(
        settings.PRODUCTS_API_URL,
        timeout=settings.PRODUCTS_API_TIMEOUT,
        default_limit=settings.PRODUCTS_DEFAULT_LIMIT,
    )


@lru_cache()
def get_product_source() -> ProductSource:
    """Process-wide product source chosen by PRODUCT_SOURCE."""
    return build_product_source(get_settings().PRODUCT_SOURCE)
