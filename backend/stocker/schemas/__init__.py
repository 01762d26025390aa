from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from stocker.constants import SortKey, StockFilter, PriceRange, ToastVariant

# -------------------- Auth Schemas --------------------


class OTPRequestIn(BaseModel):
    # Optional so a missing email surfaces as the 400 "Email is required"
    email: Optional[str] = None


class OTPVerifyIn(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None


class MessageOut(BaseModel):
    message: str


class TokenOut(MessageOut):
    token: str


class MeOut(BaseModel):
    email: str
    verified: bool
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

# -------------------- Product Schemas --------------------


class Dimensions(BaseModel):
    width: float = 0
    height: float = 0
    depth: float = 0


class Review(BaseModel):
    rating: float = 0
    comment: str = ""
    date: Optional[str] = None
    reviewerName: str = ""
    reviewerEmail: str = ""


class ProductMeta(BaseModel):
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    barcode: str = ""
    qrCode: str = ""


class Product(BaseModel):
    """Catalog item as served by the upstream source.

    Wire names stay camelCase. Fields the source omits (brand is missing on
    groceries, for instance) fall back to neutral defaults so every product
    has the same shape.
    """

    id: int
    title: str = ""
    description: str = ""
    category: str = ""
    price: float = 0
    discountPercentage: float = 0
    rating: float = 0
    stock: int = 0
    tags: List[str] = Field(default_factory=list)
    brand: str = ""
    sku: str = ""
    weight: float = 0
    dimensions: Optional[Dimensions] = None
    warrantyInformation: str = ""
    shippingInformation: str = ""
    availabilityStatus: str = ""
    reviews: List[Review] = Field(default_factory=list)
    returnPolicy: str = ""
    minimumOrderQuantity: int = 1
    meta: ProductMeta = Field(default_factory=ProductMeta)
    images: List[str] = Field(default_factory=list)
    thumbnail: str = ""

    class Config:
        extra = "ignore"

    @field_validator(
        "title", "description", "category", "brand", "sku",
        "warrantyInformation", "shippingInformation", "availabilityStatus",
        "returnPolicy", "thumbnail",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("price", "discountPercentage", "rating", "stock", "weight", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator("tags", "reviews", "images", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return [] if v is None else v

    @field_validator("meta", mode="before")
    @classmethod
    def _none_to_meta(cls, v):
        return {} if v is None else v


class ProductList(BaseModel):
    products: List[Product]
    total: int
    skip: int
    limit: int

# -------------------- Dashboard Schemas --------------------


class TableQuery(BaseModel):
    """Filter/sort/page state of the product table."""

    search: str = ""
    category: str = "all"
    stock: StockFilter = StockFilter.ALL
    price: PriceRange = PriceRange.ALL
    sort: SortKey = SortKey.TITLE
    page: int = Field(1, ge=1)


class TableRow(BaseModel):
    product: Product
    stock_label: str
    discounted_price: float


class TablePage(BaseModel):
    rows: List[TableRow]
    categories: List[str]
    page: int
    page_size: int
    total_pages: int
    total_items: int
    showing_from: int
    showing_to: int
    # page buttons; None marks an ellipsis
    page_window: List[Optional[int]]


# -------------------- Notification Schemas --------------------


class Toast(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    variant: ToastVariant = ToastVariant.DEFAULT
    open: bool = True
