# shophub/domain/schemas.py
import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def check_password_strength(v: str) -> str:
    if not (re.search(r"[a-z]", v) and re.search(r"[A-Z]", v) and re.search(r"\d", v)):
        raise ValueError(
            "Password must contain at least one lowercase letter, one uppercase letter, and one number"
        )
    return v


# =====================================================
# AUTH
# =====================================================
class UserRegister(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    user: UserRead
    token: str


class MessageOut(BaseModel):
    status: str = "success"
    message: str


# =====================================================
# CATALOG
# =====================================================
class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    product_count: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryListOut(BaseModel):
    categories: List[CategoryOut]
    count: int


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    long_description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    rating: Decimal
    stock: int
    brand: Optional[str] = None
    features: List[str] = []
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None


class ProductPagination(BaseModel):
    current_page: int
    total_pages: int
    total_products: int
    products_per_page: int
    has_next: bool
    has_prev: bool


class ProductFilters(BaseModel):
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort_by: str
    sort_order: str
    search: Optional[str] = None


class ProductListOut(BaseModel):
    products: List[ProductOut]
    pagination: ProductPagination
    filters: Optional[ProductFilters] = None


class ProductDetailOut(BaseModel):
    product: ProductOut
    related_products: List[ProductOut]


class CategoryProductsOut(BaseModel):
    category: CategoryOut
    products: List[ProductOut]
    pagination: ProductPagination


class SearchOut(BaseModel):
    query: str
    products: List[ProductOut]
    pagination: ProductPagination


class FeaturedOut(BaseModel):
    products: List[ProductOut]
    count: int


class Suggestion(BaseModel):
    type: str
    id: int
    name: str
    price: Optional[Decimal] = None
    image_url: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None


class SuggestionsOut(BaseModel):
    suggestions: List[Suggestion]
    count: int


class StatsOut(BaseModel):
    total_products: int
    total_categories: int
    total_users: int


class Promotion(BaseModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    button_text: Optional[str] = None
    button_link: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None


class PromotionsOut(BaseModel):
    promotions: List[Promotion]
    count: int


class HomeMeta(BaseModel):
    total_products: int
    total_categories: int
    total_promotions: int


class HomeDataOut(BaseModel):
    featured_products: List[ProductOut]
    categories: List[CategoryOut]
    promotions: List[Promotion]
    meta: HomeMeta


# =====================================================
# CART
# =====================================================
class CartAddIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(1, ge=1, description="Ilosc produktu (co najmniej 1)")


class QuantityIn(BaseModel):
    quantity: int = Field(..., ge=1, description="Nowa ilosc (co najmniej 1)")


class CartLineOut(BaseModel):
    line_id: int
    product_id: int
    quantity: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    stock: int
    brand: Optional[str] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    line_total: Decimal
    added_at: datetime


class CartSummaryOut(BaseModel):
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    shipping_cost: Decimal
    total: Decimal
    item_count: int
    total_quantity: int


class CartOut(BaseModel):
    items: List[CartLineOut]
    summary: CartSummaryOut


class CartLineResultOut(BaseModel):
    message: str
    cart_item: CartLineOut


# =====================================================
# CHECKOUT / ORDERS
# =====================================================
class ShippingAddress(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(str_strip_whitespace=True)


class CheckoutIn(BaseModel):
    shipping_address: ShippingAddress


class OrderOut(BaseModel):
    id: int
    order_number: str
    user_id: Optional[int] = None
    status: str
    total_amount: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    shipping_address: ShippingAddress
    item_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class CheckoutOut(BaseModel):
    message: str
    order: OrderOut
    order_number: str
    estimated_delivery: date


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    brand: Optional[str] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None


class OrderDetailOut(BaseModel):
    order: OrderOut
    items: List[OrderItemOut]
    order_number: str


class OrderPagination(BaseModel):
    current_page: int
    total_pages: int
    total_orders: int
    orders_per_page: int
    has_next: bool
    has_prev: bool


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    pagination: OrderPagination


class ShippingInfo(BaseModel):
    free_shipping_threshold: Decimal
    standard_shipping_cost: Decimal
    estimated_delivery_days: int
    return_policy_days: int


class CheckoutSummaryOut(BaseModel):
    cart_summary: CartSummaryOut
    shipping_info: ShippingInfo


# =====================================================
# HEALTH
# =====================================================
class HealthOut(BaseModel):
    service: str
    status: str
    timestamp: datetime
    version: str
    database: Optional[str] = None
