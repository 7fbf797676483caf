"""Pydantic request/response schemas for the Storefront API.

Bodies use camelCase on the wire. Models also accept snake_case field
names so tests and internal callers can build them directly.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


# --- Users ---


class RegisterRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "123456",
                    "phone": "555-0100",
                }
            ]
        },
    )

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6)
    phone: str | None = Field(None, max_length=30)


class LoginRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    phone: str | None = Field(None, max_length=30)
    password: str | None = Field(None, min_length=6)


class AdminUpdateUserRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    role: str | None = None


class AddressRequest(CamelModel):
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    is_default: bool = False


class UpdateAddressRequest(CamelModel):
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    is_default: bool | None = None


class WishlistRequest(CamelModel):
    product_id: str


class AddressResponse(CamelModel):
    id: str
    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str
    is_default: bool = False


class AuthResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    phone: str | None = None
    token: str


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    phone: str | None = None
    addresses: list[AddressResponse] = []
    wishlist: list[str] = []
    created_at: datetime | None = None


class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    role: str


class UserListResponse(CamelModel):
    users: list[UserSummary]
    page: int
    pages: int
    total_users: int


class AddressesResponse(CamelModel):
    addresses: list[AddressResponse]


class WishlistResponse(CamelModel):
    wishlist: list[str]


# --- Categories ---


class CreateCategoryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class CategoryResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
    image: str | None = None
    is_active: bool = True
    created_at: datetime | None = None


class CategoryRef(CamelModel):
    id: str
    name: str | None = None


# --- Products ---


class CreateProductRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "description": "Over-ear, noise cancelling.",
                    "price": 199.99,
                    "image": "/images/headphones.jpg",
                    "brand": "Acme Audio",
                    "category": "cat-electronics-001",
                    "stock": 25,
                    "features": ["Bluetooth 5.3", "30h battery"],
                    "specifications": {"weight": "250g"},
                    "isFeatured": True,
                }
            ]
        },
    )

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    image: str = Field(..., max_length=500)
    brand: str | None = Field(None, max_length=100)
    category: str
    stock: int = Field(0, ge=0)
    features: list[str] | None = None
    specifications: dict[str, str] | None = None
    is_featured: bool = False


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    image: str | None = Field(None, max_length=500)
    brand: str | None = Field(None, max_length=100)
    category: str | None = None
    features: list[str] | None = None
    specifications: dict[str, str] | None = None
    is_featured: bool | None = None


class RestockRequest(CamelModel):
    quantity: int = Field(..., ge=1)


class ReviewRequest(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


class ReviewResponse(CamelModel):
    id: str
    user: str
    name: str
    rating: int
    comment: str
    created_at: datetime | None = None


class ProductResponse(CamelModel):
    id: str
    name: str
    description: str
    price: float
    image: str
    brand: str | None = None
    category: CategoryRef
    stock: int
    rating: float = 0.0
    num_reviews: int = 0
    reviews: list[ReviewResponse] = []
    features: list[str] = []
    specifications: dict[str, str] = {}
    is_featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(CamelModel):
    products: list[ProductResponse]
    page: int
    pages: int
    total_products: int


class StockResponse(CamelModel):
    id: str
    stock: int


# --- Orders ---


class OrderItemRequest(CamelModel):
    product: str
    quantity: int = Field(..., ge=1)
    price: float | None = Field(None, ge=0)
    name: str | None = None


class ShippingAddressSchema(CamelModel):
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)


class PlaceOrderRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "orderItems": [{"product": "prod-001", "quantity": 2, "price": 50.0}],
                    "shippingAddress": {
                        "street": "1 Main St",
                        "city": "Springfield",
                        "postalCode": "12345",
                        "country": "US",
                    },
                    "paymentMethod": "PayPal",
                    "itemsPrice": 100.0,
                    "taxPrice": 10.0,
                    "shippingPrice": 5.0,
                    "totalPrice": 115.0,
                }
            ]
        },
    )

    order_items: list[OrderItemRequest] = []
    shipping_address: ShippingAddressSchema
    payment_method: str = Field(..., max_length=50)
    items_price: float = Field(0.0, ge=0)
    tax_price: float = Field(0.0, ge=0)
    shipping_price: float = Field(0.0, ge=0)
    total_price: float = Field(0.0, ge=0)


class Payer(BaseModel):
    email_address: str | None = None


class PaymentResultRequest(BaseModel):
    """Payment gateway callback; keys are kept exactly as the gateway sends them."""

    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    payer: Payer = Payer()


class OrderStatusRequest(CamelModel):
    status: str


class PaymentResultResponse(BaseModel):
    id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None


class OrderItemResponse(CamelModel):
    id: str
    product: str
    name: str
    quantity: int
    price: float


class OrderUser(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None


class OrderResponse(CamelModel):
    id: str
    user: OrderUser
    order_items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str
    items_price: float
    tax_price: float
    shipping_price: float
    total_price: float
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_result: PaymentResultResponse | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(CamelModel):
    orders: list[OrderResponse]
    page: int
    pages: int
    total_orders: int


class DailySales(CamelModel):
    date: str
    sales: float
    orders: int


class StatusCount(CamelModel):
    status: str
    count: int


class OrderStatsResponse(CamelModel):
    total_orders: int
    total_sales: float
    daily_sales: list[DailySales]
    status_counts: list[StatusCount]
