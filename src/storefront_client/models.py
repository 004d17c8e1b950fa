"""
storefront_client.models

Wire models for the storefront REST contract.

Responsibilities:
- Parse server payloads (catalog, cart, orders, auth) into typed values.
- Keep prices as `Decimal` and identifiers as strings.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront_client.auth.models import Principal


class WireModel(BaseModel):
    # Servers commonly send integer ids; the client treats every id as an opaque string.
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


class Category(WireModel):
    id: str
    name: str


class Product(WireModel):
    """Product snapshot as served by the catalog (and denormalized into cart lines)."""

    id: str
    title: str
    price: Decimal = Decimal("0")
    images: list[str] = Field(default_factory=list)
    stock: int = 0
    category: Category | None = None
    sku: str | None = None
    description: str | None = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class CartLineItem(WireModel):
    id: str
    product: Product
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class CartPayload(WireModel):
    """`GET /api/cart` body; only `items` is authoritative on the client."""

    items: list[CartLineItem] = Field(default_factory=list)


class OrderItem(WireModel):
    product_id: str
    title: str
    price: Decimal
    quantity: int


class ShippingAddress(WireModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "United States"


class Order(WireModel):
    id: str
    status: str = "pending"
    subtotal: Decimal = Decimal("0")
    shipping_cost: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    created_at: datetime | None = None
    items: list[OrderItem] = Field(default_factory=list)
    shipping: ShippingAddress | None = None
    notes: str | None = None

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)


class UserPayload(WireModel):
    id: str
    name: str = ""
    email: str
    role: str = "user"

    def to_principal(self) -> Principal:
        return Principal(id=self.id, name=self.name, email=self.email, role=self.role)


class AuthResponse(WireModel):
    access_token: str = Field(min_length=1)
    token_type: str = "bearer"
    user: UserPayload


def parse_products(payload: Any) -> list[Product]:
    # Listing endpoints return bare JSON arrays.
    return [Product.model_validate(p) for p in (payload or [])]


# --- Module Notes -----------------------------------------------------------
# Models are parsed at the request-layer boundary; stores never see raw dicts.
