"""
storefront_client.devserver.state

In-memory shop state behind the dev backend.

Responsibilities:
- Seed a small catalog and a demo account.
- Hold per-user carts, orders and single-use external sign-in codes.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from storefront_client.models import (
    CartLineItem,
    Category,
    Order,
    OrderItem,
    Product,
    ShippingAddress,
)
from storefront_client.services.pricing import PricingPolicy, compute_totals

DEMO_EMAIL = "user@example.com"
DEMO_PASSWORD = "user123"
DEMO_GOOGLE_CODE = "dev-google-code"


@dataclass(slots=True)
class UserRecord:
    id: str
    name: str
    email: str
    password: str
    role: str = "user"

    def public(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}


@dataclass(slots=True)
class CartLine:
    id: str
    product_id: str
    quantity: int


@dataclass(slots=True)
class OrderRecord:
    owner_id: str
    order: Order


@dataclass(slots=True)
class ShopState:
    categories: dict[str, Category] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    users: dict[str, UserRecord] = field(default_factory=dict)
    carts: dict[str, list[CartLine]] = field(default_factory=dict)
    orders: dict[str, OrderRecord] = field(default_factory=dict)
    oauth_codes: dict[str, str] = field(default_factory=dict)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    # -- users

    def user_by_email(self, email: str) -> UserRecord | None:
        wanted = email.strip().lower()
        return next((u for u in self.users.values() if u.email.lower() == wanted), None)

    def add_user(self, *, name: str, email: str, password: str, role: str = "user") -> UserRecord:
        user = UserRecord(
            id=self.next_id("u"), name=name, email=email, password=password, role=role
        )
        self.users[user.id] = user
        return user

    # -- cart

    def cart_for(self, user_id: str) -> list[CartLine]:
        return self.carts.setdefault(user_id, [])

    def cart_items(self, user_id: str) -> list[CartLineItem]:
        return [
            CartLineItem(id=line.id, product=self.products[line.product_id], quantity=line.quantity)
            for line in self.cart_for(user_id)
            if line.product_id in self.products
        ]

    def find_line(self, user_id: str, item_id: str) -> CartLine | None:
        return next((line for line in self.cart_for(user_id) if line.id == item_id), None)

    # -- orders

    def place_order(
        self,
        *,
        user_id: str,
        policy: PricingPolicy,
        shipping: ShippingAddress | None,
        notes: str | None,
    ) -> Order:
        items = self.cart_items(user_id)
        totals = compute_totals(items, policy)
        order = Order(
            id=self.next_id("o"),
            status="pending",
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            created_at=datetime.now(tz=UTC),
            items=[
                OrderItem(
                    product_id=i.product.id,
                    title=i.product.title,
                    price=i.product.price,
                    quantity=i.quantity,
                )
                for i in items
            ],
            shipping=shipping,
            notes=notes,
        )
        for i in items:
            product = self.products[i.product.id]
            self.products[product.id] = product.model_copy(
                update={"stock": max(0, product.stock - i.quantity)}
            )
        self.orders[order.id] = OrderRecord(owner_id=user_id, order=order)
        self.carts[user_id] = []
        return order

    def orders_for(self, user_id: str) -> list[Order]:
        owned = [r.order for r in self.orders.values() if r.owner_id == user_id]
        return list(reversed(owned))


def seeded_state() -> ShopState:
    state = ShopState()
    apparel = Category(id="c1", name="Apparel")
    home = Category(id="c2", name="Home")
    state.categories = {c.id: c for c in (apparel, home)}

    catalog = [
        Product(id="p1", title="Canvas Tote", price=Decimal("25.00"), stock=40, category=home,
                sku="TOTE-001", images=["https://img.example/tote.jpg"]),
        Product(id="p2", title="Linen Shirt", price=Decimal("75.00"), stock=12, category=apparel,
                sku="SHRT-002", images=["https://img.example/shirt-front.jpg",
                                        "https://img.example/shirt-back.jpg"]),
        Product(id="p3", title="Wool Scarf", price=Decimal("50.00"), stock=8, category=apparel,
                sku="SCRF-003"),
        Product(id="p4", title="Ceramic Vase", price=Decimal("120.00"), stock=5, category=home,
                sku="VASE-004"),
        Product(id="p5", title="Leather Belt", price=Decimal("40.00"), stock=0, category=apparel,
                sku="BELT-005"),
    ]
    state.products = {p.id: p for p in catalog}

    demo = state.add_user(name="Demo User", email=DEMO_EMAIL, password=DEMO_PASSWORD)
    state.oauth_codes[DEMO_GOOGLE_CODE] = demo.email
    return state


# --- Module Notes -----------------------------------------------------------
# Passwords are stored in clear text: this state never leaves the dev process.
