"""
storefront_client.client.resources

Endpoint groups over the shared request layer.

Responsibilities:
- One method per REST endpoint (auth, products, categories, cart, orders).
- Parse responses into wire models.
"""

from __future__ import annotations

from typing import Any

from storefront_client.client.http import ApiClient
from storefront_client.models import (
    AuthResponse,
    CartLineItem,
    CartPayload,
    Category,
    Order,
    Product,
    UserPayload,
    parse_products,
)


class AuthAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def login(self, *, email: str, password: str) -> AuthResponse:
        # Public endpoint: never carries (or clears) an existing bearer token.
        data = await self._api.post(
            "/api/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        return AuthResponse.model_validate(data)

    async def register(self, *, name: str, email: str, password: str, role: str) -> UserPayload:
        data = await self._api.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
            authenticated=False,
        )
        return UserPayload.model_validate(data)

    async def me(self) -> UserPayload:
        return UserPayload.model_validate(await self._api.get("/api/auth/me"))

    async def google_callback(self, *, code: str) -> AuthResponse:
        data = await self._api.post(
            "/api/auth/google/callback",
            json={"code": code},
            authenticated=False,
        )
        return AuthResponse.model_validate(data)


class ProductsAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list(
        self, *, category_id: str | None = None, sort: str | None = None
    ) -> list[Product]:
        data = await self._api.get(
            "/api/products", params={"category_id": category_id, "sort": sort}
        )
        return parse_products(data)

    async def get(self, product_id: str) -> Product:
        return Product.model_validate(await self._api.get(f"/api/products/{product_id}"))

    async def related(self, product_id: str) -> list[Product]:
        return parse_products(await self._api.get(f"/api/productdetails/{product_id}/related"))


class CategoriesAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def list(self) -> list[Category]:
        return [Category.model_validate(c) for c in (await self._api.get("/api/categories") or [])]


class CartAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get(self) -> list[CartLineItem]:
        data = await self._api.get("/api/cart")
        return CartPayload.model_validate(data or {}).items

    async def add_item(self, *, product_id: str, quantity: int) -> None:
        await self._api.post(
            "/api/cart/items", json={"product_id": product_id, "quantity": quantity}
        )

    async def update_item(self, item_id: str, *, quantity: int) -> None:
        await self._api.put(f"/api/cart/items/{item_id}", json={"quantity": quantity})

    async def remove_item(self, item_id: str) -> None:
        await self._api.delete(f"/api/cart/items/{item_id}")

    async def clear(self) -> None:
        await self._api.delete("/api/cart")


class OrdersAPI:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def create(self, details: dict[str, Any] | None = None) -> Order:
        # Lines and totals come from the server-held cart; `details` is shipping/payment info.
        return Order.model_validate(await self._api.post("/api/checkout", json=details))

    async def list(self) -> list[Order]:
        return [Order.model_validate(o) for o in (await self._api.get("/api/orders") or [])]

    async def get(self, order_id: str) -> Order:
        return Order.model_validate(await self._api.get(f"/api/orders/{order_id}"))


# --- Module Notes -----------------------------------------------------------
# Pydantic validation errors from malformed payloads are mapped by the stores
# like any other request failure.
