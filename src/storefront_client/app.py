"""
storefront_client.app

Composition root for a storefront session.

Responsibilities:
- Build the HTTP client, event bus, request layer, stores and services once.
- Wire the "unauthenticated" subscriptions explicitly.
- Restore the durable session and load the cart on start; release resources on exit.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import httpx

from storefront_client.auth.token_store import FileTokenStore
from storefront_client.client.events import UNAUTHENTICATED, EventBus
from storefront_client.client.http import ApiClient
from storefront_client.client.resources import (
    AuthAPI,
    CartAPI,
    CategoriesAPI,
    OrdersAPI,
    ProductsAPI,
)
from storefront_client.observability.logging import configure_logging, get_logger
from storefront_client.services.cart import CartStore
from storefront_client.services.catalog import CatalogService
from storefront_client.services.gate import AuthorizationGate
from storefront_client.services.identity import IdentityStore
from storefront_client.services.orders import OrdersService
from storefront_client.services.pricing import PricingPolicy
from storefront_client.settings import Settings

log = get_logger(__name__)


@dataclass(slots=True)
class StorefrontContext:
    """
    Explicit handle passed to every view; replaces ambient global stores.
    """

    settings: Settings
    events: EventBus
    api: ApiClient
    identity: IdentityStore
    cart: CartStore
    gate: AuthorizationGate
    catalog: CatalogService
    orders: OrdersService
    pricing: PricingPolicy
    _unsubscribers: list[Callable[[], None]] = field(default_factory=list)

    async def start(self) -> None:
        restored = await self.identity.restore()
        # Guests have no server cart; it is loaded after sign-in.
        if restored.ok:
            await self.cart.fetch()
        log.info(
            "storefront.started",
            authenticated=self.identity.is_authenticated,
            cart_loaded=self.cart.loaded,
        )

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()


def build_context(*, settings: Settings, http: httpx.AsyncClient) -> StorefrontContext:
    events = EventBus()
    api = ApiClient(http=http, events=events)
    pricing = PricingPolicy.from_settings(settings)

    identity = IdentityStore(
        auth_api=AuthAPI(api),
        token_store=FileTokenStore(settings.token_store_path),
    )
    cart = CartStore(cart_api=CartAPI(api), pricing=pricing)
    api.set_token_provider(identity.current_token)

    ctx = StorefrontContext(
        settings=settings,
        events=events,
        api=api,
        identity=identity,
        cart=cart,
        gate=AuthorizationGate(identity),
        catalog=CatalogService(products_api=ProductsAPI(api), categories_api=CategoriesAPI(api)),
        orders=OrdersService(orders_api=OrdersAPI(api)),
        pricing=pricing,
    )
    # Identity clears token + storage; the cart forgets the previous shopper's lines.
    ctx._unsubscribers.append(events.subscribe(UNAUTHENTICATED, identity.handle_unauthenticated))
    ctx._unsubscribers.append(events.subscribe(UNAUTHENTICATED, cart.handle_unauthenticated))
    return ctx


@asynccontextmanager
async def open_storefront(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logs: bool = True,
) -> AsyncIterator[StorefrontContext]:
    if configure_logs:
        configure_logging(
            service_name=settings.service_name,
            level=settings.log_level,
            json_logs=settings.env != "dev",
        )

    async with httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        transport=transport,
        headers={"Content-Type": "application/json"},
    ) as http:
        ctx = build_context(settings=settings, http=http)
        await ctx.start()
        try:
            yield ctx
        finally:
            ctx.close()
            log.info("storefront.closed")


# --- Module Notes -----------------------------------------------------------
# Tests pass an `httpx.ASGITransport` over the dev backend as `transport`.
