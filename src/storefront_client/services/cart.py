"""
storefront_client.services.cart

Cart Store: server-synchronized view of the cart.

Responsibilities:
- Fetch the cart and replace local state wholesale.
- Mutations (add/update/remove/clear) followed by a full resync.
- Pure derived accessors over the current line items.

Consistency model:
- Local items are always the body of the last successful `GET /api/cart`
  (or empty right after a successful clear), never a client-computed patch.
- Mutations and fetches are serialized with a per-store lock, so resyncs are
  observed in the order the mutations were issued.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Literal

from pydantic import ValidationError

from storefront_client.client.errors import ApiError, UnauthorizedError, message_for
from storefront_client.client.resources import CartAPI
from storefront_client.models import CartLineItem
from storefront_client.observability.logging import get_logger
from storefront_client.services.pricing import (
    CartTotals,
    PricingPolicy,
    cart_item_count,
    cart_subtotal,
    compute_totals,
)
from storefront_client.services.result import OperationResult

log = get_logger(__name__)

CartStatus = Literal["idle", "mutating", "resynced", "failed"]

RESYNC_FAILED = "Cart was updated but could not be refreshed"


class CartStore:
    def __init__(self, *, cart_api: CartAPI, pricing: PricingPolicy | None = None) -> None:
        self._cart_api = cart_api
        self._pricing = pricing or PricingPolicy()
        self._items: tuple[CartLineItem, ...] | None = None
        self._status: CartStatus = "idle"
        self._lock = asyncio.Lock()

    # -- state

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return self._items or ()

    @property
    def loaded(self) -> bool:
        """False until the first successful fetch (an empty cart is loaded)."""
        return self._items is not None

    @property
    def status(self) -> CartStatus:
        return self._status

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def find_item(self, item_id: str) -> CartLineItem | None:
        return next((i for i in self.items if i.id == item_id), None)

    def reset(self) -> None:
        """Forget the cart (sign-out); the next fetch reloads it."""
        self._items = None
        self._status = "idle"

    def handle_unauthenticated(self, *, reason: str | None = None) -> None:
        self.reset()

    # -- derived accessors (pure: no fetches, no mutation)

    def get_cart_total(self) -> Decimal:
        return cart_subtotal(self.items)

    def get_cart_items_count(self) -> int:
        return cart_item_count(self.items)

    def totals(self) -> CartTotals:
        return compute_totals(self.items, self._pricing)

    # -- server sync

    async def fetch(self) -> OperationResult:
        async with self._lock:
            return await self._fetch_locked()

    async def _fetch_locked(self) -> OperationResult:
        try:
            items = await self._cart_api.get()
        except UnauthorizedError as e:
            return OperationResult.unauthenticated(e.message)
        except (ApiError, ValidationError) as e:
            log.warning("cart.fetch_failed", error=str(e))
            return OperationResult.failure(message_for(e, "Failed to fetch cart"))
        self._items = tuple(items)
        log.info("cart.fetched", lines=len(self._items), count=self.get_cart_items_count())
        return OperationResult.success(self.items)

    async def _mutate(
        self,
        *,
        action: str,
        call: Callable[[], Awaitable[None]],
        fallback: str,
        resync: bool = True,
    ) -> OperationResult:
        async with self._lock:
            self._status = "mutating"
            try:
                await call()
            except UnauthorizedError as e:
                self._status = "failed"
                return OperationResult.unauthenticated(e.message)
            except (ApiError, ValidationError) as e:
                self._status = "failed"
                log.info("cart.mutation_failed", action=action, error=str(e))
                return OperationResult.failure(message_for(e, fallback))

            if not resync:
                # Postcondition is known (cart emptied); no refetch needed.
                self._items = ()
                self._status = "resynced"
                log.info("cart.mutated", action=action, count=0)
                return OperationResult.success(self.items)

            fetched = await self._fetch_locked()
            if not fetched.ok:
                self._status = "failed"
                if fetched.requires_auth:
                    return fetched
                return OperationResult.failure(RESYNC_FAILED)

            self._status = "resynced"
            log.info("cart.mutated", action=action, count=self.get_cart_items_count())
            return OperationResult.success(self.items)

    async def add_item(self, product_id: str, quantity: int = 1) -> OperationResult:
        if quantity < 1:
            return OperationResult.failure("Quantity must be at least 1")
        return await self._mutate(
            action="add",
            call=lambda: self._cart_api.add_item(product_id=product_id, quantity=quantity),
            fallback="Failed to add to cart",
        )

    async def update_quantity(self, item_id: str, quantity: int) -> OperationResult:
        if quantity == 0:
            # Zero is removal, not an error.
            return await self.remove_item(item_id)
        if quantity < 0:
            return OperationResult.failure("Quantity cannot be negative")
        return await self._mutate(
            action="update",
            call=lambda: self._cart_api.update_item(item_id, quantity=quantity),
            fallback="Failed to update quantity",
        )

    async def remove_item(self, item_id: str) -> OperationResult:
        return await self._mutate(
            action="remove",
            call=lambda: self._cart_api.remove_item(item_id),
            fallback="Failed to remove from cart",
        )

    async def clear(self) -> OperationResult:
        return await self._mutate(
            action="clear",
            call=self._cart_api.clear,
            fallback="Failed to clear cart",
            resync=False,
        )


# --- Module Notes -----------------------------------------------------------
# Do not replace the refetch with optimistic local patching without adding
# reconciliation; stock and totals would drift from the server.
