"""
storefront_client.views.cart

Cart page: line items, order summary, quantity controls, checkout entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront_client.app import StorefrontContext
from storefront_client.models import CartLineItem
from storefront_client.services.pricing import CartTotals
from storefront_client.views.outcomes import Notice, Redirect, from_result, sign_in_redirect

CHECKOUT_PATH = "/checkout"


@dataclass(frozen=True, slots=True)
class CartPageModel:
    items: tuple[CartLineItem, ...]
    totals: CartTotals
    amount_to_free_shipping: Decimal
    empty: bool
    loading: bool
    notice: str | None


class CartView:
    def __init__(self, ctx: StorefrontContext) -> None:
        self.ctx = ctx
        self.notice: str | None = None

    def model(self) -> CartPageModel:
        cart = self.ctx.cart
        # Derived values are recomputed on every render.
        totals = cart.totals()
        return CartPageModel(
            items=cart.items,
            totals=totals,
            amount_to_free_shipping=totals.amount_to_free_shipping,
            empty=cart.loaded and not cart.items,
            loading=cart.busy,
            notice=self.notice,
        )

    def _apply(self, outcome: Redirect | Notice | None) -> Redirect | None:
        if isinstance(outcome, Notice):
            self.notice = outcome.message
            return None
        self.notice = None
        return outcome

    async def change_quantity(self, item_id: str, quantity: int) -> Redirect | None:
        result = await self.ctx.gate.guard(
            lambda: self.ctx.cart.update_quantity(item_id, quantity), action="update_quantity"
        )
        return self._apply(from_result(result, next_path="/cart"))

    async def increment(self, item: CartLineItem) -> Redirect | None:
        return await self.change_quantity(item.id, item.quantity + 1)

    async def decrement(self, item: CartLineItem) -> Redirect | None:
        return await self.change_quantity(item.id, item.quantity - 1)

    async def remove(self, item_id: str) -> Redirect | None:
        result = await self.ctx.gate.guard(
            lambda: self.ctx.cart.remove_item(item_id), action="remove_item"
        )
        return self._apply(from_result(result, next_path="/cart"))

    async def clear(self) -> Redirect | None:
        result = await self.ctx.gate.guard(self.ctx.cart.clear, action="clear_cart")
        return self._apply(from_result(result, next_path="/cart"))

    def begin_checkout(self) -> Redirect:
        if not self.ctx.gate.allowed:
            return sign_in_redirect(CHECKOUT_PATH)
        return Redirect(to=CHECKOUT_PATH)
