"""
storefront_client.views.checkout

Checkout page: gated entry, prefilled shipping form, order placement.
"""

from __future__ import annotations

from storefront_client.app import StorefrontContext
from storefront_client.models import Order
from storefront_client.services.orders import CheckoutDetails
from storefront_client.services.pricing import CartTotals
from storefront_client.views.outcomes import Notice, Redirect, from_result, sign_in_redirect

CHECKOUT_PATH = "/checkout"


class CheckoutView:
    def __init__(self, ctx: StorefrontContext) -> None:
        self.ctx = ctx
        self.details = CheckoutDetails.prefilled(ctx.identity.principal)
        self.order: Order | None = None
        self.placing = False

    @property
    def order_complete(self) -> bool:
        return self.order is not None

    @property
    def totals(self) -> CartTotals:
        return self.ctx.cart.totals()

    async def enter(self) -> Redirect | None:
        """Where the page should go instead of rendering, if anywhere."""
        if not self.ctx.gate.allowed:
            return sign_in_redirect(CHECKOUT_PATH)
        if not self.ctx.cart.loaded:
            await self.ctx.cart.fetch()
        if not self.ctx.cart.items and not self.order_complete:
            return Redirect(to="/cart")
        return None

    async def place_order(self) -> Redirect | Notice | None:
        self.placing = True
        try:
            result = await self.ctx.gate.guard(
                lambda: self.ctx.orders.checkout(self.details), action="checkout"
            )
        finally:
            self.placing = False

        outcome = from_result(result, next_path=CHECKOUT_PATH)
        if not result.ok:
            return outcome

        self.order = result.data
        # The order owns the lines now; a failed clear only leaves a stale badge
        # until the next fetch.
        cleared = await self.ctx.cart.clear()
        if not cleared.ok:
            await self.ctx.cart.fetch()
        return None
