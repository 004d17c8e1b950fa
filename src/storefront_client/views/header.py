"""
storefront_client.views.header

Site header: cart badge, signed-in user menu, logout.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront_client.app import StorefrontContext
from storefront_client.views.outcomes import Redirect

NAV_ITEMS: tuple[tuple[str, str], ...] = (
    ("Home", "/"),
    ("Products", "/products"),
    ("Orders", "/orders"),
)


@dataclass(frozen=True, slots=True)
class HeaderModel:
    cart_count: int
    user_name: str | None
    user_email: str | None
    nav: tuple[tuple[str, str], ...]


class HeaderView:
    def __init__(self, ctx: StorefrontContext) -> None:
        self.ctx = ctx

    def model(self) -> HeaderModel:
        principal = self.ctx.identity.principal
        return HeaderModel(
            cart_count=self.ctx.cart.get_cart_items_count(),
            user_name=principal.name if principal else None,
            user_email=principal.email if principal else None,
            nav=NAV_ITEMS,
        )

    def logout(self) -> Redirect:
        self.ctx.identity.logout()
        self.ctx.cart.reset()
        return Redirect(to="/")
