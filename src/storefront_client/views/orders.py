"""
storefront_client.views.orders

Order history page.
"""

from __future__ import annotations

from datetime import datetime

from storefront_client.app import StorefrontContext
from storefront_client.models import Order
from storefront_client.views.outcomes import Redirect, sign_in_redirect

STATUS_TONES: dict[str, str] = {
    "completed": "success",
    "pending": "warning",
    "shipped": "info",
    "cancelled": "danger",
}


def status_tone(status: str) -> str:
    return STATUS_TONES.get(status, "neutral")


def format_order_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%b %d, %Y, %I:%M %p")


class OrdersView:
    def __init__(self, ctx: StorefrontContext) -> None:
        self.ctx = ctx
        self.orders: list[Order] = []
        self.selected: Order | None = None
        self.error = ""
        self.loading = False

    async def load(self) -> Redirect | None:
        if not self.ctx.gate.allowed:
            return sign_in_redirect("/orders")
        self.loading = True
        try:
            result = await self.ctx.orders.list_orders()
        finally:
            self.loading = False
        if result.requires_auth:
            return sign_in_redirect("/orders")
        if result.ok:
            self.orders = result.data
            self.error = ""
        else:
            self.error = result.error or ""
        return None

    async def view_order(self, order_id: str) -> Redirect | None:
        result = await self.ctx.orders.get_order(order_id)
        if result.requires_auth:
            return sign_in_redirect("/orders")
        if result.ok:
            self.selected = result.data
        else:
            self.error = result.error or ""
        return None

    def close_details(self) -> None:
        self.selected = None
