"""
storefront_client.services.pricing

Derived cart values (never stored, always recomputed from line items).

Responsibilities:
- Subtotal and item count over the current cart lines.
- Flat shipping fee waived above a threshold, flat-rate tax.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from storefront_client.models import CartLineItem
from storefront_client.settings import Settings

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    free_shipping_threshold: Decimal = Decimal("100.00")
    shipping_flat_fee: Decimal = Decimal("9.99")
    tax_rate: Decimal = Decimal("0.08")

    @classmethod
    def from_settings(cls, settings: Settings) -> PricingPolicy:
        return cls(
            free_shipping_threshold=settings.free_shipping_threshold,
            shipping_flat_fee=settings.shipping_flat_fee,
            tax_rate=settings.tax_rate,
        )

    def shipping_for(self, subtotal: Decimal) -> Decimal:
        # Strictly above the threshold ships free.
        if subtotal > self.free_shipping_threshold:
            return Decimal("0.00")
        return _money(self.shipping_flat_fee)

    def tax_for(self, subtotal: Decimal) -> Decimal:
        return _money(subtotal * self.tax_rate)

    def amount_to_free_shipping(self, subtotal: Decimal) -> Decimal:
        return _money(max(self.free_shipping_threshold - subtotal, Decimal("0")))

    def free_shipping_progress(self, subtotal: Decimal) -> Decimal:
        """Fraction of the threshold reached, capped at 1."""
        if self.free_shipping_threshold <= 0:
            return Decimal("1")
        return min(subtotal / self.free_shipping_threshold, Decimal("1"))


@dataclass(frozen=True, slots=True)
class CartTotals:
    item_count: int
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    amount_to_free_shipping: Decimal = Decimal("0.00")
    free_shipping_progress: Decimal = Decimal("1")

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0


def cart_subtotal(items: Iterable[CartLineItem]) -> Decimal:
    return _money(sum((i.line_total for i in items), Decimal("0")))


def cart_item_count(items: Iterable[CartLineItem]) -> int:
    return sum(i.quantity for i in items)


def compute_totals(items: Iterable[CartLineItem], policy: PricingPolicy) -> CartTotals:
    lines = list(items)
    subtotal = cart_subtotal(lines)
    shipping = policy.shipping_for(subtotal)
    tax = policy.tax_for(subtotal)
    return CartTotals(
        item_count=cart_item_count(lines),
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        amount_to_free_shipping=policy.amount_to_free_shipping(subtotal),
        free_shipping_progress=policy.free_shipping_progress(subtotal),
    )


# --- Module Notes -----------------------------------------------------------
# The dev backend prices orders with the same policy, so checkout totals match the cart page.
