"""
storefront_client.services.orders

Checkout and order history.

Responsibilities:
- Validate the checkout form locally.
- Place an order from the server-held cart, passing shipping/payment details.
- List and fetch orders for the signed-in principal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from storefront_client.auth.models import Principal
from storefront_client.client.errors import ApiError, NotFoundError, UnauthorizedError, message_for
from storefront_client.client.resources import OrdersAPI
from storefront_client.models import ShippingAddress
from storefront_client.observability.logging import get_logger
from storefront_client.services.result import OperationResult

log = get_logger(__name__)

CHECKOUT_FAILED = "Checkout failed. Please try again."

REQUIRED_SHIPPING_FIELDS = ("first_name", "last_name", "email", "address", "city", "zip_code")


@dataclass(slots=True)
class CheckoutDetails:
    """Checkout form state; card secrets never leave this object."""

    shipping: ShippingAddress = field(default_factory=ShippingAddress)
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""
    card_name: str = ""
    same_as_shipping: bool = True
    notes: str = ""

    @classmethod
    def prefilled(cls, principal: Principal | None) -> CheckoutDetails:
        if principal is None:
            return cls()
        return cls(
            shipping=ShippingAddress(
                first_name=principal.first_name,
                last_name=principal.last_name,
                email=principal.email,
            )
        )

    def validate(self) -> str | None:
        missing = [f for f in REQUIRED_SHIPPING_FIELDS if not getattr(self.shipping, f).strip()]
        if missing:
            return "Please fill in: " + ", ".join(f.replace("_", " ") for f in missing)
        return None

    def to_payload(self) -> dict[str, Any]:
        digits = "".join(ch for ch in self.card_number if ch.isdigit())
        return {
            "shipping": self.shipping.model_dump(),
            "payment": {
                "card_name": self.card_name,
                "card_last4": digits[-4:] if digits else None,
                "same_as_shipping": self.same_as_shipping,
            },
            "notes": self.notes or None,
        }


class OrdersService:
    def __init__(self, *, orders_api: OrdersAPI) -> None:
        self._orders = orders_api

    async def checkout(self, details: CheckoutDetails) -> OperationResult:
        problem = details.validate()
        if problem is not None:
            return OperationResult.failure(problem)
        try:
            order = await self._orders.create(details.to_payload())
        except UnauthorizedError as e:
            return OperationResult.unauthenticated(e.message)
        except (ApiError, ValidationError) as e:
            log.warning("orders.checkout_failed", error=str(e))
            return OperationResult.failure(CHECKOUT_FAILED)
        log.info("orders.placed", order_id=order.id, total=str(order.total))
        return OperationResult.success(order)

    async def list_orders(self) -> OperationResult:
        try:
            orders = await self._orders.list()
        except UnauthorizedError as e:
            return OperationResult.unauthenticated(e.message)
        except (ApiError, ValidationError) as e:
            log.warning("orders.list_failed", error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load orders"))
        return OperationResult.success(orders)

    async def get_order(self, order_id: str) -> OperationResult:
        try:
            return OperationResult.success(await self._orders.get(order_id))
        except UnauthorizedError as e:
            return OperationResult.unauthenticated(e.message)
        except NotFoundError as e:
            return OperationResult.failure(message_for(e, "Order not found"))
        except (ApiError, ValidationError) as e:
            log.warning("orders.get_failed", order_id=order_id, error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load order"))


# --- Module Notes -----------------------------------------------------------
# The server still derives order lines and totals from its own cart; the payload
# only carries who/where/how-to-pay.
