"""
storefront_client.devserver.routers.orders

Checkout and order history endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from storefront_client.devserver.deps import current_user, settings_dep, state_dep
from storefront_client.devserver.state import ShopState, UserRecord
from storefront_client.models import Order, ShippingAddress
from storefront_client.observability.logging import get_logger
from storefront_client.services.pricing import PricingPolicy
from storefront_client.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["orders"])


class CheckoutRequest(BaseModel):
    shipping: ShippingAddress | None = None
    payment: dict[str, Any] = Field(default_factory=dict)
    notes: str | None = None


@router.post("/checkout", response_model=Order, status_code=HTTP_201_CREATED)
async def checkout(
    body: CheckoutRequest | None = Body(default=None),
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
    settings: Settings = Depends(settings_dep),
) -> Order:
    if not shop.cart_for(user.id):
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Cart is empty")
    body = body or CheckoutRequest()
    order = shop.place_order(
        user_id=user.id,
        policy=PricingPolicy.from_settings(settings),
        shipping=body.shipping,
        notes=body.notes,
    )
    log.info("dev.order_placed", order_id=order.id, total=str(order.total))
    return order


@router.get("/orders", response_model=list[Order])
async def list_orders(
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> list[Order]:
    return shop.orders_for(user.id)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> Order:
    record = shop.orders.get(order_id)
    # Other shoppers' orders are indistinguishable from missing ones.
    if record is None or record.owner_id != user.id:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Order not found")
    return record.order
