"""
storefront_client.devserver.routers.cart

Per-user cart endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from storefront_client.devserver.deps import current_user, settings_dep, state_dep
from storefront_client.devserver.state import CartLine, ShopState, UserRecord
from storefront_client.models import CartLineItem
from storefront_client.services.pricing import PricingPolicy, compute_totals
from storefront_client.settings import Settings

router = APIRouter(prefix="/api/cart", tags=["cart"])


class AddItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartSummary(BaseModel):
    item_count: int
    subtotal: str
    shipping: str
    tax: str
    total: str


class CartResponse(BaseModel):
    items: list[CartLineItem]
    summary: CartSummary


def _check_stock(shop: ShopState, product_id: str, quantity: int) -> None:
    product = shop.products.get(product_id)
    if product is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Product not found")
    if quantity > product.stock:
        detail = "Out of stock" if product.stock == 0 else f"Only {product.stock} left in stock"
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=detail)


@router.get("", response_model=CartResponse)
async def get_cart(
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
    settings: Settings = Depends(settings_dep),
) -> CartResponse:
    items = shop.cart_items(user.id)
    totals = compute_totals(items, PricingPolicy.from_settings(settings))
    return CartResponse(
        items=items,
        summary=CartSummary(
            item_count=totals.item_count,
            subtotal=str(totals.subtotal),
            shipping=str(totals.shipping),
            tax=str(totals.tax),
            total=str(totals.total),
        ),
    )


@router.post("/items", status_code=HTTP_201_CREATED)
async def add_item(
    body: AddItemRequest,
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> dict[str, object]:
    lines = shop.cart_for(user.id)
    existing = next((line for line in lines if line.product_id == body.product_id), None)
    # Same product merges into one line.
    wanted = body.quantity + (existing.quantity if existing else 0)
    _check_stock(shop, body.product_id, wanted)
    if existing is None:
        existing = CartLine(id=shop.next_id("ci"), product_id=body.product_id, quantity=0)
        lines.append(existing)
    existing.quantity = wanted
    return {"id": existing.id, "quantity": existing.quantity}


@router.put("/items/{item_id}")
async def update_item(
    item_id: str,
    body: UpdateItemRequest,
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> dict[str, object]:
    line = shop.find_line(user.id, item_id)
    if line is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Cart item not found")
    _check_stock(shop, line.product_id, body.quantity)
    line.quantity = body.quantity
    return {"id": line.id, "quantity": line.quantity}


@router.delete("/items/{item_id}")
async def remove_item(
    item_id: str,
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> dict[str, str]:
    line = shop.find_line(user.id, item_id)
    if line is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Cart item not found")
    shop.cart_for(user.id).remove(line)
    return {"status": "ok"}


@router.delete("")
async def clear_cart(
    user: UserRecord = Depends(current_user),
    shop: ShopState = Depends(state_dep),
) -> dict[str, str]:
    shop.carts[user.id] = []
    return {"status": "ok"}
