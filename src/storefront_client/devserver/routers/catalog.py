"""
storefront_client.devserver.routers.catalog

Public catalog endpoints: products, product details, related products, categories.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_404_NOT_FOUND

from storefront_client.devserver.deps import state_dep
from storefront_client.devserver.state import ShopState
from storefront_client.models import Category, Product

router = APIRouter(prefix="/api", tags=["catalog"])

RELATED_LIMIT = 4


def _sorted(products: list[Product], sort: str | None) -> list[Product]:
    if sort == "price_low":
        return sorted(products, key=lambda p: p.price)
    if sort == "price_high":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort == "name":
        return sorted(products, key=lambda p: p.title.lower())
    # newest: most recently added first
    return list(reversed(products))


@router.get("/products", response_model=list[Product])
async def list_products(
    category_id: str | None = None,
    sort: str | None = None,
    shop: ShopState = Depends(state_dep),
) -> list[Product]:
    products = list(shop.products.values())
    if category_id:
        products = [p for p in products if p.category and p.category.id == category_id]
    return _sorted(products, sort)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, shop: ShopState = Depends(state_dep)) -> Product:
    product = shop.products.get(product_id)
    if product is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.get("/productdetails/{product_id}/related", response_model=list[Product])
async def related_products(product_id: str, shop: ShopState = Depends(state_dep)) -> list[Product]:
    product = shop.products.get(product_id)
    if product is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Product not found")
    category_id = product.category.id if product.category else None
    related = [
        p
        for p in shop.products.values()
        if p.id != product_id and p.category and p.category.id == category_id
    ]
    return related[:RELATED_LIMIT]


@router.get("/categories", response_model=list[Category])
async def list_categories(shop: ShopState = Depends(state_dep)) -> list[Category]:
    return list(shop.categories.values())
