"""
tests.test_catalog

Catalog browsing: server-side category/sort, local price and stock filters,
product details and related products.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from storefront_client.services.catalog import ProductFilters
from storefront_client.views.catalog import (
    MAX_QUANTITY_WITHOUT_STOCK,
    PLACEHOLDER_IMAGE,
    ProductDetailsView,
    ProductListView,
)
from storefront_client.views.outcomes import Redirect


@pytest.mark.asyncio
async def test_listing_sorts_and_filters_by_category(storefront, transport) -> None:
    result = await storefront.catalog.list_products(
        ProductFilters(category="c1", sort="price_low")
    )

    assert result.ok
    assert [p.id for p in result.data] == ["p5", "p3", "p2"]
    sent = transport.calls("GET", "/api/products")[-1]
    assert sent.url.params["category_id"] == "c1"
    assert sent.url.params["sort"] == "price_low"


@pytest.mark.asyncio
async def test_price_range_and_stock_filters_apply_locally(storefront) -> None:
    filters = ProductFilters(min_price=Decimal("30"), max_price=Decimal("100"), in_stock=True)

    result = await storefront.catalog.list_products(filters)

    assert sorted(p.id for p in result.data) == ["p2", "p3"]
    assert filters.active_count == 1


@pytest.mark.asyncio
async def test_list_view_filter_changes_reload(storefront) -> None:
    view = ProductListView(storefront)
    await view.load()
    assert len(view.products) == 5
    assert [c.name for c in view.categories] == ["Apparel", "Home"]

    await view.change_filter(category="c2", sort="name")
    assert [p.title for p in view.products] == ["Canvas Tote", "Ceramic Vase"]
    assert view.filters.active_count == 2

    await view.clear_filters()
    assert view.filters == ProductFilters()
    assert len(view.products) == 5


@pytest.mark.asyncio
async def test_product_details_and_related(storefront) -> None:
    view = ProductDetailsView(storefront, product_id="p2")

    assert await view.load() is None
    assert view.product.title == "Linen Shirt"
    assert [p.id for p in view.related] == ["p3", "p5"]
    assert len(view.images) == 2

    view.select_image(1)
    assert view.selected_image == 1
    view.select_image(5)
    assert view.selected_image == 1


@pytest.mark.asyncio
async def test_quantity_stepper_is_bounded(storefront) -> None:
    view = ProductDetailsView(storefront, product_id="p4")
    await view.load()

    view.step_quantity(-1)
    assert view.quantity == 1
    for _ in range(10):
        view.step_quantity(1)
    assert view.quantity == 5

    belt = ProductDetailsView(storefront, product_id="p5")
    await belt.load()
    assert belt.max_quantity == MAX_QUANTITY_WITHOUT_STOCK
    assert not belt.can_add
    assert belt.images == [PLACEHOLDER_IMAGE]


@pytest.mark.asyncio
async def test_unknown_product_redirects_to_listing(storefront) -> None:
    result = await storefront.catalog.get_product("nope")
    assert result.error == "Product not found"

    view = ProductDetailsView(storefront, product_id="nope")
    assert await view.load() == Redirect(to="/products")


@pytest.mark.asyncio
async def test_details_add_to_cart_uses_selected_quantity(signed_in) -> None:
    view = ProductDetailsView(signed_in, product_id="p3")
    await view.load()
    view.step_quantity(2)

    assert await view.add_to_cart() is None
    assert view.message == "Added to cart"
    assert signed_in.cart.get_cart_items_count() == 3
    assert signed_in.cart.get_cart_total() == Decimal("150.00")
