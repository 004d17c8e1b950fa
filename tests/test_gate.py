"""
tests.test_gate

Guests cannot mutate the cart or reach checkout; refusals never hit the network.
"""

from __future__ import annotations

import pytest

from storefront_client.views.cart import CartView
from storefront_client.views.catalog import ProductDetailsView, ProductListView
from storefront_client.views.checkout import CheckoutView
from storefront_client.views.orders import OrdersView
from storefront_client.views.outcomes import Redirect


@pytest.mark.asyncio
async def test_guest_cart_mutation_requires_auth_without_requests(storefront, transport) -> None:
    transport.reset()

    result = await storefront.gate.guard(
        lambda: storefront.cart.add_item("p1", 1), action="add_to_cart"
    )

    assert not result.ok
    assert result.requires_auth
    assert result.error == "Please sign in to continue"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_guest_add_from_listing_redirects_to_login(storefront, transport) -> None:
    view = ProductListView(storefront)
    await view.load()
    product = next(p for p in view.products if p.id == "p1")
    transport.reset()

    outcome = await view.add_to_cart(product)

    assert outcome == Redirect(to="/login", next_path="/products")
    assert transport.calls("POST") == []


@pytest.mark.asyncio
async def test_guest_add_from_details_redirects_back_to_product(storefront, transport) -> None:
    view = ProductDetailsView(storefront, product_id="p2")
    assert await view.load() is None
    transport.reset()

    outcome = await view.add_to_cart()

    assert outcome == Redirect(to="/login", next_path="/product/p2")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_guest_cannot_reach_checkout_or_orders(storefront, transport) -> None:
    transport.reset()

    assert CartView(storefront).begin_checkout() == Redirect(to="/login", next_path="/checkout")
    assert await CheckoutView(storefront).enter() == Redirect(to="/login", next_path="/checkout")
    assert await OrdersView(storefront).load() == Redirect(to="/login", next_path="/orders")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_signed_in_shopper_passes_the_gate(signed_in) -> None:
    assert signed_in.gate.allowed
    assert CartView(signed_in).begin_checkout() == Redirect(to="/checkout")

    result = await signed_in.gate.guard(lambda: signed_in.cart.add_item("p1", 1))
    assert result.ok
    assert signed_in.cart.get_cart_items_count() == 1
