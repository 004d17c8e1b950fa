"""
storefront_client.views.catalog

Product listing and product details pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront_client.app import StorefrontContext
from storefront_client.models import Category, Product
from storefront_client.services.catalog import SORT_OPTIONS, ProductFilters
from storefront_client.services.result import OperationResult
from storefront_client.views.outcomes import Notice, Redirect, from_result

PLACEHOLDER_IMAGE = (
    "https://images.unsplash.com/photo-1441986300917-64674bd600d8?w=800&h=800&fit=crop"
)
MAX_QUANTITY_WITHOUT_STOCK = 10


class ProductListView:
    def __init__(self, ctx: StorefrontContext, filters: ProductFilters | None = None) -> None:
        self.ctx = ctx
        self.filters = filters or ProductFilters()
        self.products: list[Product] = []
        self.categories: list[Category] = []
        self.error: str = ""
        self.loading = False

    @property
    def sort_options(self) -> dict[str, str]:
        return SORT_OPTIONS

    async def load(self) -> None:
        self.loading = True
        try:
            products = await self.ctx.catalog.list_products(self.filters)
            categories = await self.ctx.catalog.categories()
        finally:
            self.loading = False
        # Failed loads keep the last rendered lists.
        if products.ok:
            self.products = products.data
            self.error = ""
        else:
            self.error = products.error or ""
        if categories.ok:
            self.categories = categories.data

    async def change_filter(self, **changes) -> None:
        self.filters = self.filters.with_changes(**changes)
        await self.load()

    async def clear_filters(self) -> None:
        self.filters = ProductFilters()
        await self.load()

    async def add_to_cart(self, product: Product) -> Redirect | Notice | None:
        # Product cards add a single unit.
        result = await self.ctx.gate.guard(
            lambda: self.ctx.cart.add_item(product.id, 1), action="add_to_cart"
        )
        return from_result(result, next_path="/products")


@dataclass(slots=True)
class ProductDetailsView:
    ctx: StorefrontContext
    product_id: str
    product: Product | None = None
    related: list[Product] = field(default_factory=list)
    selected_image: int = 0
    quantity: int = 1
    message: str = ""

    @property
    def images(self) -> list[str]:
        if self.product and self.product.images:
            return self.product.images
        return [PLACEHOLDER_IMAGE]

    @property
    def max_quantity(self) -> int:
        if self.product is None:
            return 1
        return self.product.stock or MAX_QUANTITY_WITHOUT_STOCK

    @property
    def can_add(self) -> bool:
        return self.product is not None and self.product.in_stock

    async def load(self) -> Redirect | None:
        result = await self.ctx.catalog.get_product(self.product_id)
        if not result.ok:
            # Unknown product: back to the listing.
            return Redirect(to="/products")
        self.product = result.data
        self.selected_image = 0
        self.quantity = 1
        related = await self.ctx.catalog.related_products(self.product_id)
        self.related = related.data if related.ok else []
        return None

    def select_image(self, index: int) -> None:
        if 0 <= index < len(self.images):
            self.selected_image = index

    def step_quantity(self, change: int) -> None:
        self.quantity = min(max(1, self.quantity + change), self.max_quantity)

    async def add_to_cart(self) -> Redirect | Notice | None:
        if self.product is None:
            return Notice("Product not loaded")
        product_id = self.product.id
        quantity = self.quantity
        result: OperationResult = await self.ctx.gate.guard(
            lambda: self.ctx.cart.add_item(product_id, quantity), action="add_to_cart"
        )
        outcome = from_result(result, next_path=f"/product/{product_id}")
        self.message = "Added to cart" if result.ok else (result.error or "")
        return outcome
