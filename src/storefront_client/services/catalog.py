"""
storefront_client.services.catalog

Catalog browsing: product listing with filters, product details, categories.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Literal

from pydantic import ValidationError

from storefront_client.client.errors import ApiError, NotFoundError, message_for
from storefront_client.client.resources import CategoriesAPI, ProductsAPI
from storefront_client.models import Product
from storefront_client.observability.logging import get_logger
from storefront_client.services.result import OperationResult

log = get_logger(__name__)

SortOption = Literal["newest", "price_low", "price_high", "name"]

SORT_OPTIONS: dict[str, str] = {
    "newest": "Newest First",
    "price_low": "Price: Low to High",
    "price_high": "Price: High to Low",
    "name": "Name: A to Z",
}

DEFAULT_SORT: SortOption = "newest"
DEFAULT_PRICE_RANGE = (Decimal("0"), Decimal("1000"))


@dataclass(frozen=True, slots=True)
class ProductFilters:
    # category + sort go to the server; price range + in_stock are applied locally.
    category: str | None = None
    sort: SortOption = DEFAULT_SORT
    min_price: Decimal = DEFAULT_PRICE_RANGE[0]
    max_price: Decimal = DEFAULT_PRICE_RANGE[1]
    in_stock: bool = False

    @property
    def active_count(self) -> int:
        count = 0
        if self.category:
            count += 1
        if self.sort != DEFAULT_SORT:
            count += 1
        if self.in_stock:
            count += 1
        return count

    def with_changes(self, **changes) -> ProductFilters:
        return replace(self, **changes)

    def matches(self, product: Product) -> bool:
        if self.in_stock and not product.in_stock:
            return False
        return self.min_price <= product.price <= self.max_price


class CatalogService:
    def __init__(self, *, products_api: ProductsAPI, categories_api: CategoriesAPI) -> None:
        self._products = products_api
        self._categories = categories_api

    async def list_products(self, filters: ProductFilters | None = None) -> OperationResult:
        filters = filters or ProductFilters()
        try:
            products = await self._products.list(category_id=filters.category, sort=filters.sort)
        except (ApiError, ValidationError) as e:
            log.warning("catalog.list_failed", error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load products"))
        return OperationResult.success([p for p in products if filters.matches(p)])

    async def get_product(self, product_id: str) -> OperationResult:
        try:
            return OperationResult.success(await self._products.get(product_id))
        except NotFoundError as e:
            return OperationResult.failure(message_for(e, "Product not found"))
        except (ApiError, ValidationError) as e:
            log.warning("catalog.product_failed", product_id=product_id, error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load product"))

    async def related_products(self, product_id: str) -> OperationResult:
        try:
            return OperationResult.success(await self._products.related(product_id))
        except (ApiError, ValidationError) as e:
            log.warning("catalog.related_failed", product_id=product_id, error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load related products"))

    async def categories(self) -> OperationResult:
        try:
            return OperationResult.success(await self._categories.list())
        except (ApiError, ValidationError) as e:
            log.warning("catalog.categories_failed", error=str(e))
            return OperationResult.failure(message_for(e, "Failed to load categories"))
