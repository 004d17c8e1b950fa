"""
tests.conftest

Shared fixtures: dev backend app, a recording transport and storefront contexts.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from storefront_client.app import StorefrontContext, open_storefront
from storefront_client.devserver.app import create_app
from storefront_client.devserver.state import DEMO_EMAIL, DEMO_PASSWORD, ShopState, seeded_state
from storefront_client.services.identity import Credentials
from storefront_client.settings import Settings


class RecordingTransport(httpx.AsyncBaseTransport):
    """Wraps another transport and keeps every request it forwards."""

    def __init__(self, inner: httpx.AsyncBaseTransport) -> None:
        self.inner = inner
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return await self.inner.handle_async_request(request)

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]

    def reset(self) -> None:
        self.requests.clear()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        api_base_url="http://test",
        token_store_path=tmp_path / "session.json",
        log_level="WARNING",
    )


@pytest.fixture
def shop() -> ShopState:
    return seeded_state()


@pytest.fixture
def backend(settings: Settings, shop: ShopState) -> FastAPI:
    return create_app(settings=settings, shop=shop)


@pytest.fixture
def transport(backend: FastAPI) -> RecordingTransport:
    return RecordingTransport(httpx.ASGITransport(app=backend))


@pytest_asyncio.fixture
async def storefront(
    settings: Settings, transport: RecordingTransport
) -> AsyncIterator[StorefrontContext]:
    async with open_storefront(settings=settings, transport=transport) as ctx:
        yield ctx


@pytest_asyncio.fixture
async def signed_in(
    storefront: StorefrontContext, transport: RecordingTransport
) -> StorefrontContext:
    result = await storefront.identity.login(Credentials(email=DEMO_EMAIL, password=DEMO_PASSWORD))
    assert result.ok, result.error
    await storefront.cart.fetch()
    transport.reset()
    return storefront


@pytest.fixture
def demo_user_id(shop: ShopState) -> str:
    user = shop.user_by_email(DEMO_EMAIL)
    assert user is not None
    return user.id
