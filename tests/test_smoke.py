"""
tests.test_smoke

Minimal smoke tests to validate the dev backend boots and serves its probes.
"""

from __future__ import annotations

import httpx
import pytest

from storefront_client.devserver.app import create_app
from storefront_client.observability.logging import REDACTED, _redact_secrets
from storefront_client.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints() -> None:
    app = create_app(settings=Settings(env="test"))

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

        r = await client.get("/readyz")
        assert r.status_code == 200
        assert r.json()["status"] == "ready"

        r = await client.get("/api/cart")
        assert r.status_code == 401
        assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_guest_context_starts_without_network_cart(storefront, transport) -> None:
    # No saved session: nothing is restored and the cart stays "not loaded".
    assert storefront.identity.principal is None
    assert storefront.cart.loaded is False
    assert transport.calls(path="/api/cart") == []


def test_credentials_are_redacted_from_log_events() -> None:
    event = _redact_secrets(None, "info", {"event": "x", "password": "user123", "email": "a@b.c"})

    assert event["password"] == REDACTED
    assert event["email"] == "a@b.c"
