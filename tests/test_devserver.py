"""
tests.test_devserver

Dev backend contract checks that the stores rely on.
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from storefront_client.devserver.state import DEMO_EMAIL, DEMO_PASSWORD
from storefront_client.devserver.tokens import InvalidSessionToken, TokenIssuer


def test_token_round_trip_and_rejections(settings) -> None:
    issuer = TokenIssuer.from_settings(settings)

    claims = issuer.verify(issuer.issue(account_id="u1", role="user"))
    assert claims.account_id == "u1"
    assert claims.role == "user"

    expired = TokenIssuer(
        secret=issuer.secret, issuer=issuer.issuer, audience=issuer.audience, ttl=timedelta(seconds=-5)
    )
    with pytest.raises(InvalidSessionToken):
        issuer.verify(expired.issue(account_id="u1", role="user"))

    foreign = TokenIssuer(secret="other-secret", issuer=issuer.issuer, audience=issuer.audience)
    with pytest.raises(InvalidSessionToken):
        issuer.verify(foreign.issue(account_id="u1", role="user"))


async def _login(client: httpx.AsyncClient) -> dict[str, str]:
    r = await client.post("/api/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.mark.asyncio
async def test_cart_summary_and_checkout_without_body(backend) -> None:
    transport = httpx.ASGITransport(app=backend)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        auth = await _login(client)

        r = await client.post("/api/checkout", headers=auth)
        assert r.status_code == 400
        assert r.json()["detail"] == "Cart is empty"

        r = await client.post(
            "/api/cart/items", json={"product_id": "p3", "quantity": 1}, headers=auth
        )
        assert r.status_code == 201

        r = await client.get("/api/cart", headers=auth)
        summary = r.json()["summary"]
        assert summary["item_count"] == 1
        assert summary["shipping"] == "9.99"
        assert summary["total"] == "63.99"

        r = await client.post("/api/checkout", headers=auth)
        assert r.status_code == 201
        assert r.json()["total"] == "63.99"
        assert r.json()["shipping"] is None


@pytest.mark.asyncio
async def test_register_enforces_password_length_server_side(backend) -> None:
    transport = httpx.ASGITransport(app=backend)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post(
            "/api/auth/register",
            json={"name": "Short Pw", "email": "short@example.com", "password": "abc"},
        )
        assert r.status_code == 422

        r = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert r.status_code == 401
        assert r.json()["detail"].startswith("Invalid token")
