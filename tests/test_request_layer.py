"""
tests.test_request_layer

ApiClient behavior: bearer attachment, error mapping and the 401 broadcast.
"""

from __future__ import annotations

import httpx
import pytest

from storefront_client.client.errors import (
    NotFoundError,
    RequestFailedError,
    UnauthorizedError,
)
from storefront_client.client.events import UNAUTHENTICATED, EventBus
from storefront_client.client.http import ApiClient


def _client(handler, *, token: str | None = "tok") -> tuple[ApiClient, EventBus, httpx.AsyncClient]:
    events = EventBus()
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    api = ApiClient(http=http, events=events)
    api.set_token_provider(lambda: token)
    return api, events, http


@pytest.mark.asyncio
async def test_bearer_only_on_authenticated_calls() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    api, _, http = _client(handler)
    async with http:
        assert await api.get("/api/cart") == {"ok": True}
        await api.post("/api/auth/login", json={}, authenticated=False)

    assert seen[0].headers["Authorization"] == "Bearer tok"
    assert "Authorization" not in seen[1].headers
    assert seen[0].headers["x-request-id"] != seen[1].headers["x-request-id"]


@pytest.mark.asyncio
async def test_token_is_read_on_every_request() -> None:
    tokens = iter(["first", None])
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    events = EventBus()
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    ) as http:
        api = ApiClient(http=http, events=events)
        api.set_token_provider(lambda: next(tokens))
        assert await api.delete("/api/cart") is None
        await api.delete("/api/cart")

    assert seen[0].headers["Authorization"] == "Bearer first"
    assert "Authorization" not in seen[1].headers


@pytest.mark.asyncio
async def test_empty_params_are_dropped() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    api, _, http = _client(handler)
    async with http:
        await api.get("/api/products", params={"category_id": "", "sort": None})
        await api.get("/api/products", params={"category_id": "c1", "sort": None})

    assert seen[0].url.query == b""
    assert dict(seen[1].url.params) == {"category_id": "c1"}


@pytest.mark.asyncio
async def test_401_on_authenticated_call_emits_then_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"detail": "Token expired"})

    api, events, http = _client(handler)
    received: list[str | None] = []
    events.subscribe(UNAUTHENTICATED, lambda *, reason=None: received.append(reason))

    async with http:
        with pytest.raises(UnauthorizedError) as exc:
            await api.get("/api/cart")
        with pytest.raises(UnauthorizedError):
            await api.post("/api/auth/login", json={}, authenticated=False)

    assert exc.value.message == "Token expired"
    assert received == ["Token expired"]


@pytest.mark.asyncio
async def test_401_without_detail_uses_session_expired_message() -> None:
    api, _, http = _client(lambda request: httpx.Response(401))
    async with http:
        with pytest.raises(UnauthorizedError) as exc:
            await api.get("/api/orders")

    assert exc.value.message == "Your session has expired. Please sign in again."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "error_type", "message"),
    [
        (httpx.Response(404, json={"detail": "Order not found"}), NotFoundError, "Order not found"),
        (httpx.Response(404), NotFoundError, ""),
        (httpx.Response(400, json={"detail": "Cart is empty"}), RequestFailedError, "Cart is empty"),
        (httpx.Response(422, json={"detail": [{"loc": ["body"]}]}), RequestFailedError, ""),
        (httpx.Response(200, text="<html>"), RequestFailedError, "Unexpected response from the store."),
    ],
)
async def test_status_mapping(response, error_type, message) -> None:
    api, _, http = _client(lambda request: response)
    async with http:
        with pytest.raises(error_type) as exc:
            await api.get("/api/anything")

    assert exc.value.message == message


@pytest.mark.asyncio
async def test_transport_failures_map_to_request_failed() -> None:
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    def refused(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    for handler, message in (
        (timeout, "The request timed out. Please try again."),
        (refused, "Unable to reach the store. Check your connection."),
    ):
        api, _, http = _client(handler)
        async with http:
            with pytest.raises(RequestFailedError) as exc:
                await api.get("/api/products")
        assert exc.value.message == message


def test_event_bus_unsubscribe() -> None:
    events = EventBus()
    calls: list[str] = []
    unsubscribe = events.subscribe(UNAUTHENTICATED, lambda **_: calls.append("a"))
    events.subscribe(UNAUTHENTICATED, lambda **_: calls.append("b"))

    events.emit(UNAUTHENTICATED, reason="x")
    unsubscribe()
    events.emit(UNAUTHENTICATED, reason="y")

    assert calls == ["a", "b", "b"]
    assert events.subscriber_count(UNAUTHENTICATED) == 1


def test_failing_handler_does_not_starve_later_subscribers() -> None:
    events = EventBus()
    calls: list[str] = []

    def broken(**_) -> None:
        raise RuntimeError("identity handler failed")

    events.subscribe(UNAUTHENTICATED, broken)
    events.subscribe(UNAUTHENTICATED, lambda **_: calls.append("cart"))

    with pytest.raises(RuntimeError):
        events.emit(UNAUTHENTICATED, reason="expired")

    assert calls == ["cart"]
