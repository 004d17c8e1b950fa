"""
storefront_client.client.http

Shared request layer used by every endpoint group.

Responsibilities:
- Attach the bearer token (read from the Identity Store at call time).
- Tag each call with an `x-request-id` and log request/response events.
- Emit `UNAUTHENTICATED` on 401 for authenticated calls, then raise.
- Map transport failures and non-2xx statuses to typed `ApiError`s.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

import httpx

from storefront_client.client.errors import (
    NotFoundError,
    RequestFailedError,
    UnauthorizedError,
    extract_detail,
)
from storefront_client.client.events import UNAUTHENTICATED, EventBus
from storefront_client.observability.logging import get_logger

log = get_logger(__name__)

TokenProvider = Callable[[], str | None]


def _no_token() -> str | None:
    return None


class ApiClient:
    """
    Boundary between stores and the network:
    - One `httpx.AsyncClient` per storefront context (base url + timeout configured there)
    - No token caching: the provider is consulted on every request
    """

    def __init__(self, *, http: httpx.AsyncClient, events: EventBus) -> None:
        self._http = http
        self._events = events
        self._token_provider: TokenProvider = _no_token

    def set_token_provider(self, provider: TokenProvider) -> None:
        self._token_provider = provider

    def _headers(self, *, authenticated: bool, request_id: str) -> dict[str, str]:
        headers = {"x-request-id": request_id, "Accept": "application/json"}
        if authenticated:
            token = self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> Any:
        request_id = str(uuid.uuid4())
        clean_params = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        log.info("api.request", method=method, path=path, request_id=request_id)

        try:
            r = await self._http.request(
                method,
                path,
                json=json,
                params=clean_params or None,
                headers=self._headers(authenticated=authenticated, request_id=request_id),
            )
        except httpx.TimeoutException as e:
            log.warning("api.timeout", method=method, path=path, request_id=request_id)
            raise RequestFailedError("The request timed out. Please try again.") from e
        except httpx.HTTPError as e:
            log.warning(
                "api.transport_error",
                method=method,
                path=path,
                request_id=request_id,
                error=str(e),
            )
            raise RequestFailedError("Unable to reach the store. Check your connection.") from e

        log.info(
            "api.response",
            method=method,
            path=path,
            status=r.status_code,
            request_id=request_id,
        )

        if r.status_code == 401:
            detail = extract_detail(r) or "Your session has expired. Please sign in again."
            if authenticated:
                # Process-wide reaction: identity is cleared before the caller sees the error.
                self._events.emit(UNAUTHENTICATED, reason=detail)
            raise UnauthorizedError(detail, status_code=401)
        if r.status_code == 404:
            raise NotFoundError(extract_detail(r) or "", status_code=404)
        if r.is_error:
            raise RequestFailedError(extract_detail(r) or "", status_code=r.status_code)

        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise RequestFailedError("Unexpected response from the store.") from e

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)


# --- Module Notes -----------------------------------------------------------
# NotFoundError and RequestFailedError carry an empty message when the server gave no detail, so
# each store can substitute its own generic text (see `errors.message_for`).
