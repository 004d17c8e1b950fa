"""
storefront_client.client.errors

Request-layer error taxonomy.

Responsibilities:
- Classify failed calls (authorization, not found, request failure).
- Extract display-ready messages from server error bodies.
"""

from __future__ import annotations

import httpx


class ApiError(Exception):
    """Base class for failed REST calls; `message` is safe to show to a shopper."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class RequestFailedError(ApiError):
    pass


def extract_detail(response: httpx.Response) -> str | None:
    # FastAPI-style bodies: {"detail": "..."}; validation errors carry a list instead.
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return None


def message_for(error: Exception, fallback: str) -> str:
    """Prefer a server-supplied detail; otherwise the caller's generic text."""
    if isinstance(error, ApiError) and error.message:
        return error.message
    return fallback


# --- Module Notes -----------------------------------------------------------
# Errors never cross a store boundary; stores turn them into `OperationResult`s.
