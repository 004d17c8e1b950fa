"""
storefront_client.views.outcomes

Navigation outcomes shared by the page controllers.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront_client.services.result import OperationResult

LOGIN_PATH = "/login"


@dataclass(frozen=True, slots=True)
class Redirect:
    to: str
    replace: bool = False
    next_path: str | None = None


@dataclass(frozen=True, slots=True)
class Notice:
    """Inline message; the page keeps showing its last known-good state."""

    message: str
    level: str = "error"


def sign_in_redirect(next_path: str | None = None) -> Redirect:
    return Redirect(to=LOGIN_PATH, next_path=next_path)


def from_result(
    result: OperationResult, *, success: Redirect | None = None, next_path: str | None = None
) -> Redirect | Notice | None:
    """Map a store result to a navigation outcome (None = stay and re-render)."""
    if result.requires_auth:
        return sign_in_redirect(next_path)
    if not result.ok:
        return Notice(result.error or "Something went wrong")
    return success
