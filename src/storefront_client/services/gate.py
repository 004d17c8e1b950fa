"""
storefront_client.services.gate

Authorization gate for cart mutations and checkout.

Responsibilities:
- Refuse to start a guarded operation when nobody is signed in.
- Report "requires authentication" without touching the network.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from storefront_client.observability.logging import get_logger
from storefront_client.services.identity import IdentityStore
from storefront_client.services.result import OperationResult

log = get_logger(__name__)


class AuthorizationGate:
    """
    Permission to call Cart Store operations; the Cart Store itself has no identity dependency.
    """

    def __init__(self, identity: IdentityStore) -> None:
        self._identity = identity

    @property
    def allowed(self) -> bool:
        return self._identity.principal is not None

    async def guard(
        self, operation: Callable[[], Awaitable[OperationResult]], *, action: str = "operation"
    ) -> OperationResult:
        if not self.allowed:
            log.info("gate.blocked", action=action)
            return OperationResult.unauthenticated()
        return await operation()


# --- Module Notes -----------------------------------------------------------
# `operation` is a zero-argument factory so that no coroutine is created (and no
# request is issued) when the gate refuses.
