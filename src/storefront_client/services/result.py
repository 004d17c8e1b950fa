"""
storefront_client.services.result

Uniform operation result returned by every store/service call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class OperationResult:
    ok: bool
    error: str | None = None
    requires_auth: bool = False
    data: Any = None

    @classmethod
    def success(cls, data: Any = None) -> OperationResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, message: str) -> OperationResult:
        return cls(ok=False, error=message)

    @classmethod
    def unauthenticated(cls, message: str = "Please sign in to continue") -> OperationResult:
        return cls(ok=False, error=message, requires_auth=True)

    def __bool__(self) -> bool:
        return self.ok
