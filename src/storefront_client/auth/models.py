"""
storefront_client.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) held by the Identity Store.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated shopper identity.
    Replaced wholesale on each sign-in; never patched.
    """

    id: str
    name: str
    email: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""

    @property
    def last_name(self) -> str:
        parts = self.name.split(" ")
        return parts[1] if len(parts) > 1 else ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is persisted next to the token in the session file.
