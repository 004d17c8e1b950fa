"""
storefront_client.auth.token_store

Durable session storage (token + principal snapshot).

Responsibilities:
- Persist the credential token across process restarts.
- Load a previously saved session, tolerating missing or corrupt files.
- Clear the session file on logout / authorization failure.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from storefront_client.auth.models import Principal
from storefront_client.observability.logging import get_logger

log = get_logger(__name__)


class StoredSession(BaseModel):
    token: str
    user: dict[str, str]

    def principal(self) -> Principal:
        return Principal(
            id=self.user["id"],
            name=self.user.get("name", ""),
            email=self.user["email"],
            role=self.user.get("role", "user"),
        )


class SessionStorageError(Exception):
    """The session file could not be written or removed."""


class FileTokenStore:
    """JSON session file with owner-only permissions."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> StoredSession | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            session = StoredSession.model_validate(data)
            session.principal()
        except (OSError, ValueError, KeyError, ValidationError) as e:
            log.warning("token_store.load_failed", path=str(self.path), error=str(e))
            return None
        log.info("token_store.loaded", path=str(self.path))
        return session

    def save(self, *, token: str, principal: Principal) -> None:
        payload = StoredSession(token=token, user=principal.to_dict())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
            os.chmod(self.path, 0o600)
        except OSError as e:
            log.warning("token_store.save_failed", path=str(self.path), error=str(e))
            raise SessionStorageError(str(e)) from e
        log.info("token_store.saved", path=str(self.path))

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("token_store.clear_failed", path=str(self.path), error=str(e))
            raise SessionStorageError(str(e)) from e
        log.info("token_store.cleared", path=str(self.path))


# --- Module Notes -----------------------------------------------------------
# Only the Identity Store calls save/clear. File errors surface as
# `SessionStorageError`; unreadable files load as "no session".
