"""
storefront_client.devserver.deps

FastAPI dependency wiring for the dev backend.

Responsibilities:
- Expose settings and shop state stashed on `app.state`.
- Convert a bearer token into the signed-in user record.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from storefront_client.devserver.state import ShopState, UserRecord
from storefront_client.devserver.tokens import InvalidSessionToken, TokenIssuer
from storefront_client.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def settings_dep(request: Request) -> Settings:
    # Stashed by `devserver.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def state_dep(request: Request) -> ShopState:
    return request.app.state.shop  # type: ignore[attr-defined]


def issuer_dep(settings: Settings = Depends(settings_dep)) -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


def current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    issuer: TokenIssuer = Depends(issuer_dep),
    shop: ShopState = Depends(state_dep),
) -> UserRecord:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        claims = issuer.verify(creds.credentials)
    except InvalidSessionToken as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    user = shop.users.get(claims.account_id)
    if user is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unknown account")
    return user


# --- Module Notes -----------------------------------------------------------
# Every non-auth router depends on `current_user`, so any stale token yields 401.
