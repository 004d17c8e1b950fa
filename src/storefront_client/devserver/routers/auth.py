"""
storefront_client.devserver.routers.auth

Account endpoints: login, registration, current user, external-provider callback.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from storefront_client.devserver.deps import current_user, issuer_dep, state_dep
from storefront_client.devserver.state import ShopState, UserRecord
from storefront_client.devserver.tokens import TokenIssuer
from storefront_client.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    email: str = Field(min_length=3, max_length=256)
    password: str = Field(min_length=6)
    role: str = "user"


class GoogleCallbackRequest(BaseModel):
    code: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


def _token_response(user: UserRecord, issuer: TokenIssuer) -> TokenResponse:
    token = issuer.issue(account_id=user.id, role=user.role)
    return TokenResponse(access_token=token, user=UserResponse(**user.public()))


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    issuer: TokenIssuer = Depends(issuer_dep),
    shop: ShopState = Depends(state_dep),
) -> TokenResponse:
    user = shop.user_by_email(body.email)
    if user is None or user.password != body.password:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    log.info("dev.login", user_id=user.id)
    return _token_response(user, issuer)


@router.post("/register", response_model=UserResponse, status_code=HTTP_201_CREATED)
async def register(body: RegisterRequest, shop: ShopState = Depends(state_dep)) -> UserResponse:
    if shop.user_by_email(body.email) is not None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Email already registered")
    # Self-registration never grants elevated roles.
    user = shop.add_user(name=body.name, email=body.email.strip(), password=body.password)
    return UserResponse(**user.public())


@router.get("/me", response_model=UserResponse)
async def me(user: UserRecord = Depends(current_user)) -> UserResponse:
    return UserResponse(**user.public())


@router.post("/google/callback", response_model=TokenResponse)
async def google_callback(
    body: GoogleCallbackRequest,
    issuer: TokenIssuer = Depends(issuer_dep),
    shop: ShopState = Depends(state_dep),
) -> TokenResponse:
    # Codes are single-use.
    email = shop.oauth_codes.pop(body.code, None)
    user = shop.user_by_email(email) if email else None
    if user is None:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST, detail="Invalid or expired authorization code"
        )
    return _token_response(user, issuer)
