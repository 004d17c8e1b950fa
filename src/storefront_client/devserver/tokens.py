"""
storefront_client.devserver.tokens

Bearer tokens minted and checked by the dev backend.

Responsibilities:
- Sign a token for an account on login / external-provider callback.
- Verify signature, issuer, audience and expiry; expose the claims as a typed value.

Note:
- The client treats tokens as opaque strings; nothing outside the dev backend parses them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError

from storefront_client.settings import Settings


class InvalidSessionToken(Exception):
    pass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    account_id: str
    role: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class TokenIssuer:
    secret: str
    issuer: str
    audience: str
    alg: str = "HS256"
    ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenIssuer:
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            alg=settings.jwt_alg,
            ttl=timedelta(minutes=settings.jwt_ttl_minutes),
        )

    def issue(self, *, account_id: str, role: str) -> str:
        now = datetime.now(tz=UTC)
        return jwt.encode(
            {
                "iss": self.issuer,
                "aud": self.audience,
                "sub": account_id,
                "role": role,
                "iat": int(now.timestamp()),
                "exp": int((now + self.ttl).timestamp()),
            },
            self.secret,
            algorithm=self.alg,
        )

    def verify(self, token: str) -> TokenClaims:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.alg],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except InvalidTokenError as e:
            raise InvalidSessionToken(str(e)) from e
        return TokenClaims(
            account_id=str(claims["sub"]),
            role=str(claims.get("role", "user")),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=UTC),
        )
