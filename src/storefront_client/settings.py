"""
storefront_client.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the client, stores and dev backend.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for the composition root.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration shared by:
    - The request layer (base url, timeout)
    - The Identity Store (durable session location)
    - Derived cart values (pricing policy)
    - The local dev backend (host/port, token signing)
    """

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "storefront-client"
    log_level: str = "INFO"

    # REST backend
    api_base_url: str = "http://localhost:8000"
    # Requests that never resolve would leave a store "mutating" forever.
    request_timeout_seconds: float = Field(default=15.0, gt=0)

    # Durable session (token + principal snapshot)
    token_store_path: Path = Field(
        default_factory=lambda: Path.home() / ".storefront_session.json"
    )

    # Pricing policy for derived cart values
    free_shipping_threshold: Decimal = Decimal("100.00")
    shipping_flat_fee: Decimal = Decimal("9.99")
    tax_rate: Decimal = Decimal("0.08")

    # Dev backend
    dev_host: str = "127.0.0.1"
    dev_port: int = 8000
    jwt_alg: str = "HS256"
    jwt_issuer: str = "storefront-dev"
    jwt_audience: str = "storefront-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars every time a context is opened.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(...)` directly (tmp token path, env="test") instead of
# going through the cached instance.
