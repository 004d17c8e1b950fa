"""
storefront_client.devserver.app

FastAPI app factory for the dev backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Stash settings and seeded shop state on `app.state`.
"""

from __future__ import annotations

from fastapi import FastAPI

from storefront_client.devserver.routers.auth import router as auth_router
from storefront_client.devserver.routers.cart import router as cart_router
from storefront_client.devserver.routers.catalog import router as catalog_router
from storefront_client.devserver.routers.health import router as health_router
from storefront_client.devserver.routers.orders import router as orders_router
from storefront_client.devserver.state import ShopState, seeded_state
from storefront_client.observability.logging import configure_logging, get_logger
from storefront_client.observability.middleware import RequestContextMiddleware
from storefront_client.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, shop: ShopState | None = None) -> FastAPI:
    configure_logging(
        service_name=f"{settings.service_name}-devserver",
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    app = FastAPI(
        title="Storefront Dev Backend",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    # State lives for the app's lifetime; tests pass their own to inspect it.
    app.state.settings = settings
    app.state.shop = shop if shop is not None else seeded_state()

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(orders_router)

    log.info("devserver.created", env=settings.env, products=len(app.state.shop.products))
    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling stays in routers.
