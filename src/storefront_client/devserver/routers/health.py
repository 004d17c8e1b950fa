"""
storefront_client.devserver.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) confirming the catalog is seeded.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront_client.devserver.deps import state_dep
from storefront_client.devserver.state import ShopState

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(shop: ShopState = Depends(state_dep)) -> dict[str, str]:
    return {"status": "ready" if shop.products else "empty"}
