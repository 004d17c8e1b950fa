"""
storefront_client.devserver.__main__

Entrypoint for running the dev backend via `python -m storefront_client.devserver`.
"""

from __future__ import annotations

import uvicorn

from storefront_client.devserver.app import create_app
from storefront_client.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.dev_host,
        port=settings.dev_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
