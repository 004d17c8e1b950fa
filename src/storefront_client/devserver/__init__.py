"""
storefront_client.devserver

Local development backend implementing the storefront REST contract.

Responsibilities:
- In-memory catalog, carts, orders and accounts.
- JWT bearer authentication with the same 401 semantics as production.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Tests mount this app under `httpx.ASGITransport`; `python -m storefront_client.devserver`
# serves it for manual runs.
