"""
storefront_client.client

Shared request layer for the storefront REST API.

Responsibilities:
- Bearer token attachment and the process-wide reaction to 401 responses.
- Typed request errors and the "unauthenticated" event bus.
- Thin endpoint groups (auth, products, categories, cart, orders).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Stores depend on the endpoint groups in `client.resources`, never on httpx directly.
