"""
storefront_client.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for the dev backend.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The client side binds request ids per outgoing call in `client.http`.
