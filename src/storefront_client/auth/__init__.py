"""
storefront_client.auth

Authentication package.

Responsibilities:
- Principal identity type.
- Durable session storage for the credential token.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The Identity Store (`services.identity`) is the only writer of the token store.
