"""
storefront_client.services

Service-layer package (state containers and their consistency rules).

Responsibilities:
- Identity Store and Cart Store.
- Authorization gate, derived pricing, catalog and orders services.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services never touch httpx directly; tests drive them through mock transports.
