"""
storefront_client.devserver.routers

Dev backend routers, one per REST resource group.
"""

# Package marker.
