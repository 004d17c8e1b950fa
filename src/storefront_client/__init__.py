"""
storefront_client

Top-level package for the storefront client (session + cart consistency core).

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Nothing is imported here; subpackages are imported directly.
