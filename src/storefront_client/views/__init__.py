"""
storefront_client.views

Page controllers (the view layer).

Responsibilities:
- Call stores/services from the shopper's actions and shape what a page shows.
- Apply the authorization gate before cart mutations and checkout.
- Translate results into redirects or page view models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Views hold only local UI state (form fields, selected image, quantity stepper).
