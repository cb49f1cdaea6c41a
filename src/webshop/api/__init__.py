"""
webshop.api

API package for the web shop service.

Responsibilities:
- FastAPI app factory, router modules and dependency wiring.
- Shared terminal response builders.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: the shop's routes are resolved by `webshop.routing`.
