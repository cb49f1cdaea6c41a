"""
webshop.controllers

Domain handlers invoked by the dispatcher once the access gate has passed.

Responsibilities:
- Validate request payloads and translate repository results into responses.
"""

# Package marker.
