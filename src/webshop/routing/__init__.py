"""
webshop.routing

Hand-rolled request routing for the shop API.

Responsibilities:
- Path classification, declarative route table and content negotiation.
- The access-control gate and the dispatcher that composes them.
"""

# Package marker.
