"""
webshop.api.routers

FastAPI routers: operational probes and the catch-all shop route.
"""
