"""
webshop.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories and the request-scoped unit of work.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; validation and access rules live in
# `controllers` and `routing`.
