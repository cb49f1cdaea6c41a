"""
webshop.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, repositories and the unit of work.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The access gate and handlers only see the protocols in `db.repositories.base`,
# so this package can be swapped for another backend without touching routing.
