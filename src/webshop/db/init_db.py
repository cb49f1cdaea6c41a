"""
webshop.db.init_db

Startup helpers for the storage layer.

Responsibilities:
- Fail fast when the database is unreachable at startup.
- Create tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from webshop.db import models  # noqa: F401  # registers models on Base.metadata
from webshop.db.base import Base


async def check_connectivity(engine: AsyncEngine) -> None:
    """
    Startup probe. Errors propagate: losing storage at boot is fatal for the process.
    """

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
