"""
webshop.db.repositories.unit_of_work

Request-scoped SQLAlchemy unit of work.

Responsibilities:
- Open one `AsyncSession` per request and expose the three repositories on it.
- Leave commit/rollback decisions to the dispatcher.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from webshop.db.repositories.base import UnitOfWorkFactory
from webshop.db.repositories.orders import OrderRepo
from webshop.db.repositories.products import ProductRepo
from webshop.db.repositories.users import UserRepo


class SqlUnitOfWork:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserRepo(session)
        self.products = ProductRepo(session)
        self.orders = OrderRepo(session)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()


def sql_unit_of_work(session_factory: async_sessionmaker[AsyncSession]) -> UnitOfWorkFactory:
    @asynccontextmanager
    async def _scope() -> AsyncIterator[SqlUnitOfWork]:
        # Closing the session without commit discards anything left uncommitted.
        async with session_factory() as session:
            yield SqlUnitOfWork(session)

    return _scope
