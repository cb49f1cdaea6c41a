"""
webshop.db.repositories.base

Storage-agnostic repository contracts.

Responsibilities:
- Describe the operations the authenticator and handlers need from storage.
- Describe the per-request unit of work bundling the three repositories.

Implementations: SQLAlchemy (`db.repositories.*`) and in-memory fakes in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Protocol

from webshop.domain import OrderItem, OrderRecord, ProductRecord, Role, UserRecord


class UserRepository(Protocol):
    async def get(self, user_id: str) -> UserRecord | None: ...

    async def find_by_email(self, email: str) -> UserRecord | None: ...

    async def list_all(self) -> list[UserRecord]: ...

    async def create(
        self, *, name: str, email: str, password_hash: str, role: Role
    ) -> UserRecord: ...

    async def update(self, user: UserRecord) -> UserRecord: ...

    async def delete(self, user_id: str) -> None: ...


class ProductRepository(Protocol):
    async def get(self, product_id: str) -> ProductRecord | None: ...

    async def find_by_name(self, name: str) -> ProductRecord | None: ...

    async def list_all(self) -> list[ProductRecord]: ...

    async def create(
        self,
        *,
        name: str,
        price: float,
        image: str | None = None,
        description: str | None = None,
    ) -> ProductRecord: ...

    async def update(self, product: ProductRecord) -> ProductRecord: ...

    async def delete(self, product_id: str) -> None: ...


class OrderRepository(Protocol):
    async def get(self, order_id: str) -> OrderRecord | None: ...

    async def list_all(self) -> list[OrderRecord]: ...

    async def list_for_customer(self, customer_id: str) -> list[OrderRecord]: ...

    async def create(self, *, customer_id: str, items: Sequence[OrderItem]) -> OrderRecord: ...


class UnitOfWork(Protocol):
    users: UserRepository
    products: ProductRepository
    orders: OrderRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


UnitOfWorkFactory = Callable[[], AbstractAsyncContextManager[Any]]
