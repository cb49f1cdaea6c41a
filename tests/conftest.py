"""
tests.conftest

Shared fixtures.

Responsibilities:
- Boot the real app against a temporary SQLite file with seeded users.
- Provide in-memory repository fakes for component-level tests.
"""

from __future__ import annotations

import base64
import itertools
import json
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from webshop.api.app import create_app
from webshop.domain import OrderItem, OrderRecord, ProductRecord, Role, UserRecord
from webshop.settings import Settings

ADMIN = {
    "name": "Admin",
    "email": "admin@email.com",
    "password": "1234567890",
    "role": "admin",
}
CUSTOMER = {
    "name": "Customer",
    "email": "customer@email.com",
    "password": "0987654321",
    "role": "customer",
}
OTHER_CUSTOMER = {
    "name": "Other Customer",
    "email": "other@email.com",
    "password": "abcdefghij",
    "role": "customer",
}


def basic(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode("ascii")
    return {"Authorization": f"Basic {token}", "Accept": "application/json"}


def auth_as(user: dict[str, str]) -> dict[str, str]:
    return basic(user["email"], user["password"])


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>shop</h1>", encoding="utf-8")
    (public / "js").mkdir()
    (public / "js" / "cart.js").write_text("console.log('cart');", encoding="utf-8")

    seed = tmp_path / "users.json"
    seed.write_text(json.dumps([ADMIN, CUSTOMER, OTHER_CUSTOMER]), encoding="utf-8")

    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}",
        public_dir=public,
        seed_users_file=seed,
        bcrypt_rounds=4,
        log_json=False,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def user_id(client: httpx.AsyncClient, email: str) -> str:
    r = await client.get("/api/users", headers=auth_as(ADMIN))
    assert r.status_code == 200
    return next(u["_id"] for u in r.json() if u["email"] == email)


# --- In-memory fakes --------------------------------------------------------

_ids = (f"{n:024x}" for n in itertools.count(1))


class FakeUsers:
    def __init__(self, users: Sequence[UserRecord] = ()) -> None:
        self.rows = {u.id: u for u in users}
        self.lookups: list[str] = []

    async def get(self, user_id: str) -> UserRecord | None:
        return self.rows.get(user_id)

    async def find_by_email(self, email: str) -> UserRecord | None:
        self.lookups.append(email)
        return next((u for u in self.rows.values() if u.email == email), None)

    async def list_all(self) -> list[UserRecord]:
        return list(self.rows.values())

    async def create(self, *, name: str, email: str, password_hash: str, role: Role) -> UserRecord:
        user = UserRecord(next(_ids), name, email, password_hash, role)
        self.rows[user.id] = user
        return user

    async def update(self, user: UserRecord) -> UserRecord:
        self.rows[user.id] = user
        return user

    async def delete(self, user_id: str) -> None:
        self.rows.pop(user_id, None)


class FakeProducts:
    def __init__(self) -> None:
        self.rows: dict[str, ProductRecord] = {}

    async def get(self, product_id: str) -> ProductRecord | None:
        return self.rows.get(product_id)

    async def find_by_name(self, name: str) -> ProductRecord | None:
        return next((p for p in self.rows.values() if p.name == name), None)

    async def list_all(self) -> list[ProductRecord]:
        return list(self.rows.values())

    async def create(self, *, name, price, image=None, description=None) -> ProductRecord:
        product = ProductRecord(next(_ids), name, price, image, description)
        self.rows[product.id] = product
        return product

    async def update(self, product: ProductRecord) -> ProductRecord:
        self.rows[product.id] = product
        return product

    async def delete(self, product_id: str) -> None:
        self.rows.pop(product_id, None)


class FakeOrders:
    def __init__(self) -> None:
        self.rows: dict[str, OrderRecord] = {}

    async def get(self, order_id: str) -> OrderRecord | None:
        return self.rows.get(order_id)

    async def list_all(self) -> list[OrderRecord]:
        return list(self.rows.values())

    async def list_for_customer(self, customer_id: str) -> list[OrderRecord]:
        return [o for o in self.rows.values() if o.customer_id == customer_id]

    async def create(self, *, customer_id: str, items: Sequence[OrderItem]) -> OrderRecord:
        order = OrderRecord(next(_ids), customer_id, tuple(items))
        self.rows[order.id] = order
        return order


@dataclass
class FakeUnitOfWork:
    users: FakeUsers
    products: FakeProducts
    orders: FakeOrders
    commits: int = 0
    rollbacks: int = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    def factory(self):
        @asynccontextmanager
        async def _scope() -> AsyncIterator[FakeUnitOfWork]:
            yield self

        return _scope


class PlainVerifier:
    """Stores passwords as `plain:<password>`; counts calls."""

    def __init__(self) -> None:
        self.verified = 0
        self.burned = 0

    async def verify(self, plain: str, stored: str) -> bool:
        self.verified += 1
        return stored == f"plain:{plain}"

    async def burn(self, plain: str) -> None:
        self.burned += 1


def make_user(email: str, password: str, role: Role = Role.customer) -> UserRecord:
    return UserRecord(next(_ids), email.split("@")[0], email, f"plain:{password}", role)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork(users=FakeUsers(), products=FakeProducts(), orders=FakeOrders())
