"""
webshop.db.repositories.orders

Repository for `Order` entities.

Responsibilities:
- Persist orders with their item snapshots.
- Query all orders (admin view) or a single customer's orders.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.db.models import Order
from webshop.domain import OrderItem, OrderRecord


def _to_record(row: Order) -> OrderRecord:
    return OrderRecord(
        id=row.id,
        customer_id=row.customer_id,
        items=tuple(
            OrderItem(product=dict(item["product"]), quantity=int(item["quantity"]))
            for item in row.items or []
        ),
    )


class OrderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, order_id: str) -> OrderRecord | None:
        row = await self._session.get(Order, order_id)
        return _to_record(row) if row is not None else None

    async def list_all(self) -> list[OrderRecord]:
        stmt = select(Order).order_by(Order.created_at, Order.id)
        return [_to_record(r) for r in (await self._session.execute(stmt)).scalars().all()]

    async def list_for_customer(self, customer_id: str) -> list[OrderRecord]:
        stmt = (
            select(Order)
            .where(Order.customer_id == customer_id)
            .order_by(Order.created_at, Order.id)
        )
        return [_to_record(r) for r in (await self._session.execute(stmt)).scalars().all()]

    async def create(self, *, customer_id: str, items: Sequence[OrderItem]) -> OrderRecord:
        row = Order(
            customer_id=customer_id,
            items=[{"product": dict(i.product), "quantity": i.quantity} for i in items],
        )
        self._session.add(row)
        await self._session.flush()
        return _to_record(row)


# --- Module Notes -----------------------------------------------------------
# Orders are append-only from the API's point of view (no update/delete routes).
