"""
webshop.db.repositories.products

Repository for `Product` entities.
"""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.db.models import Product
from webshop.domain import ProductRecord


def _to_record(row: Product) -> ProductRecord:
    return ProductRecord(
        id=row.id,
        name=row.name,
        price=row.price,
        image=row.image,
        description=row.description,
    )


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, product_id: str) -> ProductRecord | None:
        row = await self._session.get(Product, product_id)
        return _to_record(row) if row is not None else None

    async def find_by_name(self, name: str) -> ProductRecord | None:
        stmt = select(Product).where(Product.name == name).limit(1)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return _to_record(row) if row is not None else None

    async def list_all(self) -> list[ProductRecord]:
        stmt = select(Product).order_by(Product.created_at, Product.id)
        return [_to_record(r) for r in (await self._session.execute(stmt)).scalars().all()]

    async def create(
        self,
        *,
        name: str,
        price: float,
        image: str | None = None,
        description: str | None = None,
    ) -> ProductRecord:
        row = Product(name=name, price=price, image=image, description=description)
        self._session.add(row)
        await self._session.flush()
        return _to_record(row)

    async def update(self, product: ProductRecord) -> ProductRecord:
        stmt = (
            update(Product)
            .where(Product.id == product.id)
            .values(
                name=product.name,
                price=product.price,
                image=product.image,
                description=product.description,
            )
        )
        await self._session.execute(stmt)
        return product

    async def delete(self, product_id: str) -> None:
        await self._session.execute(delete(Product).where(Product.id == product_id))
