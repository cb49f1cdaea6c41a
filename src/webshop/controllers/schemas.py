"""
webshop.controllers.schemas

Wire representations of the domain records.

Responsibilities:
- Serialize records with the public field names (`_id`, `customerId`).
- Keep password hashes out of every response.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from webshop.domain import OrderRecord, ProductRecord, UserRecord


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserOut(_WireModel):
    id: str = Field(serialization_alias="_id")
    name: str
    email: str
    role: str

    @classmethod
    def of(cls, user: UserRecord) -> UserOut:
        return cls(id=user.id, name=user.name, email=user.email, role=user.role.value)


class ProductOut(_WireModel):
    id: str = Field(serialization_alias="_id")
    name: str
    price: float
    image: str | None = None
    description: str | None = None

    @classmethod
    def of(cls, product: ProductRecord) -> ProductOut:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
            description=product.description,
        )


class OrderItemOut(_WireModel):
    product: dict[str, Any]
    quantity: int


class OrderOut(_WireModel):
    id: str = Field(serialization_alias="_id")
    customer_id: str = Field(serialization_alias="customerId")
    items: list[OrderItemOut]

    @classmethod
    def of(cls, order: OrderRecord) -> OrderOut:
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            items=[OrderItemOut(product=i.product, quantity=i.quantity) for i in order.items],
        )
