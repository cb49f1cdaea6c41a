"""
webshop.domain

Immutable domain records passed between repositories, the access gate and handlers.

Responsibilities:
- Define the role enumeration shared by auth and persistence.
- Define frozen record types so handlers never alias ORM rows.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class Role(enum.StrEnum):
    customer = "customer"
    admin = "admin"

    @classmethod
    def parse(cls, value: object) -> Role | None:
        # Stored and submitted roles are normalized the same way.
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: str
    name: str
    email: str
    password_hash: str
    role: Role


@dataclass(frozen=True, slots=True)
class ProductRecord:
    id: str
    name: str
    price: float
    image: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class OrderItem:
    # `product` is a snapshot of the product at ordering time.
    product: dict[str, Any]
    quantity: int


@dataclass(frozen=True, slots=True)
class OrderRecord:
    id: str
    customer_id: str
    items: tuple[OrderItem, ...]


class DuplicateRecordError(ValueError):
    """A value that must be unique (a user's email) is already stored."""
