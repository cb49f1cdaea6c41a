"""
webshop.db.models

Persistence schema for the shop.

Responsibilities:
- Define ORM models for the three document kinds:
  - User: credentials (bcrypt hash) and role
  - Product: catalogue entry
  - Order: a customer's basket snapshot
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Enum, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from webshop.db.base import Base
from webshop.domain import Role


def new_id() -> str:
    # 24 lowercase hex chars; always satisfies the router's id pattern.
    return secrets.token_hex(12)


def _utcnow() -> datetime:
    # Naive UTC; SQLite has no timezone-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.customer)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(String(24), nullable=False)
    # [{"product": {...}, "quantity": n}, ...]
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_orders_customer_created", "customer_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# No foreign key from orders to users/products: an order keeps its product
# snapshot even after the product or the customer is deleted.
