"""
webshop.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Look users up by id (admin routes) or email (authentication, registration).
- Persist new users and role changes; report a taken email as `DuplicateRecordError`.
"""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.db.models import User
from webshop.domain import DuplicateRecordError, Role, UserRecord


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        role=Role(row.role),
    )


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> UserRecord | None:
        row = await self._session.get(User, user_id)
        return _to_record(row) if row is not None else None

    async def find_by_email(self, email: str) -> UserRecord | None:
        stmt = select(User).where(User.email == email)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return _to_record(row) if row is not None else None

    async def list_all(self) -> list[UserRecord]:
        stmt = select(User).order_by(User.created_at, User.id)
        return [_to_record(r) for r in (await self._session.execute(stmt)).scalars().all()]

    async def create(
        self, *, name: str, email: str, password_hash: str, role: Role
    ) -> UserRecord:
        row = User(name=name, email=email, password_hash=password_hash, role=role)
        self._session.add(row)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Only the email column is unique; a concurrent registration got there first.
            raise DuplicateRecordError("email") from e
        return _to_record(row)

    async def update(self, user: UserRecord) -> UserRecord:
        # The caller hands over a complete new record; nothing is mutated in place.
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(name=user.name, email=user.email, role=user.role)
        )
        await self._session.execute(stmt)
        return user

    async def delete(self, user_id: str) -> None:
        await self._session.execute(delete(User).where(User.id == user_id))
