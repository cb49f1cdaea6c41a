"""
webshop.db.seed

Initial user loading.

Responsibilities:
- Create users (including admins, which self-registration cannot) from a JSON file.
- Skip emails that already exist so restarts are idempotent.

File format: a JSON array of `{"name", "email", "password", "role"}` objects.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from webshop.auth.passwords import PasswordHasher
from webshop.controllers.users import validate_user
from webshop.db.repositories.users import UserRepo
from webshop.domain import Role
from webshop.observability.logging import get_logger

log = get_logger(__name__)


class SeedError(ValueError):
    pass


def load_seed_file(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(u, dict) for u in data):
        raise SeedError(f"{path}: expected a JSON array of user objects")
    return data


async def seed_users(
    session_factory: async_sessionmaker[AsyncSession],
    users: Iterable[Mapping[str, Any]],
    *,
    hasher: PasswordHasher,
) -> int:
    created = 0
    async with session_factory() as session:
        repo = UserRepo(session)
        for raw in users:
            entry = dict(raw)
            errors = validate_user(entry)
            if errors:
                raise SeedError(f"invalid seed user {entry.get('email')!r}: {', '.join(errors)}")
            email = entry["email"].strip()
            if await repo.find_by_email(email) is not None:
                continue
            await repo.create(
                name=entry["name"].strip(),
                email=email,
                password_hash=await hasher.hash(entry["password"]),
                role=Role.parse(entry.get("role")) or Role.customer,
            )
            created += 1
        await session.commit()
    log.info("users_seeded", created=created)
    return created
