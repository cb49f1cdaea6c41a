"""
webshop.auth.authenticator

Resolve request headers to an authenticated `Principal`.

Responsibilities:
- Run Basic credential extraction, user lookup and password verification.
- Collapse every failure into a single "unauthenticated" outcome (no user enumeration).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from webshop.auth.credentials import extract_basic_credentials
from webshop.auth.models import Principal
from webshop.db.repositories.base import UserRepository
from webshop.observability.logging import get_logger

log = get_logger(__name__)


class CredentialVerifier(Protocol):
    async def verify(self, plain: str, stored: str) -> bool: ...

    async def burn(self, plain: str) -> None: ...


class Authenticator:
    def __init__(self, *, users: UserRepository, verifier: CredentialVerifier) -> None:
        self._users = users
        self._verifier = verifier

    async def authenticate(self, headers: Mapping[str, str]) -> Principal | None:
        creds = extract_basic_credentials(headers.get("authorization"))
        if creds is None:
            return None

        user = await self._users.find_by_email(creds.identifier)
        if user is None:
            await self._verifier.burn(creds.secret)
            log.debug("auth_failed")
            return None

        if not await self._verifier.verify(creds.secret, user.password_hash):
            log.debug("auth_failed")
            return None

        return Principal.from_user(user)


# --- Module Notes -----------------------------------------------------------
# Both failure branches log the same event. Do not add the identifier or the
# failure reason to the log line.
