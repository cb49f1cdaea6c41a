"""
webshop.auth.passwords

Password hashing and verification (bcrypt).

Responsibilities:
- Hash a plaintext password once, when a user is created.
- Verify a plaintext password against a stored hash.
- Keep bcrypt's CPU work off the event loop.
"""

from __future__ import annotations

import bcrypt
from starlette.concurrency import run_in_threadpool

# bcrypt only looks at the first 72 bytes; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, *, rounds: int = 10) -> None:
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash_sync(self, plain: str) -> str:
        return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify_sync(self, plain: str, stored: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plain), stored.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            # Corrupt or foreign hash format.
            return False

    async def hash(self, plain: str) -> str:
        return await run_in_threadpool(self.hash_sync, plain)

    async def verify(self, plain: str, stored: str) -> bool:
        return await run_in_threadpool(self.verify_sync, plain, stored)

    async def burn(self, plain: str) -> None:
        """
        Spend one verification's worth of work without a real hash.
        Used on lookup misses so unknown users and bad passwords cost the same.
        """

        if self._dummy_hash is None:
            self._dummy_hash = await run_in_threadpool(
                bcrypt.hashpw, b"webshop-dummy-password", bcrypt.gensalt(rounds=self._rounds)
            )
        await run_in_threadpool(bcrypt.checkpw, _encode(plain), self._dummy_hash)
