"""
webshop.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) handed to the gate and handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from webshop.domain import Role, UserRecord


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. Built per request, never persisted.
    """

    subject: str
    role: Role

    @classmethod
    def from_user(cls, user: UserRecord) -> Principal:
        return cls(subject=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; handlers needing more than id/role load the user record.
