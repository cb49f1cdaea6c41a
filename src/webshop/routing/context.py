"""
webshop.routing.context

Per-request value types.

Responsibilities:
- `RequestContext`: method, path, headers and lazy body access for one request.
- `HandlerCall`: everything a domain handler receives once the gate has passed.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from webshop.auth.models import Principal
from webshop.auth.passwords import PasswordHasher
from webshop.db.repositories.base import UnitOfWork


@dataclass(slots=True)
class RequestContext:
    method: str
    path: str
    headers: Mapping[str, str]
    receive_body: Callable[[], Awaitable[bytes]]

    @classmethod
    def from_request(cls, request: Request) -> RequestContext:
        return cls(
            method=request.method.upper(),
            path=request.url.path,
            headers=request.headers,
            receive_body=request.body,
        )


@dataclass(frozen=True, slots=True)
class HandlerCall:
    uow: UnitOfWork
    hasher: PasswordHasher
    principal: Principal | None = None
    resource_id: str | None = None
    body: dict[str, Any] | None = None

    @property
    def actor(self) -> Principal:
        if self.principal is None:
            raise RuntimeError("handler requires an authenticated principal")
        return self.principal

    @property
    def data(self) -> dict[str, Any]:
        return self.body or {}


Handler = Callable[[HandlerCall], Awaitable[Response]]
