"""
webshop.routing.matcher

Path classification.

Responsibilities:
- Classify a request path into a static asset, a collection route, a single
  resource (`/<collection>/<id>`) or nothing.
- Stay independent of which methods a route accepts (see `routing.table`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

API_PREFIX = "/api"

COLLECTIONS = frozenset({"register", "users", "products", "orders"})
RESOURCE_COLLECTIONS = frozenset({"users", "products", "orders"})

ID_PATTERN = r"[0-9a-z]{8,24}"

_RESOURCE_RE = re.compile(
    rf"(?:{API_PREFIX})?/(?P<collection>{'|'.join(sorted(RESOURCE_COLLECTIONS))})"
    rf"/(?P<id>{ID_PATTERN})"
)


@dataclass(frozen=True, slots=True)
class StaticAsset:
    path: str


@dataclass(frozen=True, slots=True)
class Collection:
    name: str

    @property
    def template(self) -> str:
        return f"{API_PREFIX}/{self.name}"


@dataclass(frozen=True, slots=True)
class SingleResource:
    collection: str
    id: str

    @property
    def template(self) -> str:
        return f"{API_PREFIX}/{self.collection}/{{id}}"


@dataclass(frozen=True, slots=True)
class Unmatched:
    path: str


RouteMatch = StaticAsset | Collection | SingleResource | Unmatched


def match_route(method: str, path: str) -> RouteMatch:
    # Non-API GETs are files, even when they look like `/users/<id>`.
    if method.upper() == "GET" and not path.startswith(API_PREFIX):
        return StaticAsset(path="index.html" if path in ("", "/") else path)

    m = _RESOURCE_RE.fullmatch(path)
    if m is not None:
        return SingleResource(collection=m.group("collection"), id=m.group("id"))

    prefix = f"{API_PREFIX}/"
    if path.startswith(prefix) and path[len(prefix) :] in COLLECTIONS:
        return Collection(name=path[len(prefix) :])

    return Unmatched(path=path)
