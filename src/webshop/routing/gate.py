"""
webshop.routing.gate

Access-control gate in front of every domain handler.

Responsibilities:
- Decide, for a classified route + method + headers, whether the request may
  proceed, and otherwise which terminal response to send.
- Evaluate checks in a fixed precedence order; the first failing check wins.

Order for single resources:
    authenticate (401) -> collection role (403) -> Accept (406)
    -> method known (405) -> rule role (403)

Order for collections:
    known path (404) -> OPTIONS preflight (204) -> method allowed (405)
    -> Accept (406) -> authenticate (401) -> required role (403)
    -> JSON content type (400) -> forbidden role (403)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from starlette.responses import Response

from webshop.api import responses
from webshop.auth.models import Principal
from webshop.routing.matcher import Collection, RouteMatch, SingleResource, StaticAsset
from webshop.routing.negotiation import accepts_json, is_json_body
from webshop.routing.table import RouteRule, RouteTable

Authenticate = Callable[[], Awaitable[Principal | None]]


@dataclass(frozen=True, slots=True)
class ServeStatic:
    path: str


@dataclass(frozen=True, slots=True)
class Proceed:
    rule: RouteRule
    principal: Principal | None = None
    resource_id: str | None = None


@dataclass(frozen=True, slots=True)
class Respond:
    response: Response
    reason: str


Decision = ServeStatic | Proceed | Respond


class AccessGate:
    def __init__(self, table: RouteTable | None = None) -> None:
        self._table = table or RouteTable()

    @property
    def table(self) -> RouteTable:
        return self._table

    async def evaluate(
        self,
        match: RouteMatch,
        method: str,
        headers: Mapping[str, str],
        authenticate: Authenticate,
    ) -> Decision:
        method = method.upper()
        if isinstance(match, StaticAsset):
            return ServeStatic(path=match.path)
        if isinstance(match, SingleResource):
            return await self._single_resource(match, method, headers, authenticate)
        if isinstance(match, Collection):
            return await self._collection(match, method, headers, authenticate)
        return Respond(responses.not_found(), "unknown_path")

    async def _single_resource(
        self,
        match: SingleResource,
        method: str,
        headers: Mapping[str, str],
        authenticate: Authenticate,
    ) -> Decision:
        principal = await authenticate()
        if principal is None:
            return Respond(responses.basic_auth_challenge(), "unauthenticated")

        collection_role = self._table.resource_role(match.collection)
        if collection_role is not None and principal.role is not collection_role:
            return Respond(responses.forbidden(), "role")

        if not accepts_json(headers):
            return Respond(responses.not_acceptable(), "not_acceptable")

        rule = self._table.find(match.template, method)
        if rule is None:
            allowed = self._table.methods_for(match.template)
            return Respond(responses.method_not_allowed(allowed), "method_not_allowed")

        if rule.required_role is not None and principal.role is not rule.required_role:
            return Respond(responses.forbidden(), "role")

        return Proceed(rule=rule, principal=principal, resource_id=match.id)

    async def _collection(
        self,
        match: Collection,
        method: str,
        headers: Mapping[str, str],
        authenticate: Authenticate,
    ) -> Decision:
        allowed = self._table.methods_for(match.template)
        if not allowed:
            return Respond(responses.not_found(), "unknown_path")

        if method == "OPTIONS":
            return Respond(responses.preflight(allowed), "preflight")

        rule = self._table.find(match.template, method)
        if rule is None:
            return Respond(responses.method_not_allowed(allowed), "method_not_allowed")

        if not accepts_json(headers):
            return Respond(responses.not_acceptable(), "not_acceptable")

        principal: Principal | None = None
        if rule.authenticate:
            principal = await authenticate()
            if principal is None:
                return Respond(responses.basic_auth_challenge(), "unauthenticated")
            if rule.required_role is not None and principal.role is not rule.required_role:
                return Respond(responses.forbidden(), "role")

        if rule.json_body and not is_json_body(headers):
            return Respond(
                responses.bad_request("Invalid Content-Type. Expected application/json"),
                "content_type",
            )

        if (
            rule.forbidden_role is not None
            and principal is not None
            and principal.role is rule.forbidden_role
        ):
            return Respond(responses.forbidden(), "role")

        return Proceed(rule=rule, principal=principal)
