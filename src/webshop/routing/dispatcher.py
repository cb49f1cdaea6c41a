"""
webshop.routing.dispatcher

Top-level request entry point for the shop.

Responsibilities:
- Classify the path, run the access gate and serve static files.
- Read and parse JSON bodies under a read deadline.
- Invoke exactly one domain handler and return its response untouched.
- Own the unit of work: commit on success, roll back otherwise.
- Downgrade handler failures to `400 {"error": ...}`.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from starlette.requests import ClientDisconnect, Request
from starlette.responses import Response

from webshop.api import responses
from webshop.auth.authenticator import Authenticator
from webshop.auth.models import Principal
from webshop.auth.passwords import PasswordHasher
from webshop.db.repositories.base import UnitOfWork, UnitOfWorkFactory
from webshop.observability.logging import get_logger
from webshop.routing.context import HandlerCall, RequestContext
from webshop.routing.gate import AccessGate, Proceed, Respond, ServeStatic
from webshop.routing.matcher import match_route
from webshop.routing.static import StaticAssetServer

log = get_logger(__name__)


class RequestBodyError(Exception):
    pass


async def read_json_body(ctx: RequestContext, *, timeout_s: float) -> dict[str, Any]:
    try:
        async with asyncio.timeout(timeout_s):
            raw = await ctx.receive_body()
    except TimeoutError as e:
        raise RequestBodyError("Request body read timed out") from e
    except ClientDisconnect as e:
        raise RequestBodyError("Request body was not fully received") from e

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestBodyError("Invalid JSON body") from e
    if not isinstance(payload, dict):
        raise RequestBodyError("Expected a JSON object")
    return payload


class Dispatcher:
    def __init__(
        self,
        *,
        unit_of_work: UnitOfWorkFactory,
        hasher: PasswordHasher,
        static: StaticAssetServer,
        gate: AccessGate | None = None,
        body_read_timeout_s: float = 10.0,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._hasher = hasher
        self._static = static
        self._gate = gate or AccessGate()
        self._body_read_timeout_s = body_read_timeout_s

    async def dispatch(self, request: Request) -> Response:
        return await self.handle(RequestContext.from_request(request))

    async def handle(self, ctx: RequestContext) -> Response:
        match = match_route(ctx.method, ctx.path)

        async with self._unit_of_work() as uow:
            authenticate = _memoized_authenticate(
                Authenticator(users=uow.users, verifier=self._hasher), ctx
            )
            decision = await self._gate.evaluate(match, ctx.method, ctx.headers, authenticate)

            if isinstance(decision, ServeStatic):
                return await self._static.serve(decision.path)
            if isinstance(decision, Respond):
                log.debug("gate_denied", reason=decision.reason)
                return decision.response
            return await self._invoke(decision, ctx, uow)

    async def _invoke(self, decision: Proceed, ctx: RequestContext, uow: UnitOfWork) -> Response:
        body: dict[str, Any] | None = None
        if decision.rule.parse_body:
            try:
                body = await read_json_body(ctx, timeout_s=self._body_read_timeout_s)
            except RequestBodyError as e:
                log.info("request_body_rejected", error=str(e))
                return responses.bad_request(str(e))

        call = HandlerCall(
            uow=uow,
            hasher=self._hasher,
            principal=decision.principal,
            resource_id=decision.resource_id,
            body=body,
        )
        try:
            response = await decision.rule.handler(call)
            if response.status_code < 400:
                await uow.commit()
            else:
                await uow.rollback()
        except SQLAlchemyError as e:
            log.warning("storage_failed", handler=decision.rule.handler.__name__, exc_info=e)
            await uow.rollback()
            return responses.bad_request(_storage_error_message(e))
        except Exception as e:
            # Other handler failures surface as client errors.
            log.warning("handler_failed", handler=decision.rule.handler.__name__, exc_info=e)
            await uow.rollback()
            return responses.bad_request(str(e) or e.__class__.__name__)
        return response


def _storage_error_message(e: SQLAlchemyError) -> str:
    # str(e) embeds the SQL statement and its bound parameters (password hashes included).
    if isinstance(e, DBAPIError) and e.orig is not None:
        return str(e.orig) or e.orig.__class__.__name__
    return e.__class__.__name__


def _memoized_authenticate(authenticator: Authenticator, ctx: RequestContext):
    resolved: list[Principal | None] = []

    async def authenticate() -> Principal | None:
        if not resolved:
            resolved.append(await authenticator.authenticate(ctx.headers))
        return resolved[0]

    return authenticate
