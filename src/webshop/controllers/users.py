"""
webshop.controllers.users

User handlers: registration plus admin-only listing, viewing, role updates and deletion.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any

from starlette.responses import Response

from webshop.api import responses
from webshop.controllers.schemas import UserOut
from webshop.domain import DuplicateRecordError, Role
from webshop.routing.context import HandlerCall

NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 10
EMAIL_IN_USE = "Email is already in use"

_EMAIL_RE = re.compile(
    r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?",
    re.IGNORECASE,
)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_user(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    name = _text(data.get("name"))
    if not name:
        errors.append("Missing name")
    elif len(name) > NAME_MAX_LENGTH:
        errors.append("Name is too long")

    email = _text(data.get("email"))
    if not email:
        errors.append("Missing email")
    elif not _EMAIL_RE.fullmatch(email):
        errors.append("Invalid email")

    password = data.get("password")
    if not isinstance(password, str) or not password:
        errors.append("Missing password")
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append("Password is too short")

    if data.get("role") is not None and Role.parse(data["role"]) is None:
        errors.append("Unknown role")

    return errors


async def list_users(call: HandlerCall) -> Response:
    users = await call.uow.users.list_all()
    return responses.send_json([UserOut.of(u).to_json() for u in users])


async def register_user(call: HandlerCall) -> Response:
    data = call.data
    errors = validate_user(data)
    if errors:
        return responses.bad_request(errors)

    email = _text(data["email"])
    if await call.uow.users.find_by_email(email) is not None:
        return responses.bad_request(EMAIL_IN_USE)

    # Self-registration never grants more than the customer role.
    try:
        user = await call.uow.users.create(
            name=_text(data["name"]),
            email=email,
            password_hash=await call.hasher.hash(data["password"]),
            role=Role.customer,
        )
    except DuplicateRecordError:
        return responses.bad_request(EMAIL_IN_USE)
    return responses.created_resource(UserOut.of(user).to_json())


async def view_user(call: HandlerCall) -> Response:
    user = await call.uow.users.get(call.resource_id or "")
    if user is None:
        return responses.not_found()
    return responses.send_json(UserOut.of(user).to_json())


async def update_user(call: HandlerCall) -> Response:
    user = await call.uow.users.get(call.resource_id or "")
    if user is None:
        return responses.not_found()
    if user.id == call.actor.subject:
        return responses.bad_request("Updating own data is not allowed")

    raw_role = call.data.get("role")
    if raw_role is None or raw_role == "":
        return responses.bad_request("Missing role")
    role = Role.parse(raw_role)
    if role is None:
        return responses.bad_request("Unknown role")

    saved = await call.uow.users.update(replace(user, role=role))
    return responses.send_json(UserOut.of(saved).to_json())


async def delete_user(call: HandlerCall) -> Response:
    user_id = call.resource_id or ""
    if user_id == call.actor.subject:
        return responses.bad_request("Deleting own data is not allowed")

    user = await call.uow.users.get(user_id)
    if user is None:
        return responses.not_found()
    await call.uow.users.delete(user_id)
    return responses.send_json(UserOut.of(user).to_json())
