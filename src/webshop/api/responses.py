"""
webshop.api.responses

Terminal response builders used by the access gate and the domain handlers.

Responsibilities:
- Keep status codes, challenge headers and the `{"error": ...}` body shape in one place.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from starlette.responses import JSONResponse, Response
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_406_NOT_ACCEPTABLE,
)

CORS_ALLOW_HEADERS = "Content-Type,Accept"
CORS_EXPOSE_HEADERS = "Content-Type,Accept"
CORS_MAX_AGE = "86400"


def send_json(payload: Any, status_code: int = HTTP_200_OK) -> Response:
    return JSONResponse(payload, status_code=status_code)


def created_resource(payload: Any) -> Response:
    return send_json(payload, HTTP_201_CREATED)


def no_content() -> Response:
    return Response(status_code=HTTP_204_NO_CONTENT)


def bad_request(error: str | list[str] | None = None) -> Response:
    if error:
        return send_json({"error": error}, HTTP_400_BAD_REQUEST)
    return Response(status_code=HTTP_400_BAD_REQUEST)


def basic_auth_challenge() -> Response:
    return Response(status_code=HTTP_401_UNAUTHORIZED, headers={"WWW-Authenticate": "Basic"})


def forbidden() -> Response:
    return Response(status_code=HTTP_403_FORBIDDEN)


def not_found() -> Response:
    return Response(status_code=HTTP_404_NOT_FOUND)


def method_not_allowed(allowed: Iterable[str]) -> Response:
    return Response(
        status_code=HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": ",".join(allowed)},
    )


def not_acceptable() -> Response:
    return Response(status_code=HTTP_406_NOT_ACCEPTABLE)


def preflight(allowed: Iterable[str]) -> Response:
    return Response(
        status_code=HTTP_204_NO_CONTENT,
        headers={
            "Access-Control-Allow-Methods": ",".join(allowed),
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            "Access-Control-Max-Age": CORS_MAX_AGE,
            "Access-Control-Expose-Headers": CORS_EXPOSE_HEADERS,
        },
    )
