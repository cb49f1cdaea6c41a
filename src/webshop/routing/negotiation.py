"""
webshop.routing.negotiation

Content-negotiation predicates over request headers.
"""

from __future__ import annotations

from collections.abc import Mapping

JSON_MEDIA_TYPE = "application/json"
_ACCEPTABLE = frozenset({JSON_MEDIA_TYPE, "*/*"})


def accepts_json(headers: Mapping[str, str]) -> bool:
    """
    True when the client accepts a JSON response.

    The Accept value is split on commas and parameters (`;q=...`) are dropped, so
    `application/jsonx` does not count. A missing or blank header accepts anything.
    """

    accept = headers.get("accept")
    if accept is None or not accept.strip():
        return True
    for token in accept.split(","):
        media_type = token.split(";", 1)[0].strip().lower()
        if media_type in _ACCEPTABLE:
            return True
    return False


def is_json_body(headers: Mapping[str, str]) -> bool:
    # Exact match only: `application/json; charset=utf-8` is rejected.
    return headers.get("content-type", "").lower() == JSON_MEDIA_TYPE
