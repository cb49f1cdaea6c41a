"""
webshop.auth.credentials

HTTP Basic credential extraction.

Responsibilities:
- Turn an `Authorization` header value into an (identifier, secret) pair.
- Treat every malformation as "no credentials" instead of raising.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BasicCredentials:
    identifier: str
    secret: str


def extract_basic_credentials(header: str | None) -> BasicCredentials | None:
    if not header:
        return None

    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme != "Basic" or not token:
        return None

    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    identifier, sep, secret = decoded.partition(":")
    if not sep:
        return None
    return BasicCredentials(identifier=identifier, secret=secret)
