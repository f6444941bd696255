# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body providers."""

from __future__ import annotations

import json
from typing import Any, Protocol
from urllib.parse import urlencode

from .url import query_pairs

JPEG_CONTENT_TYPE = "image/jpeg"
PNG_CONTENT_TYPE = "image/png"
GIF_CONTENT_TYPE = "image/gif"
TEXT_CONTENT_TYPE = "text/plain"
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class BodyProvider(Protocol):
    """Provides body content for a materialized request."""

    def content_type(self) -> str:
        """Content-Type of the body, or an empty string to leave the header alone."""
        ...

    def body(self) -> bytes: ...


class RawBodyProvider:
    """Wraps an already-encoded body (bytes, str or a readable object)."""

    def __init__(self, body: Any):
        self._body = body

    def content_type(self) -> str:
        return ""

    def body(self) -> bytes:
        body = self._body
        if body is None:
            raise ValueError("no body")
        read = getattr(body, "read", None)
        if callable(read):
            body = read()
        if isinstance(body, str):
            return body.encode("utf-8")
        return bytes(body)


class JSONBodyProvider:
    """Encodes a JSON-serializable payload."""

    def __init__(self, payload: Any):
        self.payload = payload

    def content_type(self) -> str:
        return JSON_CONTENT_TYPE

    def body(self) -> bytes:
        return (json.dumps(self.payload) + "\n").encode("utf-8")


class FormBodyProvider:
    """URL-encodes a mapping or dataclass payload."""

    def __init__(self, payload: Any):
        self.payload = payload

    def content_type(self) -> str:
        return FORM_CONTENT_TYPE

    def body(self) -> bytes:
        return urlencode(query_pairs(self.payload)).encode("ascii")


__all__ = [
    "BodyProvider",
    "FORM_CONTENT_TYPE",
    "FormBodyProvider",
    "GIF_CONTENT_TYPE",
    "JPEG_CONTENT_TYPE",
    "JSONBodyProvider",
    "JSON_CONTENT_TYPE",
    "PNG_CONTENT_TYPE",
    "RawBodyProvider",
    "TEXT_CONTENT_TYPE",
]
