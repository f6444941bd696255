# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by transports, responders and the builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .headers import header_value, normalize_headers

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Materialized request consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = True

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)

    @property
    def content(self) -> bytes:
        """Return the request body as bytes."""
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return bytes(self.body)


@dataclass
class HttpResponse:
    """Raw HTTP response as returned by a transport."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    request: HttpRequest | None = None
    encoding: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.headers = normalize_headers(self.headers)

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code <= 299

    @property
    def text(self) -> str:
        encoding = self.encoding or "utf-8"
        try:
            return self.content.decode(encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def header(self, name: str, default: str = "") -> str:
        return header_value(self.headers, name, default)
