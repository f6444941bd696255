# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import threading

from ..errors import ErrorCategory, TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Entries are keyed by ``"METHOD url"`` or by bare url; a ``method``-specific
    entry wins. An entry may be an ``HttpResponse`` or an exception to raise.
    Safe to share between fan-out worker threads.
    """

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException, *, method: str | None = None) -> None:
        key = f"{method.upper()} {url}" if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        entry = self._responses.get(f"{request.method.upper()} {request.url}")
        if entry is None:
            entry = self._responses.get(request.url)
        if entry is None:
            raise TransportError(
                "No stubbed response configured",
                url=request.url,
                category=ErrorCategory.CONNECTION_ERROR,
            )
        if isinstance(entry, BaseException):
            raise entry
        if entry.request is None:
            return HttpResponse(
                status_code=entry.status_code,
                headers=dict(entry.headers),
                content=entry.content,
                url=entry.url or request.url,
                request=request,
                encoding=entry.encoding,
                meta=dict(entry.meta),
            )
        return entry

    def close(self) -> None:
        self.closed = True
