# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport abstraction and factory."""

import threading
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for executing a prepared request.

    Implementations return the raw response for any status code and raise
    ``meteor.errors.TransportError`` when no response could be obtained.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


_default_client: HttpClient | None = None
_default_client_lock = threading.Lock()


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


def get_default_http_client() -> HttpClient:
    """Return the process-wide client used by services that were not given one."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = create_default_http_client()
        return _default_client
