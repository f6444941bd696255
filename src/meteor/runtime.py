# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade sharing one transport across services and fan-out jobs."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType
from typing import Any

from .config import HttpSettings, load_async_settings, load_http_settings
from .fanout.job import AsyncDoer, AsyncJob
from .http.client import HttpClient, create_default_http_client
from .service import Service


class Meteor:
    """
    Convenience wrapper that wires a shared HTTP client into every Service it hands out.

    Services from ``service()`` are copies of ``common``, so configure shared state
    (base URL, auth headers) on ``common`` once and derive endpoints from it.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self.http_settings = settings or load_http_settings()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.common = Service(self.http_client, self.http_settings)
        self.last_job: AsyncJob | None = None

    def service(self) -> Service:
        return self.common.new()

    def do_async(self, doers: Sequence[AsyncDoer], target_count: int = 0) -> list[Any]:
        self.last_job = AsyncJob(doers, target_count, settings=load_async_settings())
        return self.last_job.do()

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> Meteor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
