# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concurrent fan-out of requests and other units of work."""

from .job import AUTO_STOPPED, RESTARTED, WORKERS_EXHAUSTED, AsyncDoer, AsyncJob, new_async_doers
from .requests import AsyncRequest, AsyncResponse

__all__ = [
    "AUTO_STOPPED",
    "AsyncDoer",
    "AsyncJob",
    "AsyncRequest",
    "AsyncResponse",
    "RESTARTED",
    "WORKERS_EXHAUSTED",
    "new_async_doers",
]
