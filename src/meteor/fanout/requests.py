# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""AsyncDoer implementation that performs one HTTP round trip per worker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import MeteorError
from ..http.models import HttpRequest, HttpResponse
from ..responders.base import Responder

if TYPE_CHECKING:
    from ..service import Service

logger = logging.getLogger(__name__)


@dataclass
class AsyncResponse:
    """Outcome of one fanned-out request."""

    responder: Responder
    response: HttpResponse | None = None
    error: BaseException | None = None
    index: int | None = None

    def get_response(self) -> HttpResponse | None:
        return self.response

    def get_success(self) -> Any:
        return self.responder.get_success()

    def get_failure(self) -> Any:
        return self.responder.get_failure()

    def get_error(self) -> BaseException | None:
        return self.error


class AsyncRequest:
    """
    Request built from its own copy of a Service, with its own responder.

    Build errors are kept on ``error`` and reported through the AsyncResponse
    instead of being raised from a worker thread.
    """

    def __init__(self, service: Service, responder: Responder | None = None):
        self.service = service.new()
        if responder is not None:
            self.service.responder(responder)
        self.responder = self.service.get_responder()
        self.request: HttpRequest | None = None
        self.error: BaseException | None = None
        self.index: int | None = None
        try:
            self.request = self.service.request()
        except MeteorError as exc:
            self.error = exc

    def get_request(self) -> HttpRequest | None:
        return self.request

    def get_success(self) -> Any:
        return self.responder.get_success()

    def get_failure(self) -> Any:
        return self.responder.get_failure()

    def get_error(self) -> BaseException | None:
        return self.error

    def prepare(self, index: int) -> None:
        self.index = index

    def do(self) -> AsyncResponse:
        if self.request is None:
            return AsyncResponse(self.responder, None, self.error, self.index)
        try:
            response = self.service.do(self.request)
        except MeteorError as exc:
            logger.debug("Async request %s failed: %s", self.index, exc)
            return AsyncResponse(self.responder, self.responder.get_response(), exc, self.index)
        return AsyncResponse(self.responder, response, None, self.index)

    def to_stop(self) -> str:
        return ""


__all__ = ["AsyncRequest", "AsyncResponse"]
