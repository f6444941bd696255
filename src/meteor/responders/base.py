# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Responder protocol and the locked state shared by every variant.

A responder owns one request/response cycle. ``respond()`` records the exchange,
``do_response()`` classifies the response with the status predicate and decodes the
body into the success or failure target at most once. Accessors take the read side
of a reader/writer lock; recording and decoding take the write side.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any, Protocol

from ..errors import DecodeError
from ..http.models import HttpRequest, HttpResponse
from ..utils.rwlock import ReadWriteLock
from .decode import copy_target, response_truncated

logger = logging.getLogger(__name__)

StatusPredicate = Callable[[int, "HttpResponse | None"], bool]


def is_ok(status_code: int, response: HttpResponse | None = None) -> bool:  # noqa: ARG001
    """Default classification: 2xx is OK."""
    return 200 <= status_code <= 299


class Responder(Protocol):
    def respond(
        self,
        request: HttpRequest | None,
        response: HttpResponse | None,
        error: BaseException | None = None,
    ) -> "Responder": ...

    def do_response(self) -> tuple[HttpResponse | None, BaseException | None]: ...

    def get_request(self) -> HttpRequest | None: ...

    def get_response(self) -> HttpResponse | None: ...

    def get_success(self) -> Any: ...

    def get_failure(self) -> Any: ...

    def get_error(self) -> BaseException | None: ...

    def is_ok(self, status_code: int, response: HttpResponse | None = None) -> bool: ...

    def clone(self) -> "Responder": ...


class BaseResponder:
    """Common state for responders; subclasses implement ``_decode``."""

    def __init__(
        self,
        success: Any = None,
        failure: Any = None,
        is_ok_fn: StatusPredicate | None = None,
    ) -> None:
        self._lock = ReadWriteLock()
        self._is_ok = is_ok_fn
        self._decoded = False
        self.request: HttpRequest | None = None
        self.response: HttpResponse | None = None
        self.error: BaseException | None = None
        self.success = success
        self.failure = failure

    def __repr__(self) -> str:
        return f"{type(self).__name__}(success={self.success!r}, failure={self.failure!r}, error={self.error!r})"

    def is_ok(self, status_code: int, response: HttpResponse | None = None) -> bool:
        predicate = self._is_ok or is_ok
        return predicate(status_code, response)

    def respond(
        self,
        request: HttpRequest | None,
        response: HttpResponse | None,
        error: BaseException | None = None,
    ) -> BaseResponder:
        with self._lock.write():
            self.request = request
            self.response = response
            self.error = error
            self._decoded = False
        return self

    def do_response(self) -> tuple[HttpResponse | None, BaseException | None]:
        with self._lock.write():
            if self.response is None:
                if self.error is None:
                    logger.debug("%s: no response recorded, nothing to decode", type(self).__name__)
                return None, self.error
            if not self._decoded:
                self._decoded = True
                if response_truncated(self.response):
                    decode_error = self._truncated(self.response)
                else:
                    decode_error = self._decode(self.response)
                if decode_error is not None:
                    logger.warning("%s: %s", type(self).__name__, decode_error)
                    self.error = decode_error
            return self.response, self.error

    def _decode(self, response: HttpResponse) -> DecodeError | None:
        """Decode ``response`` into the targets. Called with the write lock held."""
        raise NotImplementedError

    def _truncated(self, response: HttpResponse) -> DecodeError:
        """Skip decoding a partial body; the eligible slot keeps the bytes that were read."""
        body = bytes(response.content)
        slot = "success" if self.is_ok(response.status_code, response) else "failure"
        if getattr(self, slot) is not None:
            setattr(self, slot, body)
        limit = response.meta.get("body_bytes_limit")
        return DecodeError(
            f"Response body truncated at {limit if limit is not None else len(body)} bytes",
            url=response.url,
            body=body,
            status_code=response.status_code,
        )

    def _decode_slot(self, slot: str, decoder: Callable[[Any, HttpResponse], None], response: HttpResponse) -> DecodeError | None:
        """Run ``decoder`` on one target; on failure keep the raw body in its place."""
        try:
            decoder(getattr(self, slot), response)
        except DecodeError as exc:
            setattr(self, slot, exc.body)
            return exc
        return None

    def get_request(self) -> HttpRequest | None:
        with self._lock.read():
            return self.request

    def get_response(self) -> HttpResponse | None:
        with self._lock.read():
            return self.response

    def get_success(self) -> Any:
        with self._lock.read():
            return self.success

    def get_failure(self) -> Any:
        with self._lock.read():
            return self.failure

    def get_error(self) -> BaseException | None:
        with self._lock.read():
            return self.error

    def clone(self) -> BaseResponder:
        """Return an unarmed copy with copied targets, for use by another request cycle."""
        with self._lock.read():
            twin = copy.copy(self)
            twin.success = copy_target(self.success)
            twin.failure = copy_target(self.failure)
        twin._lock = ReadWriteLock()
        twin._decoded = False
        twin.request = None
        twin.response = None
        twin.error = None
        return twin


__all__ = ["BaseResponder", "Responder", "StatusPredicate", "is_ok"]
