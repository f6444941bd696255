# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Binary responder: raw bytes on success, JSON error payloads on failure."""

from __future__ import annotations

from typing import Any

from ..errors import DecodeError
from ..http.models import HttpResponse
from .base import BaseResponder, StatusPredicate
from .decode import check_json_target, decode_json_into


class BinaryResponder(BaseResponder):
    """
    For OK responses the success value becomes the whole body as ``bytes``.

    Non-OK responses are JSON-decoded into ``failure`` when one was supplied, so an
    API that serves binary content can still report structured errors.
    """

    def __init__(self, failure: Any = None, is_ok_fn: StatusPredicate | None = None) -> None:
        check_json_target(failure)
        super().__init__(b"", failure, is_ok_fn)

    def _decode(self, response: HttpResponse) -> DecodeError | None:
        if self.is_ok(response.status_code, response):
            self.success = bytes(response.content)
            return None
        if self.failure is None:
            return None
        return self._decode_slot("failure", decode_json_into, response)


def binary_success_responder() -> BinaryResponder:
    return BinaryResponder()


def binary_failure_responder(failure: Any) -> BinaryResponder:
    return BinaryResponder(failure)


def binary_responder(failure: Any, is_ok_fn: StatusPredicate | None = None) -> BinaryResponder:
    return BinaryResponder(failure, is_ok_fn)


__all__ = ["BinaryResponder", "binary_failure_responder", "binary_responder", "binary_success_responder"]
