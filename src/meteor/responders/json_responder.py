# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON responder."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import DecodeError
from ..http.models import HttpResponse
from .base import BaseResponder, StatusPredicate
from .decode import check_json_target, decode_json_into

logger = logging.getLogger(__name__)


class JSONResponder(BaseResponder):
    """
    Decodes the body as JSON into ``success`` for OK responses and into ``failure``
    otherwise. A ``None`` target skips decoding for that outcome; an empty body is
    not an error (204 and empty 4xx bodies leave the target as it was).
    """

    def __init__(self, success: Any = None, failure: Any = None, is_ok_fn: StatusPredicate | None = None) -> None:
        check_json_target(success)
        check_json_target(failure)
        super().__init__(success, failure, is_ok_fn)

    def _decode(self, response: HttpResponse) -> DecodeError | None:
        if self.success is None and self.failure is None:
            return None
        if self.is_ok(response.status_code, response):
            if self.success is None:
                logger.debug("JSONResponder: no success target for %d, skipping decode", response.status_code)
                return None
            return self._decode_slot("success", decode_json_into, response)
        if self.failure is None:
            logger.debug("JSONResponder: no failure target for %d, skipping decode", response.status_code)
            return None
        return self._decode_slot("failure", decode_json_into, response)


def json_success_responder(success: Any) -> JSONResponder:
    """JSON responder that only decodes OK responses."""
    return JSONResponder(success)


def json_responder(success: Any, failure: Any, is_ok_fn: StatusPredicate | None = None) -> JSONResponder:
    return JSONResponder(success, failure, is_ok_fn)


__all__ = ["JSONResponder", "json_responder", "json_success_responder"]
