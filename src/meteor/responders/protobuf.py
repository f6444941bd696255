# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Protobuf responder: same contract as the JSON responder with a protobuf codec."""

from __future__ import annotations

from typing import Any

from google.protobuf import message as pb_message

from ..errors import DecodeError
from ..http.models import HttpResponse
from .base import BaseResponder, StatusPredicate
from .decode import is_byte_sink, is_empty_body, write_to_sink


def check_protobuf_target(target: Any) -> None:
    if target is None or is_byte_sink(target) or isinstance(target, pb_message.Message):
        return
    raise TypeError(f"cannot decode protobuf into {type(target).__name__} target")


def decode_protobuf_into(target: Any, response: HttpResponse) -> None:
    body = response.content
    if is_byte_sink(target):
        write_to_sink(target, body)
        return
    check_protobuf_target(target)
    if is_empty_body(body):
        return
    try:
        target.MergeFromString(body)
    except pb_message.DecodeError as exc:
        raise DecodeError(
            "Failed to decode protobuf response body",
            cause=exc,
            url=response.url,
            body=body,
            status_code=response.status_code,
        ) from exc


class ProtobufResponder(BaseResponder):
    def __init__(self, success: Any = None, failure: Any = None, is_ok_fn: StatusPredicate | None = None) -> None:
        check_protobuf_target(success)
        check_protobuf_target(failure)
        super().__init__(success, failure, is_ok_fn)

    def _decode(self, response: HttpResponse) -> DecodeError | None:
        if self.is_ok(response.status_code, response):
            if self.success is None:
                return None
            return self._decode_slot("success", decode_protobuf_into, response)
        if self.failure is None:
            return None
        return self._decode_slot("failure", decode_protobuf_into, response)


def protobuf_success_responder(success: Any) -> ProtobufResponder:
    return ProtobufResponder(success)


def protobuf_responder(success: Any, failure: Any, is_ok_fn: StatusPredicate | None = None) -> ProtobufResponder:
    return ProtobufResponder(success, failure, is_ok_fn)


__all__ = [
    "ProtobufResponder",
    "check_protobuf_target",
    "decode_protobuf_into",
    "protobuf_responder",
    "protobuf_success_responder",
]
