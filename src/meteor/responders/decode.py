# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Decode helpers shared by the responder variants.

A decode target is the caller-supplied value a response body lands in:

- ``None``: nothing to decode into, decoding is skipped
- a byte sink (``bytearray`` or anything with a callable ``write``): raw bytes are copied in
- ``dict`` / ``list``: JSON objects are merged, JSON arrays are appended
- a dataclass instance or plain object: JSON object keys become attributes

Any other kind of target is a programmer error and raises ``TypeError``. A body whose
shape does not fit an otherwise valid target raises ``DecodeError``.
"""

from __future__ import annotations

import copy
import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from ..errors import DecodeError
from ..http.models import HttpResponse

_json_decoder = json.JSONDecoder()


def is_byte_sink(target: Any) -> bool:
    if isinstance(target, bytearray):
        return True
    return callable(getattr(target, "write", None))


def write_to_sink(target: Any, body: bytes) -> None:
    if isinstance(target, bytearray):
        target.extend(body)
    else:
        target.write(body)


def is_empty_body(body: bytes) -> bool:
    return not body or not body.strip()


def response_truncated(response: HttpResponse) -> bool:
    """True when the transport stopped reading before the end of the body."""
    return bool(response.meta.get("body_truncated"))


def copy_target(target: Any) -> Any:
    """Copy a target for a cloned responder; byte sinks other than bytearray are shared."""
    if is_byte_sink(target) and not isinstance(target, bytearray):
        return target
    return copy.deepcopy(target)


def check_json_target(target: Any) -> None:
    """Raise TypeError when ``target`` can never receive a decoded JSON document."""
    if target is None or is_byte_sink(target):
        return
    if isinstance(target, (dict, list)):
        return
    if isinstance(target, type):
        raise TypeError(f"decode target must be an instance, not the class {target.__name__}")
    if isinstance(target, (str, bytes, int, float, bool, tuple, frozenset)):
        raise TypeError(f"cannot decode into immutable {type(target).__name__} target")
    if dataclasses.is_dataclass(target) or hasattr(target, "__dict__"):
        return
    raise TypeError(f"cannot decode into {type(target).__name__} target")


def populate(target: Any, value: Any) -> None:
    """Merge a decoded JSON value into ``target`` in place.

    Raises ValueError when the value's shape does not fit the target.
    """
    if isinstance(target, list):
        if not isinstance(value, list):
            raise ValueError(f"expected a JSON array, got {type(value).__name__}")
        target.extend(value)
        return

    if not isinstance(value, Mapping):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")

    if isinstance(target, dict):
        target.update(value)
    elif dataclasses.is_dataclass(target):
        for f in dataclasses.fields(target):
            if f.name in value:
                setattr(target, f.name, value[f.name])
    else:
        for key, item in value.items():
            setattr(target, str(key), item)


def decode_json_into(target: Any, response: HttpResponse) -> None:
    """
    JSON-decode the response body into ``target``.

    Byte sinks receive the raw body. An empty body leaves the target untouched.
    Only the first JSON value in the body is read; trailing data is ignored,
    the way a streaming decoder stops after one document.
    """
    body = response.content
    if is_byte_sink(target):
        write_to_sink(target, body)
        return

    check_json_target(target)
    if is_empty_body(body):
        return

    try:
        text = body.decode(response.encoding or "utf-8")
        value, _ = _json_decoder.raw_decode(text.lstrip())
        populate(target, value)
    except (LookupError, ValueError) as exc:
        raise DecodeError(
            "Failed to decode JSON response body",
            cause=exc,
            url=response.url,
            body=body,
            status_code=response.status_code,
        ) from exc


__all__ = [
    "check_json_target",
    "copy_target",
    "decode_json_into",
    "is_byte_sink",
    "is_empty_body",
    "populate",
    "response_truncated",
    "write_to_sink",
]
