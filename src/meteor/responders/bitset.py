# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bitset responder.

OK bodies use the common bitset wire layout: a big-endian uint64 bit length followed
by big-endian uint64 words, bit ``i`` stored at position ``i % 64`` of word ``i // 64``.
Non-OK bodies are JSON-decoded into ``failure``.
"""

from __future__ import annotations

import struct
from typing import Any

from bitarray import bitarray

from ..errors import DecodeError
from ..http.models import HttpResponse
from .base import BaseResponder, StatusPredicate
from .decode import check_json_target, decode_json_into, is_empty_body

_WORD = 8


def bitset_from_bytes(data: bytes) -> bitarray:
    """Unmarshal the length-prefixed word layout. Raises ValueError on a malformed body."""
    if len(data) < _WORD:
        raise ValueError(f"bitset body too short: {len(data)} bytes")
    (length,) = struct.unpack(">Q", data[:_WORD])
    words = data[_WORD:]
    if len(words) % _WORD:
        raise ValueError("bitset body is not a whole number of 64-bit words")
    if len(words) * 8 < length:
        raise ValueError(f"bitset body holds {len(words) * 8} bits, header claims {length}")

    bits = bitarray(endian="little")
    for offset in range(0, len(words), _WORD):
        bits.frombytes(words[offset : offset + _WORD][::-1])
    return bits[:length]


def bitset_to_bytes(bits: bitarray) -> bytes:
    """Marshal ``bits`` into the length-prefixed word layout."""
    little = bitarray(bits, endian="little")
    padding = (-len(little)) % 64
    little.extend([0] * padding)
    raw = little.tobytes()
    out = bytearray(struct.pack(">Q", len(bits)))
    for offset in range(0, len(raw), _WORD):
        out.extend(raw[offset : offset + _WORD][::-1])
    return bytes(out)


class BitsetResponder(BaseResponder):
    def __init__(self, failure: Any = None, is_ok_fn: StatusPredicate | None = None) -> None:
        check_json_target(failure)
        super().__init__(bitarray(endian="little"), failure, is_ok_fn)

    def _decode(self, response: HttpResponse) -> DecodeError | None:
        if not self.is_ok(response.status_code, response):
            if self.failure is None:
                return None
            return self._decode_slot("failure", decode_json_into, response)

        body = response.content
        if is_empty_body(body):
            return None
        try:
            self.success = bitset_from_bytes(body)
        except ValueError as exc:
            self.success = body
            return DecodeError(
                "Failed to decode bitset response body",
                cause=exc,
                url=response.url,
                body=body,
                status_code=response.status_code,
            )
        return None


def bitset_success_responder() -> BitsetResponder:
    return BitsetResponder()


def bitset_failure_responder(failure: Any) -> BitsetResponder:
    return BitsetResponder(failure)


def bitset_responder(failure: Any, is_ok_fn: StatusPredicate | None = None) -> BitsetResponder:
    return BitsetResponder(failure, is_ok_fn)


__all__ = [
    "BitsetResponder",
    "bitset_failure_responder",
    "bitset_from_bytes",
    "bitset_responder",
    "bitset_success_responder",
    "bitset_to_bytes",
]
