# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Responders turn a raw response into decoded success/failure values."""

from .base import BaseResponder, Responder, StatusPredicate, is_ok
from .binary import BinaryResponder, binary_failure_responder, binary_responder, binary_success_responder
from .bitset import (
    BitsetResponder,
    bitset_failure_responder,
    bitset_from_bytes,
    bitset_responder,
    bitset_success_responder,
    bitset_to_bytes,
)
from .generic import GenericResponder, generic_responder
from .json_responder import JSONResponder, json_responder, json_success_responder
from .protobuf import ProtobufResponder, protobuf_responder, protobuf_success_responder

__all__ = [
    "BaseResponder",
    "BinaryResponder",
    "BitsetResponder",
    "GenericResponder",
    "JSONResponder",
    "ProtobufResponder",
    "Responder",
    "StatusPredicate",
    "binary_failure_responder",
    "binary_responder",
    "binary_success_responder",
    "bitset_failure_responder",
    "bitset_from_bytes",
    "bitset_responder",
    "bitset_success_responder",
    "bitset_to_bytes",
    "generic_responder",
    "is_ok",
    "json_responder",
    "json_success_responder",
    "protobuf_responder",
    "protobuf_success_responder",
]
