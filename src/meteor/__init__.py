# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
meteor package entrypoint.

A fluent HTTP request builder and sender. Requests are assembled on a ``Service``,
executed through an injectable ``HttpClient`` transport and decoded by a pluggable
responder (generic, JSON, binary, bitset, protobuf). ``AsyncJob`` fans out many units
of work on threads with a shared early-stop signal.
"""

from .config import AsyncSettings, HttpSettings, load_async_settings, load_http_settings
from .errors import DecodeError, ErrorCategory, MeteorError, RequestBuildError, TransportError
from .fanout import (
    AUTO_STOPPED,
    RESTARTED,
    WORKERS_EXHAUSTED,
    AsyncDoer,
    AsyncJob,
    AsyncRequest,
    AsyncResponse,
    new_async_doers,
)
from .http import (
    BodyProvider,
    FormBodyProvider,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    JSONBodyProvider,
    RawBodyProvider,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .responders import (
    BinaryResponder,
    BitsetResponder,
    GenericResponder,
    JSONResponder,
    ProtobufResponder,
    Responder,
    binary_failure_responder,
    binary_responder,
    binary_success_responder,
    bitset_failure_responder,
    bitset_responder,
    bitset_success_responder,
    generic_responder,
    is_ok,
    json_responder,
    json_success_responder,
    protobuf_responder,
    protobuf_success_responder,
)
from .runtime import Meteor
from .service import Service, new
from .version import __version__

__all__ = [
    "AUTO_STOPPED",
    "AsyncDoer",
    "AsyncJob",
    "AsyncRequest",
    "AsyncResponse",
    "AsyncSettings",
    "BinaryResponder",
    "BitsetResponder",
    "BodyProvider",
    "DecodeError",
    "ErrorCategory",
    "FormBodyProvider",
    "GenericResponder",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "JSONBodyProvider",
    "JSONResponder",
    "Meteor",
    "MeteorError",
    "ProtobufResponder",
    "RESTARTED",
    "RawBodyProvider",
    "RequestBuildError",
    "Responder",
    "Service",
    "StubHttpClient",
    "TransportError",
    "WORKERS_EXHAUSTED",
    "binary_failure_responder",
    "binary_responder",
    "binary_success_responder",
    "bitset_failure_responder",
    "bitset_responder",
    "bitset_success_responder",
    "create_default_http_client",
    "generic_responder",
    "is_ok",
    "json_responder",
    "json_success_responder",
    "load_async_settings",
    "load_http_settings",
    "new",
    "new_async_doers",
    "protobuf_responder",
    "protobuf_success_responder",
    "setup_logging",
    "__version__",
]
