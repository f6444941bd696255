# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class MeteorError(Exception):
    """Base exception for meteor errors.

    Attributes:
        message: Human-readable error description.
        cause: The original exception, if any.
        url: The URL of the request involved, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.url = url

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.cause:
            parts.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")
        return " | ".join(parts)


class TransportError(MeteorError):
    """No response could be obtained (network, DNS, TLS, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        url: str | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        super().__init__(message, cause=cause, url=url)
        if category is None:
            category = categorize_exception(cause) if cause is not None else ErrorCategory.UNKNOWN_ERROR
        self.category = category


class DecodeError(MeteorError):
    """A response body was present but could not be decoded into its target.

    Attributes:
        body: The raw body bytes that failed to decode.
        status_code: HTTP status of the response.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        url: str | None = None,
        body: bytes = b"",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, cause=cause, url=url)
        self.body = body
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.cause:
            parts.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")
        return " | ".join(parts)


class RequestBuildError(MeteorError):
    """The builder could not materialize a request (bad URL, body encoding failure)."""


__all__ = [
    "DecodeError",
    "ErrorCategory",
    "MeteorError",
    "RequestBuildError",
    "TransportError",
    "categorize_exception",
]
