# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .body import (
    FORM_CONTENT_TYPE,
    GIF_CONTENT_TYPE,
    JPEG_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    PNG_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    BodyProvider,
    FormBodyProvider,
    JSONBodyProvider,
    RawBodyProvider,
)
from .client import HttpClient, create_default_http_client, get_default_http_client
from .headers import header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse

__all__ = [
    "BodyProvider",
    "FORM_CONTENT_TYPE",
    "FormBodyProvider",
    "GIF_CONTENT_TYPE",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "JPEG_CONTENT_TYPE",
    "JSONBodyProvider",
    "JSON_CONTENT_TYPE",
    "PNG_CONTENT_TYPE",
    "RawBodyProvider",
    "StubHttpClient",
    "TEXT_CONTENT_TYPE",
    "create_default_http_client",
    "get_default_http_client",
    "header_value",
    "normalize_headers",
]
