# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Fluent HTTP request builder and sender.

    users = Service(client).base("https://api.example.com/v1").get("users")
    user = User()
    users.new().path("7").json_success_responder(user).do()

Every setter returns the service. ``new()`` gives an independent copy that shares
the transport, so a configured parent can stamp out per-endpoint children.
"""

from __future__ import annotations

import base64
import copy
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

from .config import HttpSettings, load_async_settings, load_http_settings
from .errors import RequestBuildError, TransportError
from .fanout.job import AsyncDoer, AsyncJob
from .fanout.requests import AsyncRequest
from .http.body import (
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
from .http.client import HttpClient, get_default_http_client
from .http.headers import add_header, header_value, set_header
from .http.models import HttpRequest, HttpResponse
from .http.url import add_extension, merge_query, query_pairs, resolve_path, slash_it
from .responders.base import Responder
from .responders.binary import BinaryResponder
from .responders.generic import GenericResponder
from .responders.json_responder import JSONResponder

logger = logging.getLogger(__name__)

CONTENT_TYPE = "Content-Type"


class Service:
    """HTTP request builder and sender."""

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self._http_client = http_client
        self._settings = settings
        self._method = "GET"
        self._raw_url = ""
        self._headers: dict[str, str] = {}
        self._query: list[Any] = []
        self._body_provider: BodyProvider | None = None
        self._responder: Responder = GenericResponder()
        self._async: AsyncJob | None = None

    def __repr__(self) -> str:
        return f"Service(method={self._method!r}, url={self._raw_url!r})"

    def new(self) -> Service:
        """
        Copy this service. Headers and query parameters are copied, the transport and
        body provider are shared, and the responder is cloned so the two services never
        decode into the same targets.
        """
        child = Service(self._http_client, self._settings)
        child._method = self._method
        child._raw_url = self._raw_url
        child._headers = dict(self._headers)
        child._query = copy.deepcopy(self._query)
        child._body_provider = self._body_provider
        child._responder = self._responder.clone()
        return child

    def reset(self) -> Service:
        self._http_client = None
        self._method = "GET"
        self._raw_url = ""
        self._headers = {}
        self._query = []
        self._body_provider = None
        self._responder = GenericResponder()
        return self

    # Transport

    def client(self, http_client: HttpClient | None) -> Service:
        """Set the transport; ``None`` selects the shared default client."""
        self._http_client = http_client
        return self

    def get_client(self) -> HttpClient:
        return self._http_client or get_default_http_client()

    @property
    def settings(self) -> HttpSettings:
        return self._settings or load_http_settings()

    # Method

    def method(self, method: str, *path: str) -> Service:
        if method:
            self._method = method.upper()
        return self.path("/".join(path))

    def methodf(self, method: str, fmt: str, *args: Any) -> Service:
        return self.method(method, fmt % args)

    def head(self, *path: str) -> Service:
        return self.method("HEAD", *path)

    def headf(self, fmt: str, *args: Any) -> Service:
        return self.head(fmt % args)

    def get(self, *path: str) -> Service:
        return self.method("GET", *path)

    def getf(self, fmt: str, *args: Any) -> Service:
        return self.get(fmt % args)

    def post(self, *path: str) -> Service:
        return self.method("POST", *path)

    def postf(self, fmt: str, *args: Any) -> Service:
        return self.post(fmt % args)

    def put(self, *path: str) -> Service:
        return self.method("PUT", *path)

    def putf(self, fmt: str, *args: Any) -> Service:
        return self.put(fmt % args)

    def patch(self, *path: str) -> Service:
        return self.method("PATCH", *path)

    def patchf(self, fmt: str, *args: Any) -> Service:
        return self.patch(fmt % args)

    def delete(self, *path: str) -> Service:
        return self.method("DELETE", *path)

    def deletef(self, fmt: str, *args: Any) -> Service:
        return self.delete(fmt % args)

    # Headers

    def add(self, key: str, value: str) -> Service:
        """Add a header value, comma-joining it onto any existing value."""
        if key:
            add_header(self._headers, key, value)
        return self

    def set(self, key: str, value: str) -> Service:
        """Set a header, replacing any existing value."""
        if key:
            set_header(self._headers, key, value)
        return self

    def set_basic_auth(self, username: str, password: str) -> Service:
        if not username and not password:
            return self.set("Authorization", "Basic ")
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return self.set("Authorization", f"Basic {token}")

    def get_header(self, key: str, default: str = "") -> str:
        return header_value(self._headers, key, default)

    # URL

    def raw_base(self, raw_url: str) -> Service:
        """Set the URL verbatim. Give it a trailing slash if ``path()`` should extend it."""
        self._raw_url = raw_url
        return self

    def base(self, raw_url: str) -> Service:
        self._raw_url = slash_it(raw_url)
        return self

    def path(self, path: str) -> Service:
        """Extend the URL with ``path`` (``/x`` is root-relative, ``x`` is appended)."""
        if path:
            self._raw_url = resolve_path(self._raw_url, path)
        return self

    def pathf(self, fmt: str, *args: Any) -> Service:
        return self.path(fmt % args)

    def reset_path(self) -> Service:
        return self.path("/")

    def extension(self, ext: str) -> Service:
        self._raw_url = add_extension(self._raw_url, ext)
        return self

    def get_url(self) -> str:
        return self._raw_url

    def query(self, params: Any) -> Service:
        """
        Add query parameters from a mapping or dataclass instance. The value is
        encoded when the request is built, so later mutations are picked up.
        """
        if params is not None:
            self._query.append(params)
        return self

    # Body

    def content_type(self, content_type: str) -> Service:
        if content_type:
            self.set(CONTENT_TYPE, content_type)
        return self

    def plain_text(self) -> Service:
        return self.set(CONTENT_TYPE, TEXT_CONTENT_TYPE)

    def json(self) -> Service:
        return self.set(CONTENT_TYPE, JSON_CONTENT_TYPE)

    def jpeg(self) -> Service:
        return self.set(CONTENT_TYPE, JPEG_CONTENT_TYPE)

    def gif(self) -> Service:
        return self.set(CONTENT_TYPE, GIF_CONTENT_TYPE)

    def png(self) -> Service:
        return self.set(CONTENT_TYPE, PNG_CONTENT_TYPE)

    def form(self) -> Service:
        return self.set(CONTENT_TYPE, FORM_CONTENT_TYPE)

    def body(self, body: Any) -> Service:
        """Use ``body`` (bytes, str or a readable object) as-is."""
        if body is None:
            return self
        return self.body_provider(RawBodyProvider(body))

    def body_provider(self, provider: BodyProvider | None) -> Service:
        if provider is None:
            return self
        self._body_provider = provider
        content_type = provider.content_type()
        if content_type:
            self.set(CONTENT_TYPE, content_type)
        return self

    def body_json(self, payload: Any) -> Service:
        if payload is None:
            return self
        return self.body_provider(JSONBodyProvider(payload))

    def body_form(self, payload: Any) -> Service:
        if payload is None:
            return self
        return self.body_provider(FormBodyProvider(payload))

    # Responders

    def responder(self, responder: Responder | None) -> Service:
        if responder is not None:
            self._responder = responder
        return self

    def json_responder(self, success: Any, failure: Any) -> Service:
        return self.responder(JSONResponder(success, failure))

    def json_success_responder(self, success: Any) -> Service:
        return self.responder(JSONResponder(success))

    def binary_responder(self, failure: Any) -> Service:
        return self.responder(BinaryResponder(failure))

    def binary_success_responder(self) -> Service:
        return self.responder(BinaryResponder())

    def get_responder(self) -> Responder:
        return self._responder

    def get_success(self) -> Any:
        return self._responder.get_success()

    def get_failure(self) -> Any:
        return self._responder.get_failure()

    # Requests

    def request(self) -> HttpRequest:
        """Materialize an HttpRequest from the current configuration."""
        url = self._raw_url
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise RequestBuildError(f"Invalid request URL: {url!r}", url=url or None)

        try:
            pairs = [pair for params in self._query for pair in query_pairs(params)]
        except TypeError as exc:
            raise RequestBuildError(f"Could not encode query parameters: {exc}", cause=exc, url=url) from exc
        url = merge_query(url, pairs)

        body: bytes | None = None
        if self._body_provider is not None:
            try:
                body = self._body_provider.body()
            except (TypeError, ValueError) as exc:
                raise RequestBuildError(f"Could not encode request body: {exc}", cause=exc, url=url) from exc

        headers = dict(self._headers)
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        return HttpRequest(url=url, method=self._method, headers=headers, body=body)

    def async_request(self, responder: Responder | None = None) -> AsyncRequest:
        """Build an AsyncRequest from a copy of this service for use with ``do_async``."""
        return AsyncRequest(self, responder)

    # Sending

    def do(self, request: HttpRequest | None = None) -> HttpResponse | None:
        """
        Send ``request`` (or a freshly built one) and decode the response with the
        responder. Raises the TransportError or DecodeError the responder recorded;
        the decoded values stay available through ``get_success()``/``get_failure()``.
        """
        if request is None:
            request = self.request()

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = self.get_client().request(request)
        except TransportError as exc:
            self._responder.respond(request, None, exc)
        else:
            logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
            self._responder.respond(request, response, None)

        response, error = self._responder.do_response()
        if error is not None:
            raise error
        return response

    def receive_success(self, success: Any) -> HttpResponse | None:
        return self.receive(success, None)

    def receive(self, success: Any = None, failure: Any = None) -> HttpResponse | None:
        """
        Build and send a request, JSON-decoding 2xx bodies into ``success`` and
        other bodies into ``failure``.
        """
        self.json_responder(success, failure)
        return self.do(self.request())

    def do_async(self, doers: Sequence[AsyncDoer], target_count: int = 0) -> list[Any]:
        """Run ``doers`` concurrently; see AsyncJob.do()."""
        self._async = AsyncJob(doers, target_count, settings=load_async_settings())
        return self._async.do()

    def get_async_job(self) -> AsyncJob | None:
        """The job behind the last ``do_async`` call, for its stop reason."""
        return self._async


def new() -> Service:
    return Service()


__all__ = ["CONTENT_TYPE", "Service", "new"]
