# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from meteor.config import HttpSettings
from meteor.errors import ErrorCategory, TransportError
from meteor.http.adapters import StubHttpClient
from meteor.http.body import FORM_CONTENT_TYPE, FormBodyProvider, JSONBodyProvider, RawBodyProvider
from meteor.http.headers import add_header, canonical_header_key, header_value, normalize_headers, set_header
from meteor.http.httpx_client import HttpxClient
from meteor.http.models import HttpRequest, HttpResponse
from meteor.http.url import add_extension, merge_query, query_pairs, resolve_path, slash_it


def _httpx_client(handler, **settings):
    return HttpxClient(HttpSettings(**settings), client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_client_returns_response_for_any_status():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["user-agent"]
        seen["body"] = request.content
        return httpx.Response(404, headers={"X-Trace": "abc"}, content=b'{"error":"missing"}')

    client = _httpx_client(handler, user_agent="meteor-test/1")
    resp = client.request(HttpRequest(url="http://example/missing", method="POST", body=b"payload"))

    assert resp.status_code == 404
    assert resp.ok is False
    assert resp.headers["x-trace"] == "abc"
    assert resp.content == b'{"error":"missing"}'
    assert resp.request.method == "POST"
    assert seen == {"ua": "meteor-test/1", "body": b"payload"}


def test_httpx_client_truncates_large_bodies():
    client = _httpx_client(lambda request: httpx.Response(200, content=b"x" * 100), max_body_bytes=10)
    resp = client.request(HttpRequest(url="http://example"))
    assert resp.content == b"x" * 10
    assert resp.meta["body_truncated"] is True


def test_httpx_client_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("too slow", request=request)

    client = _httpx_client(handler)
    with pytest.raises(TransportError) as excinfo:
        client.request(HttpRequest(url="http://example"))
    assert excinfo.value.category == ErrorCategory.TIMEOUT
    assert excinfo.value.url == "http://example"
    assert isinstance(excinfo.value.cause, httpx.ConnectTimeout)


def test_http_response_normalizes_headers_and_text():
    resp = HttpResponse(status_code=204, headers={"Content-Type": "text/plain"}, content="héllo".encode())
    assert resp.ok is True
    assert resp.headers == {"content-type": "text/plain"}
    assert resp.header("CONTENT-TYPE") == "text/plain"
    assert resp.text == "héllo"


def test_http_request_content_encodes_str_body():
    assert HttpRequest(url="http://x", body="abc").content == b"abc"
    assert HttpRequest(url="http://x").content == b""


def test_stub_http_client_prefers_method_specific_entries():
    stub = StubHttpClient()
    stub.add("http://example", HttpResponse(status_code=200, content=b"any"))
    stub.add("http://example", HttpResponse(status_code=201, content=b"post"), method="post")

    assert stub.request(HttpRequest(url="http://example")).content == b"any"
    posted = stub.request(HttpRequest(url="http://example", method="POST"))
    assert posted.status_code == 201
    assert posted.request.method == "POST"
    assert len(stub.requests) == 2


def test_stub_http_client_raises_for_missing_or_failing_entries():
    stub = StubHttpClient({"http://down": TransportError("down", category=ErrorCategory.DNS_ERROR)})
    with pytest.raises(TransportError) as excinfo:
        stub.request(HttpRequest(url="http://down"))
    assert excinfo.value.category == ErrorCategory.DNS_ERROR
    with pytest.raises(TransportError):
        stub.request(HttpRequest(url="http://missing"))


def test_header_helpers():
    headers: dict[str, str] = {}
    set_header(headers, "content-type", "text/plain")
    set_header(headers, "CONTENT-TYPE", "application/json")
    add_header(headers, "accept", "a/b")
    add_header(headers, "Accept", "c/d")
    assert headers == {"Content-Type": "application/json", "Accept": "a/b, c/d"}
    assert canonical_header_key("x-request-id") == "X-Request-Id"
    assert header_value(headers, "accept") == "a/b, c/d"
    assert header_value(None, "accept", "fallback") == "fallback"
    assert normalize_headers([("X-A", "1"), ("X-B", None)]) == {"x-a": "1", "x-b": ""}


def test_url_helpers():
    assert slash_it("http://h/a//") == "http://h/a/"
    assert resolve_path("http://h/a", "b") == "http://h/a/b"
    assert resolve_path("http://h/a/", "/b") == "http://h/b"
    assert resolve_path("http://h/a/", "") == "http://h/a/"
    assert add_extension("http://h/a/daily?x=1", ".json") == "http://h/a/daily.json?x=1"
    assert merge_query("http://h/a?z=1", [("b", "2"), ("a", "x y")]) == "http://h/a?a=x+y&b=2&z=1"


def test_query_pairs_handles_lists_bools_and_none():
    pairs = query_pairs({"tags": ["a", "b"], "on": True, "skip": None, "n": 3})
    assert pairs == [("tags", "a"), ("tags", "b"), ("on", "true"), ("n", "3")]
    with pytest.raises(TypeError):
        query_pairs(["not", "a", "mapping"])


def test_body_providers():
    assert JSONBodyProvider({"a": 1}).body() == b'{"a": 1}\n'
    form = FormBodyProvider({"name": "x y", "count": 2})
    assert form.content_type() == FORM_CONTENT_TYPE
    assert form.body() == b"name=x+y&count=2"
    assert RawBodyProvider("text").body() == b"text"
    assert RawBodyProvider("text").content_type() == ""
    with pytest.raises(ValueError):
        RawBodyProvider(None).body()
