# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from meteor.errors import DecodeError
from meteor.http.models import HttpRequest, HttpResponse
from meteor.responders import (
    BinaryResponder,
    binary_failure_responder,
    binary_responder,
    binary_success_responder,
)

REQUEST = HttpRequest(url="http://example/file.bin")


def _response(status: int, body: bytes = b"") -> HttpResponse:
    return HttpResponse(status_code=status, content=body, url=REQUEST.url, request=REQUEST)


def test_ok_body_becomes_success_bytes():
    responder = binary_success_responder()
    resp, err = responder.respond(REQUEST, _response(200, b"abc")).do_response()

    assert err is None
    assert resp.content == b"abc"
    assert responder.get_success() == b"abc"
    assert responder.get_failure() is None


def test_failure_body_is_json_decoded():
    failure = {}
    responder = binary_failure_responder(failure)
    _, err = responder.respond(REQUEST, _response(403, b'{"message": "forbidden"}')).do_response()

    assert err is None
    assert failure == {"message": "forbidden"}
    assert responder.get_success() == b""


def test_failure_body_that_is_not_json_is_kept_raw():
    responder = BinaryResponder({})
    _, err = responder.respond(REQUEST, _response(502, b"Bad Gateway")).do_response()

    assert isinstance(err, DecodeError)
    assert responder.get_failure() == b"Bad Gateway"


def test_failure_without_target_is_ignored():
    responder = BinaryResponder()
    _, err = responder.respond(REQUEST, _response(404, b"missing")).do_response()
    assert err is None
    assert responder.get_success() == b""
    assert responder.get_failure() is None


def test_empty_failure_body_is_not_an_error():
    failure = {}
    responder = BinaryResponder(failure)
    _, err = responder.respond(REQUEST, _response(400)).do_response()
    assert err is None
    assert failure == {}


def test_custom_predicate_routes_redirects_to_success():
    responder = binary_responder({}, lambda status, resp: status < 400)
    responder.respond(REQUEST, _response(304, b"cached")).do_response()
    assert responder.get_success() == b"cached"
    assert responder.get_failure() == {}


def test_truncated_body_is_a_decode_error_that_keeps_partial_bytes():
    partial = HttpResponse(
        status_code=200,
        content=b"abc",
        url=REQUEST.url,
        request=REQUEST,
        meta={"body_truncated": True, "body_bytes_read": 3, "body_bytes_limit": 3},
    )
    responder = binary_success_responder()

    _, err = responder.respond(REQUEST, partial).do_response()

    assert isinstance(err, DecodeError)
    assert err.body == b"abc"
    assert responder.get_success() == b"abc"


def test_truncated_failure_body_skips_json_decode():
    partial = HttpResponse(
        status_code=500,
        content=b'{"message": "bo',
        url=REQUEST.url,
        request=REQUEST,
        meta={"body_truncated": True, "body_bytes_limit": 15},
    )
    responder = binary_responder({})

    _, err = responder.respond(REQUEST, partial).do_response()

    assert isinstance(err, DecodeError)
    assert "truncated" in str(err)
    assert responder.get_failure() == b'{"message": "bo'
    assert responder.get_success() == b""
