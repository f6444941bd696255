# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import threading
from dataclasses import dataclass

import pytest

from meteor.errors import DecodeError, TransportError
from meteor.http.models import HttpRequest, HttpResponse
from meteor.responders import JSONResponder, json_responder, json_success_responder


@dataclass
class Widget:
    id: int = 0
    name: str = ""


@dataclass
class APIError:
    message: str = ""
    code: int = 0


REQUEST = HttpRequest(url="http://example/widgets/7")


def _response(status: int, body: bytes = b"") -> HttpResponse:
    return HttpResponse(status_code=status, content=body, url=REQUEST.url, request=REQUEST)


def test_success_body_decodes_into_success_target():
    widget = Widget()
    responder = json_success_responder(widget)

    resp, err = responder.respond(REQUEST, _response(200, b'{"id":7}')).do_response()

    assert err is None
    assert resp.status_code == 200
    assert responder.get_success() is widget
    assert widget == Widget(id=7)
    assert responder.get_error() is None
    assert responder.get_request() is REQUEST


def test_empty_failure_body_is_not_an_error():
    failure = APIError()
    responder = json_responder(None, failure)

    responder.respond(REQUEST, _response(400, b"")).do_response()

    assert responder.get_error() is None
    assert responder.get_failure() == APIError()


def test_no_content_leaves_success_untouched():
    widget = Widget()
    responder = JSONResponder(widget)

    _, err = responder.respond(REQUEST, _response(204, b"  \n")).do_response()

    assert err is None
    assert widget == Widget()


@pytest.mark.parametrize("status", [200, 201, 204, 250, 299])
def test_ok_statuses_only_touch_success(status):
    success, failure = {}, {}
    responder = JSONResponder(success, failure)
    responder.respond(REQUEST, _response(status, b'{"message":"hi"}')).do_response()
    assert success == {"message": "hi"}
    assert failure == {}


@pytest.mark.parametrize("status", [100, 199, 300, 301, 404, 500, 503])
def test_other_statuses_only_touch_failure(status):
    success, failure = {}, {}
    responder = JSONResponder(success, failure)
    responder.respond(REQUEST, _response(status, b'{"message":"hi"}')).do_response()
    assert success == {}
    assert failure == {"message": "hi"}


def test_ok_response_without_success_target_is_skipped():
    failure = {}
    responder = JSONResponder(None, failure)
    _, err = responder.respond(REQUEST, _response(200, b'{"message":"hi"}')).do_response()
    assert err is None
    assert failure == {}
    assert responder.get_success() is None


def test_undecodable_body_keeps_raw_bytes_and_reports_error():
    responder = JSONResponder({})
    _, err = responder.respond(REQUEST, _response(200, b"<html>oops</html>")).do_response()

    assert isinstance(err, DecodeError)
    assert err.status_code == 200
    assert responder.get_error() is err
    assert responder.get_success() == b"<html>oops</html>"


def test_shape_mismatch_is_a_decode_error():
    responder = JSONResponder(Widget())
    _, err = responder.respond(REQUEST, _response(200, b"[1, 2]")).do_response()
    assert isinstance(err, DecodeError)
    assert responder.get_success() == b"[1, 2]"


def test_trailing_data_after_first_document_is_ignored():
    widget = Widget()
    responder = JSONResponder(widget)
    _, err = responder.respond(REQUEST, _response(200, b'{"id": 1234567890, "name": "Meteor Rocks!"}]')).do_response()
    assert err is None
    assert widget == Widget(id=1234567890, name="Meteor Rocks!")


def test_list_and_plain_object_targets():
    items: list = []
    JSONResponder(items).respond(REQUEST, _response(200, b"[1, 2]")).do_response()
    assert items == [1, 2]

    class Bag:
        pass

    bag = Bag()
    JSONResponder(bag).respond(REQUEST, _response(200, b'{"a": 1}')).do_response()
    assert bag.a == 1


def test_byte_sink_target_receives_raw_body():
    sink = io.BytesIO()
    responder = JSONResponder(sink)
    _, err = responder.respond(REQUEST, _response(200, b"not even json")).do_response()
    assert err is None
    assert sink.getvalue() == b"not even json"


@pytest.mark.parametrize("target", [5, "text", (1, 2), Widget])
def test_incompatible_targets_are_programmer_errors(target):
    with pytest.raises(TypeError):
        JSONResponder(target)


def test_custom_status_predicate():
    success, failure = {}, {}
    responder = JSONResponder(success, failure, lambda status, resp: status == 404)

    assert responder.is_ok(404, None) is True
    assert responder.is_ok(200, None) is False
    responder.respond(REQUEST, _response(404, b'{"gone": true}')).do_response()
    assert success == {"gone": True}
    assert failure == {}


def test_default_predicate_is_2xx():
    responder = JSONResponder()
    assert responder.is_ok(200) and responder.is_ok(299)
    assert not responder.is_ok(199) and not responder.is_ok(300)


def test_decode_happens_at_most_once_per_response():
    items: list = []
    responder = JSONResponder(items)
    responder.respond(REQUEST, _response(200, b"[1]"))

    first = responder.do_response()
    second = responder.do_response()

    assert items == [1]
    assert first == second

    responder.respond(REQUEST, _response(200, b"[2]")).do_response()
    assert items == [1, 2]


def test_transport_error_is_recorded_without_decoding():
    widget = Widget()
    responder = JSONResponder(widget)
    failure = TransportError("connection refused", url=REQUEST.url)

    resp, err = responder.respond(REQUEST, None, failure).do_response()

    assert resp is None
    assert err is failure
    assert widget == Widget()


def test_no_targets_passes_response_through():
    responder = JSONResponder()
    response = _response(500, b"{}")
    resp, err = responder.respond(REQUEST, response).do_response()
    assert resp is response
    assert err is None


def test_clone_copies_targets_and_drops_exchange():
    widget = Widget()
    responder = JSONResponder(widget)
    responder.respond(REQUEST, _response(200, b'{"id": 3}')).do_response()

    twin = responder.clone()
    assert twin.get_response() is None
    assert twin.get_success() == Widget(id=3)
    assert twin.get_success() is not widget

    twin.respond(REQUEST, _response(200, b'{"id": 4}')).do_response()
    assert widget.id == 3
    assert twin.get_success().id == 4


def test_accessors_are_safe_during_decode():
    responder = JSONResponder({})
    responder.respond(REQUEST, _response(200, b'{"k": "v"}'))
    seen = []
    start = threading.Event()

    def read():
        start.wait()
        for _ in range(200):
            seen.append(responder.get_success())
            responder.get_error()

    readers = [threading.Thread(target=read) for _ in range(4)]
    for t in readers:
        t.start()
    start.set()
    responder.do_response()
    for t in readers:
        t.join(timeout=5)

    assert responder.get_success() == {"k": "v"}
    assert all(isinstance(value, dict) for value in seen)
