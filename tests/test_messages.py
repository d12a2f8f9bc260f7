from multidict import CIMultiDict

from rookweb.messages import Request, Response
from rookweb.query_string import QueryString


def test_request_header_lookup_is_case_insensitive():
    req = Request(headers={"Content-Type": "text/html"})
    assert req.get_header_value("content-type") == "text/html"


def test_request_missing_header_is_empty_string():
    req = Request()
    assert req.get_header_value("X-Missing") == ""


def test_request_headers_become_multidict():
    req = Request(headers={"A": "1"})
    assert isinstance(req.headers, CIMultiDict)
    assert req.headers["a"] == "1"


def test_request_url_params_parse():
    req = Request(url_params=QueryString("/p?foo=bar"))
    assert req.url_params.get("foo") == "bar"


def test_response_add_header_keeps_both_values():
    res = Response()
    res.add_header("X-Tag", "one")
    res.add_header("x-tag", "two")
    assert res.headers.getall("X-Tag") == ["one", "two"]
    assert res.get_header_value("X-TAG") == "one"


def test_response_set_header_replaces():
    res = Response()
    res.add_header("X-Tag", "one")
    res.add_header("X-Tag", "two")
    res.set_header("x-tag", "three")
    assert res.headers.getall("X-Tag") == ["three"]


def test_response_missing_header_is_empty_string():
    assert Response().get_header_value("Content-Type") == ""


def test_response_end_marks_completed():
    res = Response(body="hi")
    assert res.is_completed() is False
    res.end()
    assert res.is_completed() is True


def test_response_completion_callback_runs_once():
    calls = []
    res = Response(on_complete=lambda: calls.append(1))
    res.end()
    res.end()
    assert calls == [1]


def test_response_defaults():
    res = Response()
    assert res.code == 200
    assert res.body == ""