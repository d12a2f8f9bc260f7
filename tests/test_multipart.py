import pytest

from rookweb.messages import Request
from rookweb.multipart import Header, Message, Part, get_header_object

BODY = (
    "--XYZ\r\n"
    'Content-Disposition: form-data; name="field"\r\n'
    "\r\n"
    "value\r\n"
    "--XYZ\r\n"
    'Content-Disposition: form-data; name="number"\r\n'
    "\r\n"
    "42\r\n"
    "--XYZ--\r\n"
)


def _request(body=BODY, content_type="multipart/form-data; boundary=XYZ"):
    return Request(headers={"Content-Type": content_type}, body=body)


def test_parse_parts():
    msg = Message.from_request(_request())
    assert msg.boundary == "XYZ"
    assert [p.body for p in msg.parts] == ["value", "42"]
    disposition = msg.parts[0].get_header_object("content-disposition")
    assert disposition.value == "form-data"
    assert disposition.params == {"name": "field"}


def test_dump_round_trip():
    msg = Message.from_request(_request())
    assert msg.dump() == BODY


def test_content_type_follows_boundary():
    msg = Message.from_request(_request())
    assert msg.content_type == "multipart/form-data; boundary=XYZ"


def test_quoted_boundary():
    msg = Message.from_request(_request(content_type='multipart/form-data; boundary="XYZ"'))
    assert msg.boundary == "XYZ"
    assert len(msg.parts) == 2


def test_get_part_by_name():
    msg = Message.from_request(_request())
    assert msg.get_part_by_name("number").body == "42"
    assert int(msg.get_part_by_name("number")) == 42
    assert msg.get_part_by_name("missing").body == ""


def test_message_header_value():
    msg = Message.from_request(_request())
    assert msg.get_header_value("content-type") == "multipart/form-data; boundary=XYZ"
    assert msg.get_header_value("X-Absent") == ""


def test_constructed_message_round_trips():
    part = Part(body="data")
    part.headers.add("Content-Disposition", Header("form-data", {"name": "file"}))
    msg = Message({}, "B", [part])
    parsed = Message.from_request(_request(msg.dump(), msg.content_type))
    assert parsed.get_part_by_name("file").body == "data"
    assert parsed.dump() == msg.dump()


def test_part_without_name_rejected():
    part = Part(body="x")
    part.headers.add("Content-Type", Header("text/plain"))
    with pytest.raises(ValueError):
        Message({}, "B", [part])


def test_numeric_conversions():
    assert int(Header("17")) == 17
    assert float(Part(body="2.5")) == 2.5
    with pytest.raises(ValueError):
        int(Header("abc"))


def test_get_header_object_missing_is_empty():
    found = get_header_object({}, "X")
    assert found.value == "" and found.params == {}


def test_no_delimiter_gives_no_parts():
    msg = Message.from_request(_request(body="garbage"))
    assert msg.parts == []