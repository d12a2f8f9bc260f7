"""Parsing and serialising of ``multipart/*`` message bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from multidict import CIMultiDict

from rookweb.messages import Request

CRLF = "\r\n"
DASHES = "--"
DEFAULT_CONTENT_TYPE = "multipart/form-data; boundary=ROOKWEB-BOUNDARY"

_BOUNDARY_TEXT = "boundary="
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer at the start of {text!r}")
    return int(match.group(1))


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise ValueError(f"no number at the start of {text!r}")
    return float(match.group(1))


def _trim_quotes(text: str, excess: str = '"') -> str:
    if len(text) > 1 and text[0] == excess and text[-1] == excess:
        return text[1:-1]
    return text


def _pad(text: str, padding: str = '"') -> str:
    return padding + text + padding


def _split_first(text: str, separator: str) -> tuple[str, str]:
    """Split at the first ``separator``; without one, return (text, "")."""
    found = text.find(separator)
    if found < 0:
        return text, ""
    return text[:found], text[found + len(separator):]


@dataclass
class Header:
    """One header of a part: its main value and its ``key=value`` parameters."""

    value: str = ""
    params: dict[str, str] = field(default_factory=dict)

    def __int__(self) -> int:
        return _leading_int(self.value)

    def __float__(self) -> float:
        return _leading_float(self.value)


def get_header_object(headers: Mapping[str, Header], key: str) -> Header:
    """Return the first header named ``key``, or an empty Header."""
    found = headers.get(key)
    return found if found is not None else Header()


@dataclass
class Part:
    """One section of a multipart message."""

    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers)

    def get_header_object(self, key: str) -> Header:
        """Return the first header named ``key``, or an empty Header."""
        return get_header_object(self.headers, key)

    def __int__(self) -> int:
        return _leading_int(self.body)

    def __float__(self) -> float:
        return _leading_float(self.body)


def _part_name(part: Part) -> str:
    params = part.get_header_object("Content-Disposition").params
    try:
        return params["name"]
    except KeyError:
        raise ValueError("multipart section has no name parameter") from None


def _boundary_of(content_type: str) -> str:
    found = content_type.find(_BOUNDARY_TEXT)
    if found < 0:
        return ""
    boundary = content_type[found + len(_BOUNDARY_TEXT):]
    if boundary.startswith('"'):
        boundary = boundary[1:-1]
    return boundary


def _parse_section_head(lines: str) -> CIMultiDict:
    headers: CIMultiDict = CIMultiDict()
    while lines:
        line, lines = _split_first(lines, CRLF)
        key = ""
        header = Header()
        if line:
            head, line = _split_first(line, "; ")
            split = head.find(": ")
            key = head if split < 0 else head[:split]
            header.value = head[split + 2:]
        while line:
            param, line = _split_first(line, "; ")
            split = param.find("=")
            name = param if split < 0 else param[:split]
            header.params.setdefault(name, _trim_quotes(param[split + 1:]))
        headers.add(key, header)
    return headers


def _parse_section(section: str) -> Part:
    found = section.find(CRLF + CRLF)
    head = section[: found + 2]
    rest = section[found + 4:]
    body = rest[:-2] if len(rest) >= 2 else rest
    return Part(headers=_parse_section_head(head), body=body)


class Message:
    """A multipart message: its headers, boundary and parts."""

    def __init__(
        self,
        headers: Mapping[str, str] | CIMultiDict | None = None,
        boundary: str = "",
        parts: list[Part] | None = None,
    ) -> None:
        self.headers = CIMultiDict(headers or {})
        self.boundary = boundary
        self.parts: list[Part] = list(parts or [])
        self.content_type = DEFAULT_CONTENT_TYPE
        if boundary:
            self.content_type = "multipart/form-data; boundary=" + boundary
        self.part_map: CIMultiDict = CIMultiDict()
        for part in self.parts:
            self.part_map.add(_part_name(part), part)

    @classmethod
    def from_request(cls, request: Request) -> "Message":
        """Parse the multipart body of ``request``."""
        boundary = _boundary_of(request.get_header_value("Content-Type"))
        message = cls(request.headers, boundary)
        message._parse_body(request.body)
        return message

    def _parse_body(self, body: str) -> None:
        delimiter = DASHES + self.boundary
        while body != CRLF:
            found = body.find(delimiter)
            if found < 0:
                break
            section = body[:found]
            body = body[found + len(delimiter) + 2:]
            if section:
                part = _parse_section(section)
                self.part_map.add(_part_name(part), part)
                self.parts.append(part)

    def get_header_value(self, key: str) -> str:
        """Return the first value of message header ``key``, or an empty string."""
        return self.headers.get(key, "")

    def get_part_by_name(self, name: str) -> Part:
        """Return the first part with the given name, or an empty Part."""
        found = self.part_map.get(name)
        return found if found is not None else Part()

    def dump(self) -> str:
        """Serialise every part, without the message headers."""
        delimiter = DASHES + self.boundary
        sections = [delimiter + CRLF + self.dump_part(i) for i in range(len(self.parts))]
        return "".join(sections) + delimiter + DASHES + CRLF

    def dump_part(self, index: int) -> str:
        """Serialise the part at ``index``."""
        part = self.parts[index]
        lines = []
        for key, header in part.headers.items():
            params = "".join(f"; {name}={_pad(value)}" for name, value in header.params.items())
            lines.append(f"{key}: {header.value}{params}{CRLF}")
        return "".join(lines) + CRLF + part.body + CRLF