"""HTTP request and response objects passed between middleware and handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from multidict import CIMultiDict

from rookweb.query_string import QueryString


def _as_headers(headers: Mapping[str, str] | CIMultiDict | None) -> CIMultiDict:
    if isinstance(headers, CIMultiDict):
        return headers
    return CIMultiDict(headers or {})


@dataclass
class Request:
    """A parsed HTTP request."""

    method: str = "GET"
    url: str = "/"
    raw_url: str = "/"
    url_params: QueryString = field(default_factory=QueryString)
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: str = ""
    http_ver_major: int = 1
    http_ver_minor: int = 1
    keep_alive: bool = False
    close_connection: bool = False
    upgrade: bool = False
    middleware_context: Any = None

    def __post_init__(self) -> None:
        self.headers = _as_headers(self.headers)

    def get_header_value(self, key: str) -> str:
        """Return the first value of header ``key``, or an empty string."""
        return self.headers.get(key, "")


@dataclass
class Response:
    """An HTTP response under construction."""

    body: str = ""
    code: int = 200
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    on_complete: Callable[[], None] | None = None
    _completed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.headers = _as_headers(self.headers)

    def get_header_value(self, key: str) -> str:
        """Return the first value of header ``key``, or an empty string."""
        return self.headers.get(key, "")

    def add_header(self, key: str, value: str) -> None:
        """Add a header, keeping any existing values for the same key."""
        self.headers.add(key, value)

    def set_header(self, key: str, value: str) -> None:
        """Set a header, replacing any existing values for the same key."""
        self.headers[key] = value

    def end(self) -> None:
        """Mark the response as complete; the completion callback runs once."""
        if self._completed:
            return
        self._completed = True
        if self.on_complete is not None:
            callback, self.on_complete = self.on_complete, None
            callback()

    def is_completed(self) -> bool:
        """Return True once end() has been called."""
        return self._completed