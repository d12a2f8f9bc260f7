"""Parsing of URL query strings into key/value pairs.

Values are percent-decoded when the query string is parsed; keys are kept
as they were sent and decoded only while being compared with a name.
"""

from __future__ import annotations

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_STOP_BYTES = frozenset(b"=#&\0")
_PLUS = ord("+")
_PERCENT = ord("%")
_SPACE = ord(" ")
_EQUALS = ord("=")
_HASH = ord("#")
_AMPERSAND = b"&"


def _to_bytes(value: str | bytes | bytearray) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _to_text(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


def _decode_bytes(data: bytes) -> bytes:
    """Decode ``data`` up to the first '=', '#', '&' or NUL.

    '+' becomes a space and '%XX' the byte it names; a malformed escape
    ends the value.
    """
    out = bytearray()
    pos = 0
    length = len(data)
    while pos < length and data[pos] not in _STOP_BYTES:
        byte = data[pos]
        if byte == _PLUS:
            out.append(_SPACE)
        elif byte == _PERCENT:
            escape = data[pos + 1 : pos + 3]
            if len(escape) < 2 or not all(b in _HEX_DIGITS for b in escape):
                break
            out.append(int(escape, 16))
            pos += 2
        else:
            out.append(byte)
        pos += 1
    return bytes(out)


def decode(value: str | bytes) -> str:
    """Percent-decode one query value, stopping at '=', '#' or '&'."""
    return _to_text(_decode_bytes(_to_bytes(value)))


def _process_pair(segment: bytes) -> bytes:
    """Decode the value part of one ``key=value`` segment, keeping the key."""
    for pos, byte in enumerate(segment):
        if byte in (_EQUALS, _HASH):
            return segment[: pos + 1] + _decode_bytes(segment[pos + 1 :])
    return segment


def _read_unit(data: bytes, pos: int) -> tuple[int, int]:
    """Read one decoded byte of a key at ``pos``; terminators read as 0."""
    byte = data[pos] if pos < len(data) else 0
    pos += 1
    if byte in _STOP_BYTES:
        return 0, pos
    if byte == _PLUS:
        return _SPACE, pos
    if byte == _PERCENT:
        escape = data[pos : pos + 2]
        pos += 2
        if len(escape) == 2 and all(b in _HEX_DIGITS for b in escape):
            return int(escape, 16), pos
        return 0, pos
    return byte, pos


def _key_matches(name: bytes, pair: bytes) -> bool:
    """Return True if the key of ``pair`` equals ``name`` after decoding both."""
    name_pos = pair_pos = 0
    for _ in range(len(name)):
        expected, name_pos = _read_unit(name, name_pos)
        actual, pair_pos = _read_unit(pair, pair_pos)
        if expected != actual:
            return False
        if expected == 0:
            return True
    following = pair[pair_pos] if pair_pos < len(pair) else 0
    return following in _STOP_BYTES


def _value_of(pair: bytes) -> bytes:
    eq = pair.find(b"=")
    return b"" if eq < 0 else pair[eq + 1 :]


def _index_or_end(data: bytes, needle: bytes) -> int:
    pos = data.find(needle)
    return len(data) if pos < 0 else pos


class QueryString:
    """The key/value pairs that follow the '?' of a URL."""

    MAX_KEY_VALUE_PAIRS_COUNT = 256

    def __init__(self, params: str | bytes = "", url: bool = True) -> None:
        self._pairs: list[bytes] = self._parse(_to_bytes(params), url)

    @classmethod
    def _parse(cls, text: bytes, parse_url: bool) -> list[bytes]:
        text = text.split(b"\0", 1)[0]
        if not text:
            return []
        if parse_url:
            starts = [pos for pos in (text.find(b"?"), text.find(b"#")) if pos >= 0]
            if not starts:
                return []
            text = text[min(starts) + 1 :]
        segments = text.split(_AMPERSAND)[: cls.MAX_KEY_VALUE_PAIRS_COUNT]
        return [_process_pair(segment) for segment in segments]

    def _values(self, name: str) -> list[bytes]:
        key = _to_bytes(name)
        return [_value_of(pair) for pair in self._pairs if _key_matches(key, pair)]

    def _remove_prefixed(self, *prefixes: bytes) -> None:
        self._pairs = [pair for pair in self._pairs if not pair.startswith(prefixes)]

    def get(self, name: str) -> str | None:
        """Return the first value for ``name``, or None if it is absent."""
        values = self._values(name)
        return _to_text(values[0]) if values else None

    def pop(self, name: str) -> str | None:
        """Like get(), but also remove the first ``name=...`` pair."""
        value = self.get(name)
        if value is not None:
            prefix = _to_bytes(name) + b"="
            for index, pair in enumerate(self._pairs):
                if pair.startswith(prefix):
                    del self._pairs[index]
                    break
        return value

    def get_list(self, name: str, use_brackets: bool = True) -> list[str]:
        """Return every value of ``name[]`` (or of ``name`` without brackets)."""
        key = name + "[]" if use_brackets else name
        return [_to_text(value) for value in self._values(key)]

    def pop_list(self, name: str, use_brackets: bool = True) -> list[str]:
        """Like get_list(), but also remove the matching pairs."""
        values = self.get_list(name, use_brackets)
        if values:
            suffix = b"[]=" if use_brackets else b"="
            self._remove_prefixed(_to_bytes(name) + suffix)
        return values

    def _dict_entry(self, name: bytes, nth: int) -> tuple[bytes, bytes] | None:
        for pair in self._pairs:
            if not pair.startswith(name):
                continue
            value_start = pair.find(b"=")
            value_start = len(pair) if value_start < 0 else value_start + 1
            open_pos = pair.find(b"[")
            open_pos = len(pair) if open_pos < 0 else open_pos + 1
            close_pos = _index_or_end(pair, b"]")
            if open_pos <= close_pos and open_pos > 0 and close_pos > 0 and nth == 0:
                return pair[open_pos:close_pos], pair[value_start:]
            nth -= 1
        return None

    def get_dict(self, name: str) -> dict[str, str]:
        """Return the values of ``name[key]=value`` pairs as a mapping.

        When a key repeats, its first value is kept.
        """
        key = _to_bytes(name)
        result: dict[str, str] = {}
        nth = 0
        while (entry := self._dict_entry(key, nth)) is not None:
            result.setdefault(_to_text(entry[0]), _to_text(entry[1]))
            nth += 1
        return result

    def pop_dict(self, name: str) -> dict[str, str]:
        """Like get_dict(), but also remove every ``name[...`` pair."""
        result = self.get_dict(name)
        if result:
            self._remove_prefixed(_to_bytes(name) + b"[")
        return result

    def keys(self) -> list[str]:
        """Return the key of every pair, in order, as sent."""
        return [_to_text(pair.split(b"=", 1)[0]) for pair in self._pairs]

    def clear(self) -> None:
        """Remove every pair."""
        self._pairs = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __str__(self) -> str:
        return "[ " + ", ".join(_to_text(pair) for pair in self._pairs) + " ]"