"""Encoding, filename and string helpers."""

from __future__ import annotations

import base64
import os
import secrets
import string

STANDARD_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
URLSAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"

_ALPHANUM = string.digits + string.ascii_lowercase + string.ascii_uppercase
_WHITESPACE = " \t\n\v\f\r"
_FORBIDDEN_CHARS = frozenset('?<>:*|"')
_SPECIAL_ENTRY_SEPARATORS = frozenset(".:/\\")
_MAX_FILENAME_LENGTH = 255


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def base64encode(data: bytes | str, key: str = STANDARD_ALPHABET) -> str:
    """Encode ``data`` as base64 using the 64-character alphabet ``key``."""
    if len(key) < 64:
        raise ValueError("base64 alphabet must have 64 characters")
    encoded = base64.b64encode(_as_bytes(data)).decode("ascii")
    alphabet = key[:64]
    if alphabet == STANDARD_ALPHABET:
        return encoded
    return encoded.translate(str.maketrans(STANDARD_ALPHABET, alphabet))


def base64encode_urlsafe(data: bytes | str) -> str:
    """Encode ``data`` as base64 with the URL-safe alphabet."""
    return base64encode(data, URLSAFE_ALPHABET)


def _sextet(ch: str) -> int:
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A")
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 26
    if "0" <= ch <= "9":
        return ord(ch) - ord("0") + 52
    if ch in "+-":
        return 62
    if ch in "/_":
        return 63
    return 0


def _decoded_size(text: str) -> int:
    length = len(text)
    blocks = length // 4 * 3
    if length % 4 == 2:
        return blocks + 1
    if length % 4 == 3:
        return blocks + 2
    if text[-2] == "=":
        return blocks - 2
    if text[-1] == "=":
        return blocks - 1
    return blocks


def base64decode(data: str | bytes) -> bytes:
    """Decode base64 leniently.

    Both the standard and the URL-safe alphabets are accepted, padding is
    optional, and characters outside the alphabet decode as zero bits.
    """
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    if len(text) < 2:
        return b""
    size = _decoded_size(text)
    values = [_sextet(ch) for ch in text] + [0, 0, 0, 0]
    out = bytearray()
    pos = 0
    while size >= 3:
        a, b, c, d = values[pos : pos + 4]
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
        out.append((((b & 0x0F) << 4) | ((c & 0x3C) >> 2)) & 0xFF)
        out.append((((c & 0x03) << 6) | d) & 0xFF)
        pos += 4
        size -= 3
    a, b, c = values[pos : pos + 3]
    if size == 2:
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
        out.append((((b & 0x0F) << 4) | ((c & 0x3C) >> 2)) & 0xFF)
    elif size == 1:
        out.append(((a << 2) | ((b & 0x30) >> 4)) & 0xFF)
    return bytes(out)


def _upper(ch: str) -> str:
    return ch.upper() if "a" <= ch <= "z" else ch


def _sanitize_special(
    chars: list[str], offset: int, pattern: str, include_number: bool, replacement: str
) -> None:
    """Collapse a reserved device name or '..' starting at ``offset``."""
    i = offset
    length = len(chars)
    for expected in pattern:
        if i >= length or _upper(chars[i]) != expected:
            return
        i += 1
    if include_number:
        if i >= length or not ("1" <= chars[i] <= "9"):
            return
        i += 1
    if i >= length or chars[i] in _SPECIAL_ENTRY_SEPARATORS:
        del chars[offset + 1 : i]
        chars[offset] = replacement


_SPECIAL_PATTERNS = {
    "A": (("AUX", False),),
    "C": (("CON", False), ("COM", True)),
    "L": (("LPT", True),),
    "N": (("NUL", False),),
    "P": (("PRN", False),),
    ".": (("..", False),),
}


def sanitize_filename(name: str, replacement: str = "_") -> str:
    """Return ``name`` made safe to use as a relative file path.

    Directory traversals, absolute paths, reserved device names and
    characters that are invalid in file names are replaced.
    """
    chars = list(name[:_MAX_FILENAME_LENGTH])
    check_special = True
    i = 0
    while i < len(chars):
        if check_special:
            check_special = False
            for pattern, include_number in _SPECIAL_PATTERNS.get(_upper(chars[i]), ()):
                _sanitize_special(chars, i, pattern, include_number, replacement)

        ch = chars[i]
        code = ord(ch)
        if code < 0x20 or 0x80 <= code <= 0x9F or ch in _FORBIDDEN_CHARS:
            chars[i] = replacement
        elif ch in "/\\":
            if i == 0:
                chars[i] = replacement
            else:
                check_special = True
        i += 1
    return "".join(chars)


def random_alphanum(size: int) -> str:
    """Return a random string of ``size`` ASCII letters and digits."""
    return "".join(secrets.choice(_ALPHANUM) for _ in range(size))


def join_path(path: str, fname: str) -> str:
    """Join a directory path and a file name."""
    return os.path.join(path, fname)


def string_equals(left: str, right: str, case_sensitive: bool = False) -> bool:
    """Compare two strings, case-insensitively unless asked otherwise."""
    if len(left) != len(right):
        return False
    if case_sensitive:
        return left == right
    return left.upper() == right.upper()


def trim(value: str) -> str:
    """Return ``value`` without leading and trailing whitespace."""
    return value.strip(_WHITESPACE)