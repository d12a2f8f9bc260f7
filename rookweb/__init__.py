"""Building blocks for a small HTTP server: query strings, multipart bodies, messages, middleware and helpers."""

__version__ = "0.1.0"

__all__ = [
    "cors",
    "messages",
    "middleware",
    "mime_types",
    "multipart",
    "query_string",
    "settings",
    "utf8",
    "utility",
]