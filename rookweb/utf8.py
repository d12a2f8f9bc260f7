"""Middleware that defaults responses to UTF-8 plain text."""

from __future__ import annotations

from dataclasses import dataclass

from rookweb.messages import Request, Response

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class UTF8:
    """Sets a UTF-8 plain-text Content-Type on responses that have none."""

    @dataclass
    class Context:
        """Per-request state; this middleware keeps none."""

    def before_handle(self, req: Request, res: Response, ctx: "UTF8.Context") -> None:
        """Do nothing before the handler runs."""

    def after_handle(self, req: Request, res: Response, ctx: "UTF8.Context") -> None:
        """Add the default Content-Type if the response lacks one."""
        if not res.get_header_value("Content-Type"):
            res.set_header("Content-Type", DEFAULT_CONTENT_TYPE)