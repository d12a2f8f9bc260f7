"""Middleware that sets CORS response headers, per URL prefix or globally."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from rookweb.messages import Request, Response


def _method_name(method: Any) -> str:
    if isinstance(method, str):
        return method.upper()
    return str(getattr(method, "name", method))


class CORSRules:
    """A CORS policy; setters return the rules so calls can be chained."""

    def __init__(self, handler: "CORSHandler") -> None:
        self._handler = handler
        self._ignore = False
        self._origin = "*"
        self._methods = "*"
        self._headers = "*"
        self._max_age = ""
        self._allow_credentials = False

    @staticmethod
    def _add_list_item(current: str, value: str) -> str:
        if current == "*":
            current = ""
        return f"{current}, {value}" if current else value

    def origin(self, origin: str) -> "CORSRules":
        """Set Access-Control-Allow-Origin (default "*")."""
        self._origin = origin
        return self

    def methods(self, *args: Any) -> "CORSRules":
        """Add methods to Access-Control-Allow-Methods (default "*")."""
        if not args:
            raise TypeError("methods() needs at least one method")
        for method in args:
            self._methods = self._add_list_item(self._methods, _method_name(method))
        return self

    def headers(self, *args: str) -> "CORSRules":
        """Add headers to Access-Control-Allow-Headers (default "*")."""
        if not args:
            raise TypeError("headers() needs at least one header")
        for header in args:
            self._headers = self._add_list_item(self._headers, header)
        return self

    def max_age(self, max_age: int) -> "CORSRules":
        """Set Access-Control-Max-Age (unset by default)."""
        self._max_age = str(int(max_age))
        return self

    def allow_credentials(self) -> "CORSRules":
        """Send Access-Control-Allow-Credentials: true."""
        self._allow_credentials = True
        return self

    def ignore(self) -> None:
        """Send no CORS headers at all."""
        self._ignore = True

    def prefix(self, prefix: str) -> "CORSRules":
        """Start a new rule for paths beginning with ``prefix``."""
        return self._handler.prefix(prefix)

    def global_rules(self) -> "CORSRules":
        """Return the handler's global rule."""
        return self._handler.global_rules()

    @staticmethod
    def _set_header_no_override(key: str, value: str, res: Response) -> None:
        if not value or res.get_header_value(key):
            return
        res.add_header(key, value)

    def apply(self, res: Response) -> None:
        """Add this policy's headers to ``res`` without replacing existing ones."""
        if self._ignore:
            return
        self._set_header_no_override("Access-Control-Allow-Origin", self._origin, res)
        self._set_header_no_override("Access-Control-Allow-Methods", self._methods, res)
        self._set_header_no_override("Access-Control-Allow-Headers", self._headers, res)
        self._set_header_no_override("Access-Control-Max-Age", self._max_age, res)
        if self._allow_credentials:
            self._set_header_no_override("Access-Control-Allow-Credentials", "true", res)


class CORSHandler:
    """Global middleware applying the first rule whose prefix matches the URL."""

    @dataclass
    class Context:
        """Per-request state: the rule chosen for the request URL."""

        rule: Optional[CORSRules] = None

    def __init__(self) -> None:
        self._rules: list[tuple[str, CORSRules]] = []
        self._default = CORSRules(self)

    def before_handle(self, req: Request, res: Response, ctx: "CORSHandler.Context") -> None:
        """Pick the rule for the request URL and remember it in the context."""
        if isinstance(ctx, CORSHandler.Context):
            ctx.rule = self._find_rule(req.url)

    def after_handle(self, req: Request, res: Response, ctx: "CORSHandler.Context") -> None:
        """Apply the matching CORS rule to the response."""
        rule = getattr(ctx, "rule", None)
        if rule is None:
            rule = self._find_rule(req.url)
        rule.apply(res)

    def prefix(self, prefix: str) -> CORSRules:
        """Add and return a rule for paths beginning with ``prefix``."""
        rules = CORSRules(self)
        self._rules.append((prefix, rules))
        return rules

    def global_rules(self) -> CORSRules:
        """Return the rule used when no prefix matches."""
        return self._default

    def _find_rule(self, path: str) -> CORSRules:
        for prefix, rules in self._rules:
            if path.startswith(prefix):
                return rules
        return self._default