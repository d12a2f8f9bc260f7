"""Running middleware hooks around a request handler.

Each middleware has ``before_handle`` and ``after_handle`` hooks taking
``(req, res, ctx)``, where ``ctx`` is that middleware's own context; a hook
that requires a fourth parameter also receives the contexts of all middleware.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Sequence

from rookweb.messages import Request, Response

_VARARGS_FLAG = 0x04


class LocalMiddleware:
    """Base for middleware that runs only on routes that enable it."""

    call_global = False


def is_global(middleware: Any) -> bool:
    """Return True unless the middleware declares ``call_global = False``."""
    return getattr(middleware, "call_global", True) is not False


def _wants_all_contexts(hook: Callable[..., Any]) -> bool:
    func = getattr(hook, "__func__", hook)
    code = getattr(func, "__code__", None)
    if code is None:
        return False
    if code.co_flags & _VARARGS_FLAG:
        return False
    required = code.co_argcount - len(getattr(func, "__defaults__", None) or ())
    if func is not hook and getattr(hook, "__self__", None) is not None:
        required -= 1
    return required > 3


def _invoke(
    hook: Callable[..., Any], req: Request, res: Response, ctx: Any, contexts: Sequence[Any]
) -> None:
    if _wants_all_contexts(hook):
        hook(req, res, ctx, contexts)
    else:
        hook(req, res, ctx)


def _enabled_forward(middlewares: Sequence[Any], indices: Sequence[int] | None) -> Iterator[int]:
    if indices is None:
        yield from (n for n, mw in enumerate(middlewares) if is_global(mw))
        return
    slider = 0
    for n in range(len(middlewares)):
        if slider < len(indices) and indices[slider] == n:
            slider += 1
            yield n


def _enabled_reverse(middlewares: Sequence[Any], indices: Sequence[int] | None) -> Iterator[int]:
    if indices is None:
        yield from (n for n in reversed(range(len(middlewares))) if is_global(middlewares[n]))
        return
    slider = len(indices) - 1
    for n in reversed(range(len(middlewares))):
        if slider >= 0 and indices[slider] == n:
            slider -= 1
            yield n


def call_before_handlers(
    middlewares: Sequence[Any],
    req: Request,
    res: Response,
    contexts: Sequence[Any],
    indices: Sequence[int] | None = None,
) -> bool:
    """Run ``before_handle`` of each enabled middleware in order.

    With ``indices`` None only global middleware runs; otherwise the
    middleware at the given ascending indices. If a hook completes the
    response, the ``after_handle`` hooks of the middleware run so far are
    called in reverse order and True is returned; otherwise False.
    """
    called: list[int] = []
    for n in _enabled_forward(middlewares, indices):
        _invoke(middlewares[n].before_handle, req, res, contexts[n], contexts)
        called.append(n)
        if res.is_completed():
            for m in reversed(called):
                _invoke(middlewares[m].after_handle, req, res, contexts[m], contexts)
            return True
    return False


def call_after_handlers(
    middlewares: Sequence[Any],
    req: Request,
    res: Response,
    contexts: Sequence[Any],
    indices: Sequence[int] | None = None,
) -> None:
    """Run ``after_handle`` of each enabled middleware in reverse order."""
    for n in _enabled_reverse(middlewares, indices):
        _invoke(middlewares[n].after_handle, req, res, contexts[n], contexts)