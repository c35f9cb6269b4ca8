"""Middleware chains wrapping a final request handler."""

from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[Any], None]
Middleware = Callable[[Any, Handler], None]


def _wrap(middleware: Middleware, next_handler: Handler) -> Handler:
    def handler(ctx: Any) -> None:
        middleware(ctx, next_handler)

    return handler


class Middlewares(list):
    """An ordered list of middleware functions called as ``fn(ctx, next)``.

    Each middleware decides whether and with which context to call ``next``.
    """

    def handler(self, endpoint: Handler) -> Handler:
        """Build a handler that runs every middleware in order, then ``endpoint``."""
        wrapped = endpoint
        for middleware in reversed(self):
            wrapped = _wrap(middleware, wrapped)
        return wrapped