"""A small HTTP router with named parameters, wildcards and route groups.

Patterns are ``/``-separated segments. A segment ``:name`` captures a path
parameter, optionally restricted by a regular expression as in
``:age|^[0-9]+$``. A final ``...`` segment matches the rest of the path.
Middleware are functions that take a handler and return a handler; those
registered inside a :meth:`Mux.group` apply only to the routes of that group.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field, replace
from typing import Callable, Union
from urllib.parse import unquote_plus

ALL_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "CONNECT", "OPTIONS", "TRACE")

_compiled_patterns: dict[str, re.Pattern[str]] = {}
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class Request:
    """An incoming request as seen by the router."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    params: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """A response being written by a handler."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def write(self, data: Union[str, bytes]) -> None:
        """Append data to the response body."""
        if isinstance(data, str):
            data = data.encode()
        self.body += data


Handler = Callable[[Response, Request], None]
Middleware = Callable[[Handler], Handler]


def param(request: Request, name: str) -> str:
    """Return a named parameter or wildcard match, or ``""`` if absent."""
    return request.params.get(name, "")


def _not_found(response: Response, request: Request) -> None:
    response.status = 404
    response.headers["Content-Type"] = "text/plain; charset=utf-8"
    response.write("404 page not found\n")


def _method_not_allowed(response: Response, request: Request) -> None:
    response.status = 405
    response.headers["Content-Type"] = "text/plain; charset=utf-8"
    response.write("Method Not Allowed\n")


def _options(response: Response, request: Request) -> None:
    response.status = 204


def _query_unescape(value: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise ValueError(f"invalid URL escape in {value!r}")
    return unquote_plus(value, errors="surrogateescape")


@dataclass
class _Route:
    method: str
    segments: list[str]
    wildcard: bool
    handler: Handler

    def match(self, url_segments: list[str]) -> Union[dict[str, str], None]:
        if not self.wildcard and len(url_segments) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for i, route_segment in enumerate(self.segments):
            if i >= len(url_segments):
                return None

            if route_segment == "...":
                params["..."] = "/".join(url_segments[i:])
                return params

            if route_segment.startswith(":"):
                key, has_rx, rx_pattern = route_segment[1:].partition("|")
                try:
                    value = _query_unescape(url_segments[i])
                except ValueError:
                    return None
                if has_rx:
                    if _compiled_patterns[rx_pattern].search(value):
                        params[key] = value
                        continue
                    return None
                if value:
                    params[key] = value
                    continue
                return None

            if url_segments[i] != route_segment:
                return None

        return params


class Mux:
    """Dispatch requests to handlers by path pattern and method."""

    def __init__(self) -> None:
        self.not_found: Handler = _not_found
        self.method_not_allowed: Handler = _method_not_allowed
        self.options: Handler = _options
        self._routes: list[_Route] = []
        self._middlewares: list[Middleware] = []

    def handle(self, pattern: str, handler: Handler, *methods: str) -> None:
        """Register ``handler`` for ``pattern`` and the given methods.

        With no methods the route matches every method. Registering GET also
        registers HEAD.
        """
        method_list = list(methods)
        if "GET" in method_list and "HEAD" not in method_list:
            method_list.append("HEAD")
        if not method_list:
            method_list = list(ALL_METHODS)

        segments = pattern.split("/")
        for method in method_list:
            self._routes.append(
                _Route(
                    method=method.upper(),
                    segments=list(segments),
                    wildcard=pattern.endswith("/..."),
                    handler=self._wrap(handler),
                )
            )

        for segment in segments:
            if segment.startswith(":"):
                _, has_rx, rx_pattern = segment.partition("|")
                if has_rx:
                    _compiled_patterns[rx_pattern] = re.compile(rx_pattern)

    def use(self, *middlewares: Middleware) -> None:
        """Add middleware used by routes registered from now on."""
        self._middlewares.extend(middlewares)

    def group(self, fn: Callable[[Mux], None]) -> None:
        """Call ``fn`` with a sub-router whose middleware stay in the group."""
        sub = copy.copy(self)
        sub._middlewares = list(self._middlewares)
        fn(sub)

    def serve(self, request: Request) -> Response:
        """Dispatch the request and return the written response."""
        response = Response()
        url_segments = request.path.split("/")
        allowed: list[str] = []

        for route in self._routes:
            params = route.match(url_segments)
            if params is None:
                continue
            if request.method == route.method:
                route.handler(response, replace(request, params={**request.params, **params}))
                return response
            if route.method not in allowed:
                allowed.append(route.method)

        if allowed:
            response.headers["Allow"] = ", ".join([*allowed, "OPTIONS"])
            if request.method == "OPTIONS":
                self._wrap(self.options)(response, request)
            else:
                self._wrap(self.method_not_allowed)(response, request)
            return response

        self._wrap(self.not_found)(response, request)
        return response

    def _wrap(self, handler: Handler) -> Handler:
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)
        return handler