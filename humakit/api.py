"""The API object: content formats, response transformers and middleware.

An :class:`API` holds the OpenAPI document being built, the formats used to
read request bodies and write response bodies, the transformers applied to
response values before they are written, and the middleware run for every
request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Union
from urllib.parse import urlparse

from humakit.chain import Middleware, Middlewares

Transformer = Callable[[Any, str, Any], Any]

_SCHEMA_REF = re.compile(r"#/components/schemas/([^\"]+)")


@dataclass(frozen=True)
class Format:
    """A request / response body format."""

    marshal: Callable[[Any], bytes]
    unmarshal: Callable[[bytes], Any]


class UnknownContentTypeError(ValueError):
    """Raised when no format is registered for a content type."""

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(f"unknown content type: {content_type}")


class API:
    """An API description together with its formats, transformers and middleware."""

    def __init__(
        self,
        openapi: Optional[dict[str, Any]] = None,
        formats: Optional[Mapping[str, Format]] = None,
        default_format: str = "",
        transformers: Iterable[Transformer] = (),
    ) -> None:
        spec = openapi if openapi is not None else {}
        if not spec.get("openapi"):
            spec["openapi"] = "3.1.0"
        if spec.get("components") is None:
            spec["components"] = {}
        if spec["components"].get("schemas") is None:
            spec["components"]["schemas"] = {}
        self.openapi = spec

        self._formats: dict[str, Format] = dict(formats or {})
        if not default_format and "application/json" in self._formats:
            default_format = "application/json"
        keys = [default_format] if default_format else []
        keys.extend(self._formats)
        self.format_keys: tuple[str, ...] = tuple(keys)
        self.default_format = default_format

        self._transformers: list[Transformer] = list(transformers)
        self._middlewares = Middlewares()

    @property
    def formats(self) -> dict[str, Format]:
        """A copy of the registered formats keyed by content type or suffix."""
        return dict(self._formats)

    @property
    def middlewares(self) -> Middlewares:
        """Middleware run for every operation, in the order they were added."""
        return self._middlewares

    def unmarshal(self, content_type: str, data: bytes) -> Any:
        """Decode a request body using the format for ``content_type``.

        Parameters such as ``; charset=utf-8`` are ignored, and a structured
        suffix like ``+json`` selects the ``json`` format. An empty content
        type is treated as ``application/json``.
        """
        start = content_type.find("+") + 1
        end = content_type.find(";")
        if end == -1:
            end = len(content_type)
        ct = content_type[start:end] or "application/json"
        fmt = self._formats.get(ct)
        if fmt is None:
            raise UnknownContentTypeError(content_type)
        return fmt.unmarshal(data)

    def marshal(self, content_type: str, value: Any) -> bytes:
        """Encode ``value`` using the format for ``content_type``.

        If the full content type is not registered, its structured suffix
        (the part after ``+``) is tried instead.
        """
        fmt = self._formats.get(content_type)
        if fmt is None:
            start = content_type.find("+") + 1
            fmt = self._formats.get(content_type[start:])
        if fmt is None:
            raise UnknownContentTypeError(content_type)
        return fmt.marshal(value)

    def transform(self, ctx: Any, status: str, value: Any) -> Any:
        """Run every transformer over ``value`` in order and return the result."""
        for transformer in self._transformers:
            value = transformer(ctx, status, value)
        return value

    def use_middleware(self, *middlewares: Middleware) -> None:
        """Append middleware to the stack run for every request."""
        self._middlewares.extend(middlewares)


def api_prefix(servers: Iterable[Union[str, Mapping[str, Any]]]) -> str:
    """Return the path of the first server URL that has one, or ``""``.

    Each server is a URL string or a mapping with a ``url`` key.
    """
    for server in servers:
        url = server if isinstance(server, str) else server.get("url", "")
        try:
            path = urlparse(url).path
        except ValueError:
            continue
        if path:
            return path
    return ""


def rewrite_schema_refs(data: Union[str, bytes], schemas_path: str) -> Union[str, bytes]:
    """Point ``#/components/schemas/Name`` references at ``<schemas_path>/Name.json``."""
    if isinstance(data, bytes):
        replacement = schemas_path.replace("\\", "\\\\").encode() + rb"/\1.json"
        return re.sub(_SCHEMA_REF.pattern.encode(), replacement, data)
    return _SCHEMA_REF.sub(lambda m: f"{schemas_path}/{m.group(1)}.json", data)