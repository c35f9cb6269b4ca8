"""Parse cookies out of request ``Cookie`` headers."""

from __future__ import annotations

import string
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~" + string.digits + string.ascii_letters)
_TRIM_CHARS = " \t\r\n"

Headers = Union[Mapping[str, str], Iterable[tuple[str, str]]]


@dataclass(frozen=True)
class Cookie:
    """A single request cookie."""

    name: str
    value: str


class CookieNotFoundError(LookupError):
    """Raised when a named cookie is not present in the request."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"named cookie not present: {name}")


def _cookie_header_values(headers: Headers) -> list[str]:
    items = headers.items() if isinstance(headers, Mapping) else headers
    return [value for name, value in items if name.casefold() == "cookie"]


def read_cookie(headers: Headers, name: str) -> Cookie:
    """Return the first cookie called ``name``.

    ``headers`` is a mapping or an iterable of ``(name, value)`` pairs.
    Raises :class:`CookieNotFoundError` if there is no such cookie.
    """
    for cookie in parse_cookie_lines(_cookie_header_values(headers), name):
        return cookie
    raise CookieNotFoundError(name)


def read_cookies(headers: Headers) -> list[Cookie]:
    """Return every valid cookie found in the ``Cookie`` headers."""
    return parse_cookie_lines(_cookie_header_values(headers), "")


def parse_cookie_lines(lines: Iterable[str], name_filter: str = "") -> list[Cookie]:
    """Parse ``Cookie`` header values, skipping malformed entries.

    If ``name_filter`` is not empty, only cookies of that name are returned.
    """
    cookies: list[Cookie] = []
    for line in lines:
        for part in line.strip(_TRIM_CHARS).split(";"):
            part = part.strip(_TRIM_CHARS)
            if not part:
                continue
            name, _, raw_value = part.partition("=")
            name = name.strip(_TRIM_CHARS)
            if not is_cookie_name_valid(name):
                continue
            if name_filter and name_filter != name:
                continue
            try:
                value = parse_cookie_value(raw_value, True)
            except ValueError:
                continue
            cookies.append(Cookie(name, value))
    return cookies


def _valid_value_char(c: str) -> bool:
    return " " <= c < "\x7f" and c not in '";\\'


def parse_cookie_value(raw: str, allow_double_quote: bool = True) -> str:
    """Validate a raw cookie value, stripping surrounding quotes if allowed.

    Raises :class:`ValueError` if the value holds forbidden characters.
    """
    if allow_double_quote and len(raw) > 1 and raw[0] == '"' and raw[-1] == '"':
        raw = raw[1:-1]
    if not all(_valid_value_char(c) for c in raw):
        raise ValueError(f"invalid cookie value: {raw!r}")
    return raw


def is_cookie_name_valid(raw: str) -> bool:
    """Return whether ``raw`` is a non-empty HTTP token."""
    return bool(raw) and all(c in _TOKEN_CHARS for c in raw)