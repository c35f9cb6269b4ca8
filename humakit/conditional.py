"""Conditional request handling with ETags and modification times.

Supports the ``If-Match``, ``If-None-Match``, ``If-Modified-Since`` and
``If-Unmodified-Since`` headers. Reads that fail a precondition yield a
304 Not Modified; writes yield a 412 Precondition Failed with details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional

_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def trim_etag(value: str) -> str:
    """Strip a ``W/`` prefix and surrounding quotes from an ETag."""
    if value.startswith("W/") and len(value) > 2:
        value = value[2:]
    return value.strip('"')


def _http_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _after(a: Optional[datetime], b: Optional[datetime]) -> bool:
    """Whether ``a`` is later than ``b``; ``None`` is the earliest instant."""
    if a is None:
        return False
    if b is None:
        return True
    if a.tzinfo is None:
        a = a.replace(tzinfo=timezone.utc)
    if b.tzinfo is None:
        b = b.replace(tzinfo=timezone.utc)
    return a > b


@dataclass
class ErrorDetail:
    """Details about one failed check."""

    message: str
    location: str = ""
    value: Any = None

    def __str__(self) -> str:
        return f"{self.message} ({self.location}: {self.value!r})"


class StatusError(Exception):
    """An error carrying an HTTP status code and optional details."""

    def __init__(self, status: int, detail: str = "", errors: Optional[list[ErrorDetail]] = None):
        self.status = status
        self.detail = detail
        self.errors = list(errors or [])
        super().__init__(detail or str(status))


@dataclass
class Params:
    """Conditional request headers sent by a client."""

    if_match: list[str] = field(default_factory=list)
    if_none_match: list[str] = field(default_factory=list)
    if_modified_since: Optional[datetime] = None
    if_unmodified_since: Optional[datetime] = None
    _is_write: bool = field(default=False, init=False, repr=False)

    def resolve(self, method: str) -> list[ErrorDetail]:
        """Record whether the request method writes; never reports errors."""
        if method in _WRITE_METHODS:
            self._is_write = True
        return []

    def has_conditional_params(self) -> bool:
        """Return whether any conditional header was sent."""
        return bool(
            self.if_match
            or self.if_none_match
            or self.if_modified_since is not None
            or self.if_unmodified_since is not None
        )

    def precondition_failed(
        self, etag: str, modified: Optional[datetime] = None
    ) -> Optional[StatusError]:
        """Check the conditions against the resource's current state.

        Returns ``None`` if the request may proceed, otherwise the error to
        send: 304 for reads, 412 with details for writes. An empty ``etag``
        means no resource exists; ``modified`` of ``None`` means unknown.
        """
        failed = False
        errors: list[ErrorDetail] = []

        found_msg = f"found resource with ETag {etag}" if etag else "found no existing resource"

        for match in self.if_none_match:
            trimmed = trim_etag(match)
            if trimmed == etag or (trimmed == "*" and etag):
                if self._is_write:
                    errors.append(
                        ErrorDetail(
                            message=f"If-None-Match: {match} precondition failed, {found_msg}",
                            location="headers.If-None-Match",
                            value=match,
                        )
                    )
                failed = True

        if self.if_match and not any(trim_etag(m) == etag for m in self.if_match):
            if self._is_write:
                errors.append(
                    ErrorDetail(
                        message=f"If-Match precondition failed, {found_msg}",
                        location="headers.If-Match",
                        value=list(self.if_match),
                    )
                )
            failed = True

        modified_text = _http_date(modified) if modified is not None else ""

        if self.if_modified_since is not None and not _after(modified, self.if_modified_since):
            if self._is_write:
                since = _http_date(self.if_modified_since)
                errors.append(
                    ErrorDetail(
                        message=(
                            f"If-Modified-Since: {since} precondition failed, "
                            f"resource was modified at {modified_text}"
                        ),
                        location="headers.If-Modified-Since",
                        value=since,
                    )
                )
            failed = True

        if self.if_unmodified_since is not None and _after(modified, self.if_unmodified_since):
            if self._is_write:
                since = _http_date(self.if_unmodified_since)
                errors.append(
                    ErrorDetail(
                        message=(
                            f"If-Unmodified-Since: {since} precondition failed, "
                            f"resource was modified at {modified_text}"
                        ),
                        location="headers.If-Unmodified-Since",
                        value=since,
                    )
                )
            failed = True

        if not failed:
            return None
        if self._is_write:
            return StatusError(412, "Precondition Failed", errors)
        return StatusError(304)