"""Convert between CamelCase, snake_case, kebab-case and similar styles.

The central piece is :func:`split`, which breaks almost any identifier into
words; the other helpers re-join those words in a chosen style.
"""

from __future__ import annotations

import re
import unicodedata
from enum import Enum, auto
from typing import Callable, Iterable

TransformFunc = Callable[[str], str]

COMMON_INITIALISMS = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS",
        "RPC", "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI",
        "UID", "UUID", "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF",
        "XSS",
        # Media initialisms
        "1080P", "2D", "3D", "4K", "8K", "AAC", "AC3", "CDN", "DASH", "DRM",
        "DVR", "EAC3", "FPS", "GOP", "H264", "H265", "HD", "HLS", "MJPEG",
        "MP2T", "MP3", "MP4", "MPEG2", "MPEG4", "NTSC", "PCM", "RGB", "RGBA",
        "RTMP", "RTP", "SCTE", "SCTE35", "SMPTE", "UPID", "UPIDS", "VOD",
        "YUV420", "YUV422", "YUV444",
    }
)

# Words that attach to a preceding number, e.g. 2D, 100GB, 1080P.
COMMON_SUFFIXES = frozenset({"D", "GB", "K", "KB", "KBPS", "MB", "MPBS", "P", "TB"})

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _State(Enum):
    NONE = auto()
    LOWER = auto()
    FIRST_UPPER = auto()
    UPPER = auto()
    SYMBOL = auto()


def _is_space(c: str) -> bool:
    if c <= "\xff":
        return c in "\t\n\v\f\r \x85\xa0"
    return c.isspace()


def _is_punct(c: str) -> bool:
    return unicodedata.category(c).startswith("P")


def _is_upper(c: str) -> bool:
    return unicodedata.category(c) == "Lu"


def _is_lower(c: str) -> bool:
    return unicodedata.category(c) == "Ll"


def _is_letter(c: str) -> bool:
    return unicodedata.category(c).startswith("L")


def _is_int(part: str) -> bool:
    return bool(_INT_RE.fullmatch(part)) and _INT64_MIN <= int(part) <= _INT64_MAX


def identity(part: str) -> str:
    """Return the part as a plain string, keeping its casing."""
    return str(part)


def initialism(part: str) -> str:
    """Upper-case common initialisms such as ID and HTTP."""
    upper = part.upper()
    return upper if upper in COMMON_INITIALISMS else part


def split(value: str) -> list[str]:
    """Split a value into words, honouring case changes, digits and symbols.

    >>> split("HTTPServer_2020")
    ['HTTP', 'Server', '2020']
    """
    results: list[str] = []
    start = 0
    state = _State.NONE

    for i, c in enumerate(value):
        # Whitespace and punctuation always break words.
        if _is_space(c) or _is_punct(c):
            if i > start:
                results.append(value[start:i])
            start = i + 1
            state = _State.NONE
            continue

        if state not in (_State.FIRST_UPPER, _State.UPPER) and _is_upper(c):
            if start != i:
                results.append(value[start:i])
                start = i
            state = _State.FIRST_UPPER
        elif state is _State.FIRST_UPPER and _is_upper(c):
            state = _State.UPPER
        elif state is not _State.SYMBOL and not _is_letter(c):
            if start != i:
                results.append(value[start:i])
                start = i
            state = _State.SYMBOL
        elif state is not _State.LOWER and _is_lower(c):
            if state is _State.UPPER:
                # The last upper-case letter belongs to the lower-case word,
                # e.g. HTTPServer.
                if i > 0 and start != i - 1:
                    results.append(value[start : i - 1])
                    start = i - 1
            elif state is not _State.FIRST_UPPER:
                if i > 0 and start != i:
                    results.append(value[start:i])
                    start = i
            state = _State.LOWER

    if start < len(value):
        results.append(value[start:])

    return results


def join(parts: Iterable[str], sep: str, *transforms: TransformFunc) -> str:
    """Join parts with ``sep`` after applying each transform in turn.

    A part that a transform turns into an empty string is dropped.
    """
    kept: list[str] = []
    for part in parts:
        for transform in transforms:
            part = transform(part)
            if not part:
                break
        else:
            kept.append(part)
    return sep.join(kept)


def merge_numbers(parts: list[str], *suffixes: str) -> list[str]:
    """Merge number parts with adjacent words, e.g. ``h264`` or ``mode_4k``.

    ``suffixes`` name words that attach to a preceding number; without any,
    a default set of common suffixes is used. Pass ``""`` to disable them.
    """
    lookup = {word.upper() for word in suffixes} if suffixes else COMMON_SUFFIXES
    results: list[str] = []
    prev_num = False
    i = 0
    count = len(parts)

    while i < count:
        part = parts[i]
        if _is_int(part):
            # Right-aligned word such as 4K or 1080P.
            if i < count - 1 and parts[i + 1].upper() in lookup:
                results.append(part + parts[i + 1])
                i += 2
                continue

            if not prev_num:
                if i == 0:
                    results.append(part)
                else:
                    results[-1] += part
                prev_num = True
                i += 1
                continue

            prev_num = True
        else:
            # A leading number followed by a word merges into that word.
            if i == 1 and prev_num:
                results[0] += part
                prev_num = False
                i += 1
                continue

            prev_num = False

        results.append(part)
        i += 1

    return results


def _is_title_separator(c: str) -> bool:
    if c <= "\x7f":
        return not (c.isascii() and (c.isalnum() or c == "_"))
    if _is_letter(c) or unicodedata.category(c) == "Nd":
        return False
    return _is_space(c)


def _title(part: str) -> str:
    """Upper-case the first letter of each word, leaving the rest untouched."""
    out = []
    prev = " "
    for c in part:
        if _is_title_separator(prev):
            titled = c.title()
            out.append(titled if len(titled) == 1 else c)
        else:
            out.append(c)
        prev = c
    return "".join(out)


def camel(value: str, *transforms: TransformFunc) -> str:
    """Return a CamelCase version of the value.

    Without transforms every part is lower-cased first; pass :func:`identity`
    to keep the original casing.
    """
    steps = transforms or (str.lower,)
    return join(split(value), "", *steps, _title)


def lower_camel(value: str, *transforms: TransformFunc) -> str:
    """Return a lowerCamelCase version of the value."""
    result = camel(value, *transforms)
    if not result:
        return result
    return result[0].lower() + result[1:]


def snake(value: str, *transforms: TransformFunc) -> str:
    """Return a snake_case version of the value."""
    steps = transforms or (str.lower,)
    return join(merge_numbers(split(value)), "_", *steps)


def kebab(value: str, *transforms: TransformFunc) -> str:
    """Return a kebab-case version of the value."""
    steps = transforms or (str.lower,)
    return join(merge_numbers(split(value)), "-", *steps)