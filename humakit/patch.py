"""Partial updates for JSON resources.

This module supports generated PATCH operations for resources that have a
GET and a PUT. It offers JSON Merge Patch (RFC 7386), JSON Patch (RFC 6902),
JSON-aware equality to detect no-op patches, and a helper that derives a
request schema in which every property is optional.
"""

from __future__ import annotations

import copy
import json
import re
from typing import Any, Optional, Union

from humakit import casing

_OPERATIONS = frozenset({"add", "remove", "replace", "move", "copy", "test"})
_INDEX_RE = re.compile(r"0|[1-9][0-9]*")

# Schema keywords carried over into the optional version of a schema. Nested
# schemas and ``required`` are handled separately.
_COPIED_KEYWORDS = (
    "type",
    "title",
    "description",
    "format",
    "contentEncoding",
    "default",
    "examples",
    "additionalProperties",
    "enum",
    "minimum",
    "exclusiveMinimum",
    "maximum",
    "exclusiveMaximum",
    "multipleOf",
    "minLength",
    "maxLength",
    "pattern",
    "patternDescription",
    "minItems",
    "maxItems",
    "uniqueItems",
    "minProperties",
    "maxProperties",
    "readOnly",
    "writeOnly",
    "deprecated",
    "dependentRequired",
    "discriminator",
)


class PatchError(ValueError):
    """Raised when a patch cannot be decoded or applied."""


def make_optional_schema(schema: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Return a copy of a JSON schema in which no property is required.

    Nested schemas under ``items``, ``properties``, ``oneOf``, ``anyOf``,
    ``allOf`` and ``not`` are made optional too. The input is not modified.
    """
    if schema is None:
        return None

    optional: dict[str, Any] = {
        key: schema[key] for key in _COPIED_KEYWORDS if key in schema
    }
    optional.update(
        (key, value) for key, value in schema.items() if key.startswith("x-")
    )

    if schema.get("items") is not None:
        optional["items"] = make_optional_schema(schema["items"])

    if schema.get("properties") is not None:
        optional["properties"] = {
            name: make_optional_schema(sub) for name, sub in schema["properties"].items()
        }

    for key in ("oneOf", "anyOf", "allOf"):
        if schema.get(key) is not None:
            optional[key] = [make_optional_schema(sub) for sub in schema[key]]

    if schema.get("not") is not None:
        optional["not"] = make_optional_schema(schema["not"])

    return optional


def patch_operation_name(operation_id: str) -> str:
    """Derive the resource name for a PATCH from the GET's operation ID.

    A leading ``get`` or ``fetch`` word is dropped, so ``get-thing`` gives
    ``thing`` and the PATCH becomes ``patch-thing``.
    """
    parts = casing.split(operation_id)
    if len(parts) > 1 and parts[0].lower() in ("get", "fetch"):
        parts = parts[1:]
    return casing.join(parts, "-")


def decode_json_patch(data: Union[str, bytes]) -> list[dict[str, Any]]:
    """Decode a JSON Patch document into a list of operation objects."""
    try:
        decoded = json.loads(data)
    except (ValueError, TypeError) as exc:
        raise PatchError(f"invalid JSON Patch document: {exc}") from exc
    if not isinstance(decoded, list):
        raise PatchError("JSON Patch document must be an array")
    if not all(isinstance(op, dict) for op in decoded):
        raise PatchError("JSON Patch operations must be objects")
    return decoded


def _parse_pointer(pointer: Any) -> list[str]:
    if not isinstance(pointer, str):
        raise PatchError(f"invalid JSON pointer: {pointer!r}")
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PatchError(f"JSON pointer must start with '/': {pointer!r}")
    return [
        token.replace("~1", "/").replace("~0", "~") for token in pointer[1:].split("/")
    ]


def _array_index(token: str, length: int, allow_end: bool) -> int:
    if not _INDEX_RE.fullmatch(token):
        raise PatchError(f"invalid array index: {token!r}")
    index = int(token)
    limit = length if allow_end else length - 1
    if index > limit:
        raise PatchError(f"array index out of range: {index}")
    return index


def _get(doc: Any, tokens: list[str]) -> Any:
    current = doc
    for token in tokens:
        if isinstance(current, dict):
            if token not in current:
                raise PatchError(f"missing key: {token!r}")
            current = current[token]
        elif isinstance(current, list):
            current = current[_array_index(token, len(current), allow_end=False)]
        else:
            raise PatchError(f"cannot traverse into {type(current).__name__} at {token!r}")
    return current


def _add(doc: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent = _get(doc, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        parent[key] = value
    elif isinstance(parent, list):
        if key == "-":
            parent.append(value)
        else:
            parent.insert(_array_index(key, len(parent), allow_end=True), value)
    else:
        raise PatchError(f"cannot add to {type(parent).__name__}")
    return doc


def _remove(doc: Any, tokens: list[str]) -> Any:
    if not tokens:
        raise PatchError("cannot remove the whole document")
    parent = _get(doc, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        if key not in parent:
            raise PatchError(f"cannot remove missing key: {key!r}")
        return parent.pop(key)
    if isinstance(parent, list):
        return parent.pop(_array_index(key, len(parent), allow_end=False))
    raise PatchError(f"cannot remove from {type(parent).__name__}")


def _replace(doc: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent = _get(doc, tokens[:-1])
    key = tokens[-1]
    if isinstance(parent, dict):
        if key not in parent:
            raise PatchError(f"cannot replace missing key: {key!r}")
        parent[key] = value
    elif isinstance(parent, list):
        parent[_array_index(key, len(parent), allow_end=False)] = value
    else:
        raise PatchError(f"cannot replace in {type(parent).__name__}")
    return doc


def _required(operation: dict[str, Any], key: str) -> Any:
    if key not in operation:
        raise PatchError(f"operation {operation.get('op')!r} is missing {key!r}")
    return operation[key]


def apply_json_patch(document: Any, operations: list[dict[str, Any]]) -> Any:
    """Apply JSON Patch operations to a document and return the result.

    The input document is left unchanged. Raises :class:`PatchError` if any
    operation is unknown, malformed, or fails.
    """
    doc = copy.deepcopy(document)
    for operation in operations:
        if not isinstance(operation, dict):
            raise PatchError("JSON Patch operations must be objects")
        kind = operation.get("op")
        if kind not in _OPERATIONS:
            raise PatchError(f"unexpected operation kind: {kind!r}")
        path = _parse_pointer(_required(operation, "path"))

        if kind == "add":
            doc = _add(doc, path, copy.deepcopy(_required(operation, "value")))
        elif kind == "remove":
            _remove(doc, path)
        elif kind == "replace":
            doc = _replace(doc, path, copy.deepcopy(_required(operation, "value")))
        elif kind == "move":
            source = _parse_pointer(_required(operation, "from"))
            if len(path) > len(source) and path[: len(source)] == source:
                raise PatchError("cannot move a value into one of its children")
            if source == path:
                _get(doc, source)
                continue
            value = _get(doc, source)
            if source:
                _remove(doc, source)
            doc = _add(doc, path, value)
        elif kind == "copy":
            source = _parse_pointer(_required(operation, "from"))
            doc = _add(doc, path, copy.deepcopy(_get(doc, source)))
        else:
            expected = _required(operation, "value")
            if not json_equal(_get(doc, path), expected):
                raise PatchError(f"test failed at {operation['path']!r}")
    return doc


def apply_merge_patch(original: Any, patch: Any) -> Any:
    """Apply a JSON Merge Patch and return the merged value.

    ``null`` members of the patch delete keys; any non-object patch replaces
    the target outright. The inputs are left unchanged.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    target = copy.deepcopy(original) if isinstance(original, dict) else {}
    for name, value in patch.items():
        if value is None:
            target.pop(name, None)
        else:
            target[name] = apply_merge_patch(target.get(name), value)
    return target


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values by meaning rather than by Python identity.

    Numbers compare by value, booleans never equal numbers, and object key
    order does not matter.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_number(a) or _is_number(b):
        return _is_number(a) and _is_number(b) and a == b
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    return False