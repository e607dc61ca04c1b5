"""Dot-path lookup used to narrow a JSON response before decoding."""

import json
from typing import Any, List, Tuple

_MISSING = object()


def _walk(current: Any, keys: List[str]) -> Any:
    if not keys:
        return current
    if isinstance(current, list):
        # the remaining path applies to every element
        values = []
        for element in current:
            value = _walk(element, keys)
            if value is _MISSING:
                return _MISSING
            values.append(value)
        return values
    if not isinstance(current, dict) or keys[0] not in current:
        return _MISSING
    return _walk(current[keys[0]], keys[1:])


def lookup(root: Any, key_path: str) -> Any:
    """Walk `key_path` through nested JSON objects.

    When the path reaches an array, the rest of the path is applied to each
    element and the results are collected, so "items.id" on
    {"items": [{"id": 1}, {"id": 2}]} gives [1, 2].

    Args:
        root: A parsed JSON value.
        key_path: Dot-delimited keys, e.g. "data.items".

    Returns:
        The value at the path, or the module's missing sentinel if the root is not
        an object or any component does not resolve (including an array element
        that lacks the key). A JSON null that is present is returned as None,
        which is a hit.
    """
    if not isinstance(root, dict):
        return _MISSING
    return _walk(root, key_path.split("."))


def narrow(payload: bytes, key_path: str) -> Tuple[bytes, bool]:
    """Re-root a JSON payload at `key_path`.

    Returns:
        A tuple of (bytes to decode, whether the path was found). When the path is
        not found the original payload is returned unchanged.

    Raises:
        ValueError: If the payload is not JSON at all.
    """
    root = json.loads(payload)
    nested = lookup(root, key_path)
    if nested is _MISSING:
        return payload, False
    return json.dumps(nested).encode("utf-8"), True
