"""Helpers for canonical JSON serialization used for signing + field encoding."""

from __future__ import annotations

import json
import math
from typing import Any, Union

import jcs
import orjson

JsonType = Union[str, int, float, bool, None, list["JsonType"], dict[str, "JsonType"]]


class CanonicalizationError(ValueError):
    """Raised when a value has no RFC 8785 representation."""


def _assert_json_safe(value: Any, path: str, ancestors: set[int]) -> None:
    if value is None or isinstance(value, (str, bool, int)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationError(f"{path}: non-finite number {value!r}")
        return
    if isinstance(value, (dict, list, tuple)):
        marker = id(value)
        if marker in ancestors:
            raise CanonicalizationError(f"{path}: circular reference")
        ancestors.add(marker)
        if isinstance(value, dict):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise CanonicalizationError(f"{path}: non-string key {key!r}")
                _assert_json_safe(item, f"{path}.{key}", ancestors)
        else:
            for index, item in enumerate(value):
                _assert_json_safe(item, f"{path}[{index}]", ancestors)
        ancestors.discard(marker)
        return
    raise CanonicalizationError(f"{path}: unsupported type {type(value).__name__}")


def canonical_dumps(payload: Any) -> bytes:
    """Return RFC 8785 canonical JSON bytes (sorted keys, ES6 numbers, no whitespace)."""
    try:
        _assert_json_safe(payload, "$", set())
        return jcs.canonicalize(payload)
    except CanonicalizationError:
        raise
    except (TypeError, ValueError, OverflowError, RecursionError) as exc:
        raise CanonicalizationError(str(exc)) from exc


def canonical_number(value: int | float) -> str:
    """Format a number the way ECMAScript ``String(number)`` does."""
    return canonical_dumps(value).decode("utf-8")


def compact_dumps(value: Any) -> str:
    """Serialize without whitespace, keeping insertion order (``JSON.stringify`` layout).

    orjson refuses integers wider than 64 bits and unpaired surrogates; those
    payloads go through the stdlib encoder with the same layout.
    """
    try:
        return orjson.dumps(value).decode("utf-8")
    except orjson.JSONEncodeError:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def loads(text: str) -> Any:
    return orjson.loads(text)
