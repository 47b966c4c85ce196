"""
Helpers for turning decoded JSON into the typed payload dataclasses.

Every helper raises PayloadShapeError (a ValueError) when the JSON does not
match the declared field, which the request pipeline reports as
JsonDeserializationFailedError.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional, TypeVar

T = TypeVar("T")


class PayloadShapeError(ValueError):
    """A JSON payload does not have the declared shape."""


def _type_names(types: Any) -> str:
    if isinstance(types, tuple):
        return " or ".join(t.__name__ for t in types)
    return types.__name__


def _check(value: Any, types: Any, *, key: str, what: str) -> Any:
    # bool is an int subclass; a JSON true/false is never a number here.
    if isinstance(value, bool) and not _accepts_bool(types):
        raise PayloadShapeError(f"'{key}' in {what}: expected {_type_names(types)}, got bool.")
    if not isinstance(value, types):
        raise PayloadShapeError(
            f"'{key}' in {what}: expected {_type_names(types)}, got {type(value).__name__}."
        )
    return value


def _accepts_bool(types: Any) -> bool:
    return bool in types if isinstance(types, tuple) else types is bool


def require_object(value: Any, *, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PayloadShapeError(f"Expected a JSON object for {what}, got {type(value).__name__}.")
    return value


def require(obj: dict[str, Any], key: str, types: Any, *, what: str) -> Any:
    if key not in obj or obj[key] is None:
        raise PayloadShapeError(f"Missing '{key}' in {what}.")
    return _check(obj[key], types, key=key, what=what)


def optional(obj: dict[str, Any], key: str, types: Any, *, what: str) -> Any:
    value = obj.get(key)
    if value is None:
        return None
    return _check(value, types, key=key, what=what)


def require_float(obj: dict[str, Any], key: str, *, what: str) -> float:
    return float(require(obj, key, (int, float), what=what))


def optional_float(obj: dict[str, Any], key: str, *, what: str) -> Optional[float]:
    value = optional(obj, key, (int, float), what=what)
    return float(value) if value is not None else None


def string_list(obj: dict[str, Any], key: str, *, what: str) -> tuple[str, ...]:
    items = optional(obj, key, list, what=what) or []
    return tuple(_check(item, str, key=f"{key}[]", what=what) for item in items)


def float_list(obj: dict[str, Any], key: str, *, what: str) -> tuple[float, ...]:
    items = optional(obj, key, list, what=what) or []
    return tuple(float(_check(item, (int, float), key=f"{key}[]", what=what)) for item in items)


def object_list(
    obj: dict[str, Any],
    key: str,
    decode: Callable[[dict[str, Any]], T],
    *,
    what: str,
    required: bool = False,
) -> tuple[T, ...]:
    """
    Decode a list of JSON objects with `decode`.

    Missing keys yield an empty tuple unless `required` is set.
    """
    items = require(obj, key, list, what=what) if required else (optional(obj, key, list, what=what) or [])
    return tuple(decode(require_object(item, what=f"{what}.{key}[]")) for item in items)


def optional_object(
    obj: dict[str, Any],
    key: str,
    decode: Callable[[dict[str, Any]], T],
    *,
    what: str,
) -> Optional[T]:
    value = optional(obj, key, dict, what=what)
    return decode(value) if value is not None else None


def bool_param(value: bool) -> str:
    """Encode a boolean the way the API expects it in form parameters."""
    return "true" if value else "false"
