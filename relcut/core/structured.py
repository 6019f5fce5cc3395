"""Helpers for reading untyped TOML/JSON payloads safely.

Used where the release config and the forge API response enter the program.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value, stripped of surrounding whitespace."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value exactly as stored (no stripping, may be empty)."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a list of strings; a bare string is read as a one-item command."""
    value = table.get(key)
    if isinstance(value, str):
        return (value,) if value.strip() else None
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    if not items or not all(isinstance(v, str) for v in items):
        return None
    return tuple(cast(list[str], items))
