"""Normalization helpers for XML-derived JSON.

The upstream XML to JSON conversion emits a bare object when an element
occurs once and an array when it repeats. Every repeatable field goes
through ``as_list`` at the point where it is read.
"""

from __future__ import annotations

from typing import Any


def as_list(value: Any) -> list[Any]:
    """Return ``value`` as a list.

    ``None`` becomes an empty list, a list or tuple is returned as a list in
    the same order, and anything else is wrapped in a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def get_path(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def list_at(data: Any, *keys: str) -> list[Any]:
    """Read a repeatable field at a nested path as a list."""
    return as_list(get_path(data, *keys))
