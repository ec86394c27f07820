"""Helpers for reading loosely-structured JSON payloads.

Each helper returns the value it was asked for, or ``None`` when any part of
the path is missing or has the wrong type, so callers can test for absence
instead of chaining ``.get()`` calls.
"""

from typing import Any


def dig(data: Any, *path: str | int) -> Any:
    """
    Walk nested dicts/lists along ``path``.

    Examples:
        dig({"event": {"title": "Alien"}}, "event", "title") → "Alien"
        dig({"event": None}, "event", "title") → None
        dig({"items": [{"id": 1}]}, "items", 0, "id") → 1
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        if current is None:
            return None
    return current


def first_text(data: Any, *paths: tuple[str | int, ...]) -> str | None:
    """Return the first non-empty string found along any of ``paths``."""
    for path in paths:
        value = dig(data, *path)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def first_list(data: Any, keys: tuple[str, ...]) -> list | None:
    """
    Find the list of records in an API response.

    A bare list is returned as is. For a dict, each wrapper key is probed in
    order and the first list value is returned.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys:
            value = data.get(key)
            if isinstance(value, list):
                return value
    return None
