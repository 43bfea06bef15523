"""Helpers for padded multi-value columns.

Multi-value settings are stored as a single string with the values wrapped
in a separator character, e.g. "\x012\x015\x01" for [2, 5].
"""

from __future__ import annotations

from typing import Any, Iterable

VALUE_SEPARATOR = "\x01"


def explode_padded(value: Any, separator: str = VALUE_SEPARATOR) -> list | None:
    """
    Split a padded multi-value string into a list.

    None stays None, lists pass through untouched and the empty string is
    an empty list. Values without the separator but with commas are split
    on commas.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    if value == "":
        return []
    value = str(value)
    if separator not in value and "," in value:
        return [part.strip() for part in value.split(",")]
    return value.strip(separator).split(separator)


def implode_padded(values: Iterable[Any] | None, separator: str = VALUE_SEPARATOR) -> str | None:
    """Join values into a padded multi-value string."""
    if values is None:
        return None
    values = [str(v) for v in values]
    if not values:
        return ""
    return separator + separator.join(values) + separator
