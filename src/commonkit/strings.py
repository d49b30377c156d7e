"""String helpers.

Examples
--------
>>> replace_chars("a,b;;c", ",;", "|")
'a|b|c'
>>> list(all_indexes_of("abcabc", "bc"))
[1, 4]
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from enum import StrEnum

from commonkit.errors import InvalidArgumentError
from commonkit.guards import require

__all__ = [
    "StringComparison",
    "all_indexes_of",
    "equals_any",
    "is_null_or_empty",
    "is_null_or_whitespace",
    "remove_all",
    "replace_chars",
    "truncate",
]


class StringComparison(StrEnum):
    """How :func:`equals_any` compares strings."""

    ORDINAL = "ordinal"
    ORDINAL_IGNORE_CASE = "ordinal_ignore_case"


def is_null_or_empty(value: str | None) -> bool:
    """Return ``True`` if ``value`` is ``None`` or ``""``."""
    return not value


def is_null_or_whitespace(value: str | None) -> bool:
    """Return ``True`` if ``value`` is ``None``, empty, or only whitespace."""
    return value is None or not value.strip()


def replace_chars(value: str, old_chars: Iterable[str], new_string: str) -> str:
    """Replace every run of the characters in ``old_chars`` with ``new_string``.

    The string is split on each of ``old_chars``, empty pieces are dropped,
    and the remaining pieces are joined with ``new_string``. Leading and
    trailing separators therefore disappear.
    """
    require(value, "value")
    require(old_chars, "old_chars")
    require(new_string, "new_string")
    chars = "".join(old_chars)
    if not chars:
        return value
    pieces = re.split(f"[{re.escape(chars)}]", value)
    return new_string.join(piece for piece in pieces if piece)


def equals_any(
    value: str | None,
    *values: str | None,
    comparison: StringComparison = StringComparison.ORDINAL,
) -> bool:
    """Return ``True`` if ``value`` equals one of ``values``.

    ``None`` for ``value`` never matches.

    >>> equals_any("Yes", "no", "yes", comparison=StringComparison.ORDINAL_IGNORE_CASE)
    True
    """
    if value is None:
        return False
    if comparison is StringComparison.ORDINAL_IGNORE_CASE:
        folded = value.casefold()
        return any(item is not None and item.casefold() == folded for item in values)
    return any(item == value for item in values)


def all_indexes_of(text: str, value: str) -> Iterator[int]:
    """Yield the start index of every non-overlapping occurrence of ``value``.

    Raises
    ------
    InvalidArgumentError
        Immediately, if ``value`` is ``None`` or empty.
    """
    if not value:
        msg = "The string to find may not be empty"
        raise InvalidArgumentError(msg, argument="value")
    require(text, "text")
    return _all_indexes_of(text, value)


def _all_indexes_of(text: str, value: str) -> Iterator[int]:
    index = text.find(value)
    while index != -1:
        yield index
        index = text.find(value, index + len(value))


def remove_all(text: str, to_remove: Iterable[str | None]) -> str:
    """Remove every occurrence of each non-blank string in ``to_remove``.

    >>> remove_all("a-b_c", ["-", "_", " "])
    'abc'
    """
    require(text, "text")
    require(to_remove, "to_remove")
    for part in to_remove:
        if not is_null_or_whitespace(part):
            text = text.replace(part, "")  # type: ignore[arg-type]
    return text


def truncate(value: str | None, max_length: int) -> str | None:
    """Cut ``value`` down to at most ``max_length`` characters.

    ``None`` and ``""`` are returned unchanged.
    """
    if not value:
        return value
    if max_length < 0:
        msg = f"max_length must not be negative, got {max_length}"
        raise InvalidArgumentError(msg, argument="max_length")
    return value[:max_length]
