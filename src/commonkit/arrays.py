"""Non-mutating append and prepend for sequences."""

from __future__ import annotations

from collections.abc import Sequence

from commonkit.guards import require

__all__ = ["append_items", "prepend_items"]


def append_items[T](source: Sequence[T], *to_add: T) -> list[T]:
    """Return a new list with ``to_add`` after the items of ``source``.

    >>> append_items([1, 2], 3, 4)
    [1, 2, 3, 4]
    """
    require(source, "source")
    return [*source, *to_add]


def prepend_items[T](source: Sequence[T], *to_add: T) -> list[T]:
    """Return a new list with ``to_add`` before the items of ``source``.

    >>> prepend_items([3, 4], 1, 2)
    [1, 2, 3, 4]
    """
    require(source, "source")
    return [*to_add, *source]
