"""Checked casts."""

from __future__ import annotations

from commonkit.errors import InvalidCastError

__all__ = ["cast_to"]


def cast_to[T](item: object, target_type: type[T]) -> T:
    """Return ``item`` typed as ``target_type``, checking it at runtime.

    >>> cast_to(3, int)
    3

    Raises
    ------
    InvalidCastError
        If ``item`` is not an instance of ``target_type``.
    """
    if not isinstance(item, target_type):
        raise InvalidCastError(item, target_type)
    return item
