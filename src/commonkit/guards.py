"""Argument guards shared by the commonkit helpers.

Every public helper validates its required arguments before doing any work, so
a missing argument fails at the call site rather than somewhere inside a loop
or a lazily consumed generator.

Examples
--------
>>> from commonkit.guards import require
>>> require([1, 2], "sequence")
[1, 2]
>>> try:
...     require(None, "sequence")
... except ValueError as e:
...     assert "sequence" in str(e)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from commonkit.errors import ArgumentNullError, InvalidArgumentError

__all__ = [
    "require",
    "require_callable",
    "require_iterable",
]


def require[T](value: T | None, name: str) -> T:
    """Return ``value`` or raise :class:`ArgumentNullError` when it is ``None``.

    Parameters
    ----------
    value : T | None
        Argument value to check.
    name : str
        Argument name reported in the error.

    Returns
    -------
    T
        The value, unchanged.

    Raises
    ------
    ArgumentNullError
        When ``value`` is ``None``.
    """
    if value is None:
        raise ArgumentNullError(name)
    return value


def require_callable[F: Callable[..., object]](value: F | None, name: str) -> F:
    """Return ``value`` if it is callable.

    Raises
    ------
    ArgumentNullError
        When ``value`` is ``None``.
    InvalidArgumentError
        When ``value`` is not callable.
    """
    checked = require(value, name)
    if not callable(checked):
        msg = f"Argument '{name}' must be callable, got {type(checked).__name__}"
        raise InvalidArgumentError(msg, argument=name)
    return checked


def require_iterable[I: Iterable[object]](value: I | None, name: str) -> I:
    """Return ``value`` if it is iterable.

    Raises
    ------
    ArgumentNullError
        When ``value`` is ``None``.
    InvalidArgumentError
        When ``value`` does not support iteration.
    """
    checked = require(value, name)
    if not isinstance(checked, Iterable):
        msg = f"Argument '{name}' must be iterable, got {type(checked).__name__}"
        raise InvalidArgumentError(msg, argument=name)
    return checked
