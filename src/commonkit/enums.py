"""Enum helpers: flag decomposition, member listing, and member attributes.

Attributes are arbitrary objects attached to enum members with the
:func:`enum_attributes` class decorator and looked up by type:

>>> from dataclasses import dataclass
>>> from enum import Enum
>>> @dataclass(frozen=True)
... class Description:
...     text: str
>>> @enum_attributes(RED=[Description("Warm colour")])
... class Colour(Enum):
...     RED = 1
...     BLUE = 2
>>> get_attribute(Colour.RED, Description).text
'Warm colour'
>>> get_attribute(Colour.BLUE, Description) is None
True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum, Flag

from commonkit.errors import InvalidArgumentError
from commonkit.guards import require

__all__ = [
    "add_attribute",
    "enum_attributes",
    "get_attribute",
    "get_attributes",
    "get_flags",
    "get_values",
]

_ATTRIBUTES: dict[Enum, list[object]] = {}


def get_flags[F: Flag](value: F) -> list[F]:
    """Return the canonical members of ``value``'s class contained in ``value``.

    Members are returned in definition order. Zero-valued and multi-bit alias
    members are not returned, only the single-bit members that make up
    ``value``.

    >>> from enum import Flag, auto
    >>> class Access(Flag):
    ...     READ = auto()
    ...     WRITE = auto()
    ...     EXECUTE = auto()
    >>> get_flags(Access.READ | Access.EXECUTE)
    [<Access.READ: 1>, <Access.EXECUTE: 4>]

    Raises
    ------
    ArgumentNullError
        If ``value`` is ``None``.
    InvalidArgumentError
        If ``value`` is not a :class:`enum.Flag` member.
    """
    require(value, "value")
    if not isinstance(value, Flag):
        msg = f"Expected a Flag member, got {type(value).__name__}"
        raise InvalidArgumentError(msg, argument="value")
    return [member for member in type(value) if member in value]


def get_values[E: Enum](value: E) -> list[E]:
    """Return every member of ``value``'s enum class in definition order."""
    require(value, "value")
    if not isinstance(value, Enum):
        msg = f"Expected an Enum member, got {type(value).__name__}"
        raise InvalidArgumentError(msg, argument="value")
    return list(type(value))


def add_attribute(member: Enum, attribute: object) -> None:
    """Attach ``attribute`` to ``member``."""
    require(member, "member")
    require(attribute, "attribute")
    if not isinstance(member, Enum):
        msg = f"Expected an Enum member, got {type(member).__name__}"
        raise InvalidArgumentError(msg, argument="member")
    _ATTRIBUTES.setdefault(member, []).append(attribute)


def enum_attributes[E: type[Enum]](**by_member: Iterable[object]) -> Callable[[E], E]:
    """Class decorator attaching attributes to members by member name.

    Raises
    ------
    InvalidArgumentError
        When the decorated enum has no member with one of the given names.
    """

    def decorate(enum_cls: E) -> E:
        for name, attributes in by_member.items():
            try:
                member = enum_cls[name]
            except KeyError as exc:
                msg = f"'{enum_cls.__name__}' has no member named '{name}'"
                raise InvalidArgumentError(msg, argument=name) from exc
            for attribute in attributes:
                add_attribute(member, attribute)
        return enum_cls

    return decorate


def get_attributes[A](member: Enum, attribute_type: type[A]) -> list[A]:
    """Return every attribute of ``member`` that is an instance of ``attribute_type``."""
    require(member, "member")
    require(attribute_type, "attribute_type")
    return [item for item in _ATTRIBUTES.get(member, ()) if isinstance(item, attribute_type)]


def get_attribute[A](member: Enum, attribute_type: type[A]) -> A | None:
    """Return the first attribute of ``member`` of type ``attribute_type``, or ``None``."""
    matches = get_attributes(member, attribute_type)
    return matches[0] if matches else None
