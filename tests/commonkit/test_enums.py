"""Tests for commonkit.enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag

import pytest

from commonkit.enums import (
    add_attribute,
    enum_attributes,
    get_attribute,
    get_attributes,
    get_flags,
    get_values,
)
from commonkit.errors import ArgumentNullError, InvalidArgumentError


class Permission(Flag):
    NONE = 0
    READ = 1
    WRITE = 2
    EXECUTE = 4
    READ_WRITE = 3


@dataclass(frozen=True)
class Label:
    text: str


@dataclass(frozen=True)
class Weight:
    value: int


@enum_attributes(
    SMALL=[Label("small"), Weight(1)],
    LARGE=[Label("large"), Label("big")],
)
class Size(Enum):
    SMALL = 1
    LARGE = 2
    UNKNOWN = 3


class TestGetFlags:
    """Tests for get_flags."""

    def test_decomposes_combined_value(self) -> None:
        """Combined values return their single-bit members in order."""
        assert get_flags(Permission.EXECUTE | Permission.READ) == [
            Permission.READ,
            Permission.EXECUTE,
        ]

    def test_alias_expands_to_members(self) -> None:
        """Multi-bit aliases are not returned themselves."""
        assert get_flags(Permission.READ_WRITE) == [Permission.READ, Permission.WRITE]

    def test_zero_value_has_no_flags(self) -> None:
        """The zero member contains no flags."""
        assert get_flags(Permission.NONE) == []

    def test_non_flag_rejected(self) -> None:
        """Plain enums raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            get_flags(Size.SMALL)  # type: ignore[type-var]

    def test_none_rejected(self) -> None:
        """None raises ArgumentNullError."""
        with pytest.raises(ArgumentNullError):
            get_flags(None)  # type: ignore[type-var]


class TestGetValues:
    """Tests for get_values."""

    def test_lists_all_members(self) -> None:
        """Every member is returned in definition order."""
        assert get_values(Size.LARGE) == [Size.SMALL, Size.LARGE, Size.UNKNOWN]

    def test_non_enum_rejected(self) -> None:
        """Non-enum values raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            get_values(3)  # type: ignore[type-var]


class TestAttributes:
    """Tests for enum member attributes."""

    def test_get_attribute_returns_first_of_type(self) -> None:
        """The first attribute of the requested type wins."""
        assert get_attribute(Size.LARGE, Label) == Label("large")
        assert get_attribute(Size.SMALL, Weight) == Weight(1)

    def test_get_attribute_missing(self) -> None:
        """Members without a matching attribute return None."""
        assert get_attribute(Size.LARGE, Weight) is None
        assert get_attribute(Size.UNKNOWN, Label) is None

    def test_get_attributes_lists_all(self) -> None:
        """All attributes of the type are returned in attachment order."""
        assert get_attributes(Size.LARGE, Label) == [Label("large"), Label("big")]

    def test_add_attribute(self) -> None:
        """Attributes can be attached after the class is defined."""

        class Colour(Enum):
            RED = 1

        add_attribute(Colour.RED, Label("red"))
        assert get_attribute(Colour.RED, Label) == Label("red")

    def test_unknown_member_name_rejected(self) -> None:
        """The decorator refuses names that are not members."""
        with pytest.raises(InvalidArgumentError, match="MISSING"):

            @enum_attributes(MISSING=[Label("x")])
            class Broken(Enum):
                PRESENT = 1

    def test_none_member_rejected(self) -> None:
        """None raises ArgumentNullError."""
        with pytest.raises(ArgumentNullError):
            get_attribute(None, Label)  # type: ignore[arg-type]
