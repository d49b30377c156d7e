"""Tests for commonkit.objects."""

from __future__ import annotations

import pytest

from commonkit.errors import ErrorCode, InvalidCastError
from commonkit.objects import cast_to


class TestCastTo:
    """Tests for cast_to."""

    def test_returns_same_object(self) -> None:
        """Instances of the target type pass through."""
        value = [1]
        assert cast_to(value, list) is value

    def test_subclass_instances_accepted(self) -> None:
        """Subclass instances satisfy the cast."""
        assert cast_to(True, int) is True

    def test_wrong_type_raises(self) -> None:
        """Other types raise InvalidCastError, which is also a TypeError."""
        with pytest.raises(TypeError) as exc_info:
            cast_to("3", int)
        error = exc_info.value
        assert isinstance(error, InvalidCastError)
        assert error.code is ErrorCode.INVALID_CAST
        assert error.context == {"source_type": "str", "target_type": "int"}
        assert "'str' to type 'int'" in str(error)
