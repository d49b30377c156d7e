"""Tests for commonkit.arrays."""

from __future__ import annotations

import pytest

from commonkit.arrays import append_items, prepend_items
from commonkit.errors import ArgumentNullError


class TestAppendPrepend:
    """Tests for append_items and prepend_items."""

    def test_append_returns_new_list(self) -> None:
        """The source is left untouched."""
        source = [1, 2]
        result = append_items(source, 3)
        assert result == [1, 2, 3]
        assert source == [1, 2]

    def test_prepend_keeps_argument_order(self) -> None:
        """Prepended items keep the order they were given in."""
        assert prepend_items(("c",), "a", "b") == ["a", "b", "c"]

    def test_nothing_to_add_copies(self) -> None:
        """Without items to add a copy of the source is returned."""
        source = [1]
        result = append_items(source)
        assert result == source
        assert result is not source

    @pytest.mark.parametrize("func", [append_items, prepend_items])
    def test_missing_source_rejected(self, func) -> None:  # type: ignore[no-untyped-def]
        """None as the source raises ArgumentNullError."""
        with pytest.raises(ArgumentNullError):
            func(None, 1)
