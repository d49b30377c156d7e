"""Shared pytest fixtures.

This module provides reusable fixtures for:
- Recording exception hooks
- Instrumented iterables that fail on demand and track closing
- Settings cache isolation
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from commonkit.settings import reset_settings_cache

if TYPE_CHECKING:
    from collections.abc import Iterable


class RecordingHook:
    """Exception hook that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException, str | None]] = []

    def __call__(self, exc: BaseException, message: str | None = None) -> None:
        self.calls.append((exc, message))

    @property
    def exceptions(self) -> list[BaseException]:
        return [exc for exc, _ in self.calls]


class FlakySource:
    """Iterable whose iterator raises instead of producing selected elements.

    Advancing to a position listed in ``failures`` raises ``RuntimeError`` and
    consumes that position, so the next advance moves on to the following
    element. ``close_count`` counts calls to the iterator's ``close``.

    Parameters
    ----------
    items : Iterable[object]
        Elements produced by the iterator.
    failures : Iterable[int], optional
        Zero-based positions whose advance raises.
    """

    def __init__(self, items: Iterable[object], failures: Iterable[int] = ()) -> None:
        self.items = list(items)
        self.failures = set(failures)
        self.close_count = 0
        self.iter_count = 0
        self.advance_count = 0

    def __iter__(self) -> Iterator[object]:
        self.iter_count += 1
        return _FlakyIterator(self)


class _FlakyIterator(Iterator[object]):
    def __init__(self, source: FlakySource) -> None:
        self._source = source
        self._position = 0

    def __next__(self) -> object:
        self._source.advance_count += 1
        if self._position >= len(self._source.items):
            raise StopIteration
        position = self._position
        self._position += 1
        if position in self._source.failures:
            msg = f"failed to produce element {position}"
            raise RuntimeError(msg)
        return self._source.items[position]

    def close(self) -> None:
        self._source.close_count += 1


@pytest.fixture(name="recording_hook")
def recording_hook_fixture() -> RecordingHook:
    """Provide a fresh recording exception hook.

    Returns
    -------
    RecordingHook
        Hook with an empty call list.
    """
    return RecordingHook()


@pytest.fixture(name="flaky_source_factory")
def flaky_source_factory_fixture() -> type[FlakySource]:
    """Provide the FlakySource class for building instrumented iterables.

    Returns
    -------
    type[FlakySource]
        The FlakySource class.
    """
    return FlakySource


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear cached settings and COMMONKIT_* variables around every test."""
    for key in list(os.environ):
        if key.startswith("COMMONKIT_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
