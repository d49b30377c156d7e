"""A list that raises an event whenever its contents change.

Examples
--------
>>> items = ObservableList([1, 2])
>>> changes = []
>>> items.collection_changed += lambda sender, args: changes.append(args.action)
>>> items.append(3)
>>> del items[0]
>>> [str(action) for action in changes]
['add', 'remove']
"""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import cast, overload

from commonkit.events import Event

__all__ = [
    "CollectionChangedAction",
    "CollectionChangedEventArgs",
    "ObservableList",
]


class CollectionChangedAction(StrEnum):
    """Kind of change reported by ``collection_changed``."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    RESET = "reset"


@dataclass(frozen=True, slots=True)
class CollectionChangedEventArgs:
    """Describes one change to an :class:`ObservableList`.

    Attributes
    ----------
    action : CollectionChangedAction
        What happened.
    new_items : tuple[object, ...]
        Items added or written.
    old_items : tuple[object, ...]
        Items removed or overwritten.
    index : int
        Position of the change, or ``-1`` for a reset.
    """

    action: CollectionChangedAction
    new_items: tuple[object, ...] = field(default=())
    old_items: tuple[object, ...] = field(default=())
    index: int = -1


class ObservableList[T](MutableSequence[T]):
    """Mutable sequence raising ``collection_changed`` after every mutation.

    Parameters
    ----------
    items : Iterable[T] | None, optional
        Initial contents. No event is raised for them.
    """

    collection_changed = Event()

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._items: list[T] = list(items) if items is not None else []

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    @overload
    def __setitem__(self, index: int, value: T) -> None: ...

    @overload
    def __setitem__(self, index: slice, value: Iterable[T]) -> None: ...

    def __setitem__(self, index: int | slice, value: T | Iterable[T]) -> None:
        if isinstance(index, slice):
            values = list(cast("Iterable[T]", value))
            old = tuple(self._items[index])
            start = index.indices(len(self._items))[0]
            self._items[index] = values
            self._raise(CollectionChangedAction.REPLACE, tuple(values), old, start)
            return
        position = self._normalize(index)
        item = cast("T", value)
        old_item = self._items[position]
        self._items[position] = item
        self._raise(CollectionChangedAction.REPLACE, (item,), (old_item,), position)

    def __delitem__(self, index: int | slice) -> None:
        if isinstance(index, slice):
            old = tuple(self._items[index])
            start = index.indices(len(self._items))[0]
            del self._items[index]
            if old:
                self._raise(CollectionChangedAction.REMOVE, (), old, start)
            return
        position = self._normalize(index)
        old_item = self._items.pop(position)
        self._raise(CollectionChangedAction.REMOVE, (), (old_item,), position)

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before ``index``."""
        size = len(self._items)
        position = max(0, min(size, index + size if index < 0 else index))
        self._items.insert(position, value)
        self._raise(CollectionChangedAction.ADD, (value,), (), position)

    def clear(self) -> None:
        """Remove every item, raising a single ``reset`` change."""
        self._items.clear()
        self._raise(CollectionChangedAction.RESET)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ObservableList({self._items!r})"

    def _normalize(self, index: int) -> int:
        size = len(self._items)
        position = index + size if index < 0 else index
        if not 0 <= position < size:
            msg = "ObservableList index out of range"
            raise IndexError(msg)
        return position

    def _raise(
        self,
        action: CollectionChangedAction,
        new_items: tuple[object, ...] = (),
        old_items: tuple[object, ...] = (),
        index: int = -1,
    ) -> None:
        self.collection_changed(
            self,
            CollectionChangedEventArgs(
                action=action, new_items=new_items, old_items=old_items, index=index
            ),
        )
