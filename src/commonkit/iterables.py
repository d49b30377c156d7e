"""Helpers for iterables and sequences.

The centrepiece is :func:`try_for_each`, which walks an iterable while
intercepting the errors raised by the source itself:

>>> def handler(exc: Exception) -> bool:
...     return True
>>> list(try_for_each([1, 2, 3], handler))
[1, 2, 3]

All helpers validate their required arguments eagerly and raise
:class:`commonkit.errors.ArgumentNullError` for a missing one, including the
generator-returning helpers, which check before the first element is requested.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Protocol

from commonkit.guards import require, require_callable, require_iterable
from commonkit.logging import ExceptionHook, get_logger, handle_expected

if TYPE_CHECKING:
    from commonkit.observable import ObservableList

__all__ = [
    "ContinuationHandler",
    "any_items",
    "close_all",
    "find_item",
    "find_item_index",
    "find_item_of_type",
    "for_each",
    "intersperse",
    "join_items",
    "to_observable_list",
    "try_for_each",
]

logger = get_logger(__name__)

ContinuationHandler = Callable[[Exception], bool]


class _Closeable(Protocol):
    def close(self) -> object: ...


def for_each[T](iterable: Iterable[T], action: Callable[[T], object]) -> None:
    """Call ``action`` on each element of ``iterable``."""
    require_iterable(iterable, "iterable")
    require_callable(action, "action")
    for item in iterable:
        action(item)


def join_items[T](
    iterable: Iterable[T],
    separator: str,
    formatter: Callable[[T], str] | None = None,
) -> str:
    """Concatenate the elements of ``iterable`` with ``separator`` between them.

    Parameters
    ----------
    iterable : Iterable[T]
        Elements to join.
    separator : str
        String placed between consecutive elements.
    formatter : Callable[[T], str] | None, optional
        Converts each element to a string. Defaults to :class:`str`.

    Returns
    -------
    str
        The joined string; empty when ``iterable`` is empty. ``None`` elements
        render as empty strings.
    """
    require_iterable(iterable, "iterable")
    require(separator, "separator")
    convert: Callable[[T], str] = formatter if formatter is not None else str
    return separator.join("" if item is None else convert(item) for item in iterable)


def find_item[T](iterable: Iterable[T], match: Callable[[T], bool]) -> T | None:
    """Return the first element satisfying ``match``, or ``None``."""
    require_iterable(iterable, "iterable")
    require_callable(match, "match")
    for item in iterable:
        if match(item):
            return item
    return None


def find_item_index[T](sequence: Sequence[T], match: Callable[[T], bool]) -> int:
    """Return the index of the first element satisfying ``match``, or ``-1``."""
    require(sequence, "sequence")
    require_callable(match, "match")
    for index, item in enumerate(sequence):
        if match(item):
            return index
    return -1


def find_item_of_type[T](iterable: Iterable[object], item_type: type[T]) -> T | None:
    """Return the first element whose exact type is ``item_type``.

    Subclass instances do not match; use :func:`find_item` with
    ``isinstance`` for that.
    """
    require_iterable(iterable, "iterable")
    require(item_type, "item_type")
    for item in iterable:
        if type(item) is item_type:
            return item  # type: ignore[return-value]
    return None


def intersperse[T](sequence: Iterable[T], element: T) -> Iterator[T]:
    """Yield the items of ``sequence`` with ``element`` between each pair.

    >>> list(intersperse(["a", "b", "c"], "-"))
    ['a', '-', 'b', '-', 'c']
    """
    require_iterable(sequence, "sequence")
    require(element, "element")
    return _intersperse(sequence, element)


def _intersperse[T](sequence: Iterable[T], element: T) -> Iterator[T]:
    first = True
    for value in sequence:
        if not first:
            yield element
        yield value
        first = False


def any_items(iterable: Iterable[object]) -> bool:
    """Return ``True`` if ``iterable`` produces at least one element."""
    require_iterable(iterable, "iterable")
    for _ in iterable:
        return True
    return False


def close_all(closeables: Iterable[_Closeable | None] | None) -> None:
    """Call ``close()`` on every non-``None`` element; ``None`` is a no-op."""
    if closeables is None:
        return
    for item in closeables:
        if item is not None:
            item.close()


def to_observable_list[T](iterable: Iterable[T]) -> ObservableList[T]:
    """Return ``iterable`` itself if it is an ObservableList, else a new one."""
    from commonkit.observable import ObservableList  # noqa: PLC0415 - observable imports events

    require_iterable(iterable, "iterable")
    if isinstance(iterable, ObservableList):
        return iterable
    return ObservableList(iterable)


def try_for_each[T](
    sequence: Iterable[T],
    handler: ContinuationHandler,
    *,
    on_exception: ExceptionHook | None = None,
) -> Iterator[T]:
    """Iterate ``sequence`` while intercepting errors raised by the source.

    Any :class:`Exception` raised while advancing the source is passed to
    ``on_exception`` and then to ``handler``. ``True`` skips the failed step
    and advances again; ``False`` ends the output quietly. The failed element
    is never yielded and nothing is raised to the consumer.

    The source iterator is created when consumption of the output starts and
    is closed (when it has a ``close`` method) exactly once, whether the output
    is exhausted, stopped by the handler, or abandoned and closed by the
    consumer.

    Parameters
    ----------
    sequence : Iterable[T]
        Source to iterate.
    handler : Callable[[Exception], bool]
        Decides whether iteration continues after a failure.
    on_exception : ExceptionHook | None, optional
        Observer called once per failure, before ``handler``. Defaults to
        :func:`commonkit.logging.handle_expected`.

    Returns
    -------
    Iterator[T]
        A generator over the elements the source produced successfully.

    Raises
    ------
    ArgumentNullError
        Immediately, if ``sequence`` or ``handler`` is ``None``.

    Notes
    -----
    Errors raised by the consumer's own code between two elements are not
    intercepted. A Python generator cannot resume after raising, so skipping
    only helps sources whose ``__next__`` can be called again after a failure.
    """
    require_iterable(sequence, "sequence")
    require_callable(handler, "handler")
    hook = on_exception if on_exception is not None else handle_expected
    return _try_for_each(sequence, handler, hook)


def _try_for_each[T](
    sequence: Iterable[T],
    handler: ContinuationHandler,
    hook: ExceptionHook,
) -> Iterator[T]:
    iterator = iter(sequence)
    try:
        while True:
            try:
                item = next(iterator)
            except StopIteration:
                return
            except Exception as exc:
                hook(exc, "Try for each enumeration exception")
                if not handler(exc):
                    logger.debug(
                        "Enumeration stopped by handler",
                        extra={"operation": "try_for_each", "status": "stopped"},
                    )
                    return
                continue
            yield item
    finally:
        close = getattr(iterator, "close", None)
        if callable(close):
            close()
