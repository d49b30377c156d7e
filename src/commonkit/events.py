"""Multicast events and reflection-style handler wiring.

An :class:`Event` is a class-level descriptor. Each instance of the owning
class gets its own :class:`EventHandlers` list, which is invoked with
``(sender, args)``:

>>> class Downloader:
...     status_updated = Event()
...     def report(self, value: int) -> None:
...         self.status_updated(self, value)
>>> seen = []
>>> downloader = Downloader()
>>> downloader.status_updated += lambda sender, value: seen.append(value)
>>> downloader.report(3)
>>> seen
[3]

:func:`add_event_handler` and :func:`remove_event_handler` do the same wiring
when the event is only known by its descriptor or its attribute name.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol, Self, overload

from commonkit.errors import InvalidArgumentError
from commonkit.guards import require, require_callable

if TYPE_CHECKING:
    from commonkit.operations import OperationProgressEventArgs

__all__ = [
    "Event",
    "EventHandler",
    "EventHandlers",
    "StatusUpdateHandler",
    "add_event_handler",
    "get_event",
    "remove_event_handler",
]

EventHandler = Callable[[object, Any], object]


class StatusUpdateHandler(Protocol):
    """Handler invoked when the status of an operation is updated."""

    def __call__(self, sender: object, event: OperationProgressEventArgs) -> object:
        """Receive a progress update from ``sender``."""
        ...


class EventHandlers:
    """Ordered list of handlers attached to one event of one object.

    Parameters
    ----------
    name : str
        Name of the event, used in error messages and ``repr``.
    """

    __slots__ = ("_handlers", "name")

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[EventHandler] = []

    def add(self, handler: EventHandler) -> None:
        """Attach ``handler``. The same handler may be attached more than once."""
        self._handlers.append(require_callable(handler, "handler"))

    def remove(self, handler: EventHandler) -> None:
        """Detach the most recently attached occurrence of ``handler``.

        Removing a handler that is not attached does nothing.
        """
        require(handler, "handler")
        for index in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[index] == handler:
                del self._handlers[index]
                return

    def clear(self) -> None:
        """Detach every handler."""
        self._handlers.clear()

    def __iadd__(self, handler: EventHandler) -> Self:
        self.add(handler)
        return self

    def __isub__(self, handler: EventHandler) -> Self:
        self.remove(handler)
        return self

    def __call__(self, sender: object, args: object = None) -> None:
        # Snapshot so handlers may detach themselves while the event is raised.
        for handler in tuple(self._handlers):
            handler(sender, args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[EventHandler]:
        return iter(tuple(self._handlers))

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __repr__(self) -> str:
        return f"<EventHandlers {self.name!r} ({len(self._handlers)} handler(s))>"


class Event:
    """Descriptor declaring an event on a class.

    Reading the attribute from an instance returns that instance's
    :class:`EventHandlers`; reading it from the class returns the descriptor.
    Assigning anything other than the instance's own handler list is refused,
    which still permits ``obj.event += handler``.
    """

    def __init__(self) -> None:
        self.name = ""
        self._storage_name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._storage_name = f"_event_{name}"

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> Self: ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> EventHandlers: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> Self | EventHandlers:
        if instance is None:
            return self
        return self.handlers_for(instance)

    def __set__(self, instance: object, value: object) -> None:
        if value is not self.handlers_for(instance):
            msg = f"Event '{self.name}' can only be modified with += and -="
            raise AttributeError(msg)

    def handlers_for(self, target: object) -> EventHandlers:
        """Return the handler list of ``target``, creating it on first use."""
        state = vars(target)
        handlers = state.get(self._storage_name)
        if handlers is None:
            handlers = EventHandlers(self.name)
            state[self._storage_name] = handlers
        return handlers


def get_event(owner: type | object, name: str) -> Event:
    """Look up the :class:`Event` descriptor called ``name``.

    Parameters
    ----------
    owner : type | object
        Class declaring the event, or an instance of it.
    name : str
        Attribute name of the event.

    Returns
    -------
    Event
        The descriptor.

    Raises
    ------
    InvalidArgumentError
        If ``owner`` has no event with that name.
    """
    require(owner, "owner")
    require(name, "name")
    cls = owner if isinstance(owner, type) else type(owner)
    attribute = inspect.getattr_static(cls, name, None)
    if not isinstance(attribute, Event):
        msg = f"'{cls.__name__}' has no event named '{name}'"
        raise InvalidArgumentError(msg, argument="name")
    return attribute


def _resolve(event: Event | str, target: object) -> EventHandlers:
    require(event, "event")
    require(target, "target")
    descriptor = get_event(target, event) if isinstance(event, str) else event
    if not isinstance(descriptor, Event):
        msg = f"Expected an Event or event name, got {type(event).__name__}"
        raise InvalidArgumentError(msg, argument="event")
    return descriptor.handlers_for(target)


def add_event_handler(event: Event | str, target: object, handler: EventHandler) -> None:
    """Attach ``handler`` to ``event`` on ``target``.

    Parameters
    ----------
    event : Event | str
        The event descriptor or its attribute name.
    target : object
        The event source.
    handler : Callable[[object, Any], object]
        Handler invoked with ``(sender, args)`` when the event is raised.

    Raises
    ------
    ArgumentNullError
        If any argument is ``None``.
    InvalidArgumentError
        If the event cannot be resolved or the handler is not callable.
    """
    _resolve(event, target).add(handler)


def remove_event_handler(event: Event | str, target: object, handler: EventHandler) -> None:
    """Detach ``handler`` from ``event`` on ``target``; unknown handlers are ignored.

    Raises
    ------
    ArgumentNullError
        If any argument is ``None``.
    InvalidArgumentError
        If the event cannot be resolved.
    """
    _resolve(event, target).remove(handler)
