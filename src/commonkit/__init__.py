"""Overview of commonkit.

Small, stateless helpers over strings, iterables, sequences, enums,
callables, events and process start configuration, plus the logging,
error and settings layer they share. The two helpers with failure-handling
semantics, :func:`commonkit.actions.retry_if_exception` and
:func:`commonkit.iterables.try_for_each`, are re-exported here.
"""

from __future__ import annotations

from commonkit import (
    actions,
    arrays,
    enums,
    errors,
    events,
    guards,
    iterables,
    logging,
    objects,
    observable,
    operations,
    processes,
    settings,
    strings,
)
from commonkit.actions import ignore_if_exception, retry_if_exception
from commonkit.iterables import try_for_each

__all__ = [
    "actions",
    "arrays",
    "enums",
    "errors",
    "events",
    "guards",
    "ignore_if_exception",
    "iterables",
    "logging",
    "objects",
    "observable",
    "operations",
    "processes",
    "retry_if_exception",
    "settings",
    "strings",
    "try_for_each",
]
