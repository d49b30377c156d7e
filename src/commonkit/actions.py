"""Helpers for running zero-argument actions that may fail.

:func:`retry_if_exception` keeps re-running an action for as long as a
caller-supplied policy asks for it; :func:`ignore_if_exception` runs it once
and swallows any failure. In both cases the intercepted exception is reported
to an :class:`~commonkit.logging.ExceptionHook` (``handle_expected`` by default)
and is never re-raised.

Examples
--------
>>> from commonkit.actions import retry_if_exception
>>> attempts = []
>>> def flaky() -> None:
...     attempts.append(1)
...     if len(attempts) < 3:
...         raise ConnectionError("not yet")
>>> retry_if_exception(flaky, lambda exc: isinstance(exc, ConnectionError))
>>> len(attempts)
3
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tenacity import Retrying, retry_if_result, stop_never, wait_none

from commonkit.guards import require_callable
from commonkit.logging import ExceptionHook, get_logger, handle_expected

if TYPE_CHECKING:
    from tenacity import RetryCallState
    from tenacity.wait import wait_base

__all__ = [
    "Action",
    "RetryPolicy",
    "ignore_if_exception",
    "retry_if_exception",
]

logger = get_logger(__name__)

Action = Callable[[], object]
RetryPolicy = Callable[[Exception], bool]


def _log_before_retry(retry_state: RetryCallState) -> None:
    logger.debug(
        "Retrying action after attempt %d",
        retry_state.attempt_number,
        extra={"operation": "retry_if_exception", "status": "retrying"},
    )


def retry_if_exception(
    action: Action,
    retry_function: RetryPolicy,
    *,
    on_exception: ExceptionHook | None = None,
    wait: wait_base | None = None,
) -> None:
    """Run ``action`` until it succeeds or ``retry_function`` declines a retry.

    Each exception raised by ``action`` is passed to ``on_exception`` first and
    then to ``retry_function``. ``True`` runs the action again, ``False`` ends
    the loop and the function returns normally: the last exception is seen only
    by the hook and the policy. There is no built-in attempt limit; a policy
    that always answers ``True`` loops forever against a permanently failing
    action.

    Parameters
    ----------
    action : Callable[[], object]
        Work to run. Its return value is ignored.
    retry_function : Callable[[Exception], bool]
        Policy deciding whether to run the action again after a failure.
    on_exception : ExceptionHook | None, optional
        Observer called once per failure, before the policy. Defaults to
        :func:`commonkit.logging.handle_expected`.
    wait : tenacity.wait.wait_base | None, optional
        Tenacity wait strategy spacing the attempts. Defaults to no wait.

    Raises
    ------
    ArgumentNullError
        If ``action`` or ``retry_function`` is ``None``; raised before the
        action is ever invoked.

    Notes
    -----
    Only :class:`Exception` subclasses are intercepted. ``KeyboardInterrupt``
    and ``SystemExit`` propagate unchanged.
    """
    require_callable(action, "action")
    require_callable(retry_function, "retry_function")
    hook = on_exception if on_exception is not None else handle_expected

    def _attempt() -> Exception | None:
        try:
            action()
        except Exception as exc:
            hook(exc, "Retry if exception")
            return exc
        return None

    def _should_retry(failure: Exception | None) -> bool:
        return failure is not None and bool(retry_function(failure))

    retrying = Retrying(
        retry=retry_if_result(_should_retry),
        stop=stop_never,
        wait=wait if wait is not None else wait_none(),
        before_sleep=_log_before_retry,
        reraise=True,
    )
    retrying(_attempt)


def ignore_if_exception(action: Action, *, on_exception: ExceptionHook | None = None) -> None:
    """Run ``action`` once, reporting and swallowing any exception it raises.

    Raises
    ------
    ArgumentNullError
        If ``action`` is ``None``.
    """
    require_callable(action, "action")
    hook = on_exception if on_exception is not None else handle_expected
    try:
        action()
    except Exception as exc:
        hook(exc, "Ignore if exception")
