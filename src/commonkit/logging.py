"""Structured logging helpers with correlation IDs and the expected-exception hook.

This module provides a LoggerAdapter that injects structured fields
(correlation_id, operation, status) into every record, module-level loggers
with NullHandler so the library never configures handlers on its own, and
:func:`handle_expected`, the observer called whenever a commonkit utility
intercepts an exception it is not going to re-raise.

Examples
--------
>>> from commonkit.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Operation started", extra={"operation": "retry", "status": "started"})
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from contextlib import AbstractContextManager
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Protocol, Self, cast, runtime_checkable

from commonkit.errors import SettingsError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CorrelationContext",
    "ExceptionHook",
    "JsonFormatter",
    "LogContextExtra",
    "LoggerAdapter",
    "get_correlation_id",
    "get_logger",
    "handle_expected",
    "set_correlation_id",
    "setup_logging",
    "with_fields",
]


@dataclass(frozen=True, slots=True)
class LogContextExtra:
    """Immutable logging context with optional structured fields.

    Use the ``with_*`` methods to derive updated copies.

    Attributes
    ----------
    correlation_id : str | None
        Request or correlation ID for tracing.
    operation : str | None
        Name of the operation being logged (e.g., "retry_if_exception").
    status : str | None
        Operation status ("success", "error", "expected_error", ...).
    duration_ms : float | None
        Operation duration in milliseconds.

    Examples
    --------
    >>> ctx = LogContextExtra(operation="try_for_each")
    >>> ctx.with_status("success").status
    'success'
    >>> ctx.status is None
    True
    """

    correlation_id: str | None = None
    operation: str | None = None
    status: str | None = None
    duration_ms: float | None = None

    def with_operation(self, operation: str) -> Self:
        """Return copy with updated operation."""
        return replace(self, operation=operation)

    def with_status(self, status: str) -> Self:
        """Return copy with updated status."""
        return replace(self, status=status)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values for logging.

        Returns
        -------
        dict[str, Any]
            Dictionary with non-None fields only.
        """
        return {
            k: v
            for k, v in {
                "correlation_id": self.correlation_id,
                "operation": self.operation,
                "status": self.status,
                "duration_ms": self.duration_ms,
            }.items()
            if v is not None
        }


# Async-safe correlation ID propagation
_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

_STANDARD_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as one JSON object with timestamp, level, name,
    message, and any JSON-friendly extra fields. The correlation_id is taken
    from contextvars when the record does not carry one.

    Examples
    --------
    >>> import logging
    >>> handler = logging.StreamHandler()
    >>> handler.setFormatter(JsonFormatter())
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format.

        Returns
        -------
        str
            JSON-encoded log entry.
        """
        data: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "correlation_id", None) is None:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                data["correlation_id"] = ctx_correlation_id

        for key, value in record.__dict__.items():
            if (
                key not in _STANDARD_RECORD_ATTRIBUTES
                and key not in data
                and not key.startswith("_")
                and value is not None
                and isinstance(value, (str, int, float, bool, list, dict))
            ):
                data[key] = value

        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


class LoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that injects structured context fields.

    Every record gets ``operation`` and ``status`` (inferred from the level
    when missing) and the correlation_id from contextvars when one is set.

    Parameters
    ----------
    logger : logging.Logger
        Base logger instance to wrap.
    extra : LogContextExtra | Mapping[str, object] | None, optional
        Structured fields to inject into log entries.

    Examples
    --------
    >>> from commonkit.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Retry started", extra={"operation": "retry", "status": "started"})
    """

    logger: logging.Logger

    def _merge_extra(self, kwargs: dict[str, Any], level: int) -> dict[str, Any]:
        extra = kwargs.get("extra")
        merged: dict[str, Any] = dict(extra) if isinstance(extra, dict) else {}

        if isinstance(self.extra, LogContextExtra):
            bound: Mapping[str, object] = self.extra.to_dict()
        elif isinstance(self.extra, dict):
            bound = self.extra
        else:
            bound = {}
        for key, value in bound.items():
            merged.setdefault(key, value)

        if "correlation_id" not in merged:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                merged["correlation_id"] = ctx_correlation_id

        merged.setdefault("operation", "unknown")
        if "status" not in merged:
            if level >= logging.ERROR:
                merged["status"] = "error"
            elif level >= logging.WARNING:
                merged["status"] = "warning"
            else:
                merged["status"] = "success"
        return merged

    def log(self, level: int, msg: object, *args: object, **kwargs: object) -> None:
        """Log a message at the given level with structured fields."""
        if not self.logger.isEnabledFor(level):
            return
        kwargs_dict = cast("dict[str, Any]", kwargs)
        kwargs_dict["extra"] = self._merge_extra(kwargs_dict, level)
        kwargs_dict.setdefault("stacklevel", 2)
        self.logger.log(level, msg, *args, **kwargs_dict)

    def debug(self, msg: object, *args: object, **kwargs: object) -> None:
        """Log a debug message with structured fields."""
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: object, *args: object, **kwargs: object) -> None:
        """Log an info message with structured fields."""
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: object, *args: object, **kwargs: object) -> None:
        """Log a warning message with structured fields."""
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: object, *args: object, **kwargs: object) -> None:
        """Log an error message with structured fields."""
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self,
        msg: object,
        *args: object,
        exc_info: object = True,
        **kwargs: object,
    ) -> None:
        """Log an error with traceback using structured fields."""
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg: object, *args: object, **kwargs: object) -> None:
        """Log a critical message with structured fields."""
        self.log(logging.CRITICAL, msg, *args, **kwargs)

    def log_failure(
        self,
        message: str,
        *,
        exception: BaseException | None = None,
        operation: str | None = None,
        level: int = logging.ERROR,
        **fields: object,
    ) -> None:
        """Log a failure with structured fields describing the exception.

        Parameters
        ----------
        message : str
            Failure message.
        exception : BaseException | None, optional
            Exception that caused the failure. Defaults to ``None``.
        operation : str | None, optional
            Operation name. Defaults to ``None``.
        level : int, optional
            Level to log at. Defaults to ``logging.ERROR``.
        **fields : object
            Additional structured fields.
        """
        extra: dict[str, object] = {"status": "error"}
        if operation is not None:
            extra["operation"] = operation
        if exception is not None:
            extra["error_type"] = exception.__class__.__name__
            extra["error_detail"] = str(exception)
        extra.update(fields)
        self.log(level, message, extra=extra, stacklevel=3)


def get_logger(name: str) -> LoggerAdapter:
    """Get a logger adapter with structured logging support.

    Module-level loggers use NullHandler to prevent duplicate handlers in
    libraries. Applications configure handlers via :func:`setup_logging`.

    Parameters
    ----------
    name : str
        Logger name (typically __name__ from the calling module).

    Returns
    -------
    LoggerAdapter
        Logger adapter with structured context injection.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return LoggerAdapter(logger, {})


def setup_logging(level: int | str | None = None) -> None:
    """Configure the root logger with a JSON formatter on stdout.

    Parameters
    ----------
    level : int | str | None, optional
        Logging level threshold, as a number or a level name.
        Defaults to ``CommonKitSettings.log_level`` (``COMMONKIT_LOG_LEVEL``).

    Raises
    ------
    SettingsError
        If ``level`` is omitted and the settings fail validation.
    """
    if level is None:
        from commonkit.settings import load_settings  # noqa: PLC0415 - settings imports this module

        level = load_settings().log_level_number
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID in context for async propagation."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context.

    Returns
    -------
    str | None
        Current correlation ID, or None if not set.
    """
    return _correlation_id.get()


class CorrelationContext:
    """Context manager that sets a correlation ID and restores the previous one.

    Parameters
    ----------
    correlation_id : str | None
        Correlation ID to set in context.

    Examples
    --------
    >>> with CorrelationContext(correlation_id="req-123"):
    ...     assert get_correlation_id() == "req-123"
    """

    def __init__(self, correlation_id: str | None) -> None:
        self.correlation_id = correlation_id
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> Self:
        self._token = _correlation_id.set(self.correlation_id)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


class _WithFieldsContext(AbstractContextManager[LoggerAdapter]):
    def __init__(
        self, logger: logging.Logger | LoggerAdapter, fields: Mapping[str, object]
    ) -> None:
        self._logger = logger
        self._fields = dict(fields)
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> LoggerAdapter:
        base_logger = (
            self._logger.logger if isinstance(self._logger, LoggerAdapter) else self._logger
        )
        correlation_id = self._fields.get("correlation_id")
        if isinstance(correlation_id, str):
            self._token = _correlation_id.set(correlation_id)
        return LoggerAdapter(base_logger, dict(self._fields))

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


def with_fields(
    logger: logging.Logger | LoggerAdapter,
    **fields: object,
) -> AbstractContextManager[LoggerAdapter]:
    """Context manager for attaching structured fields to log entries.

    Parameters
    ----------
    logger : logging.Logger | LoggerAdapter
        Base logger to wrap (may already be an adapter).
    **fields : object
        Structured fields injected into every log call within the context.
        A ``correlation_id`` field is also placed in contextvars.

    Returns
    -------
    AbstractContextManager[LoggerAdapter]
        Context manager yielding a LoggerAdapter with bound fields.

    Examples
    --------
    >>> logger = get_logger(__name__)
    >>> with with_fields(logger, operation="try_for_each") as ctx_logger:
    ...     ctx_logger.info("Starting enumeration")
    """
    return _WithFieldsContext(logger, fields)


@runtime_checkable
class ExceptionHook(Protocol):
    """Observer called once for every exception a utility intercepts.

    Implementations must not alter control flow: they log, count, or record
    the exception and return.
    """

    def __call__(self, exc: BaseException, message: str | None = None) -> None:
        """Observe an intercepted exception."""
        ...


_logger = get_logger(__name__)


def handle_expected(
    exc: BaseException,
    message: str | None = None,
    *,
    logger: logging.Logger | LoggerAdapter | None = None,
) -> None:
    """Log an exception that was caught on purpose and will not be re-raised.

    This is the default :class:`ExceptionHook` for
    :func:`commonkit.actions.retry_if_exception`,
    :func:`commonkit.actions.ignore_if_exception` and
    :func:`commonkit.iterables.try_for_each`. The level comes from
    ``CommonKitSettings.expected_exception_level`` (``DEBUG`` unless configured).

    Parameters
    ----------
    exc : BaseException
        The intercepted exception.
    message : str | None, optional
        Short description of where the exception was intercepted.
    logger : logging.Logger | LoggerAdapter | None, optional
        Logger to write to. Defaults to this module's logger.
    """
    from commonkit.settings import load_settings  # noqa: PLC0415 - settings imports this module

    target = _logger
    if isinstance(logger, LoggerAdapter):
        target = logger
    elif isinstance(logger, logging.Logger):
        target = LoggerAdapter(logger, {})

    try:
        level = logging.getLevelName(load_settings().expected_exception_level)
    except SettingsError:
        level = logging.DEBUG
    if not isinstance(level, int):
        level = logging.DEBUG
    target.log_failure(
        message or "Expected exception handled",
        exception=exc,
        operation="handle_expected",
        level=level,
        status="expected_error",
    )
