"""Typed exception hierarchy for commonkit.

All commonkit exceptions inherit from CommonKitError, which carries a stable
error code, a context mapping, and optional cause chaining.

Examples
--------
>>> from commonkit.errors import ArgumentNullError, ErrorCode
>>> try:
...     raise ArgumentNullError("action")
... except ArgumentNullError as e:
...     assert e.code == ErrorCode.ARGUMENT_NULL
...     assert e.argument == "action"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from commonkit.errors.codes import ErrorCode

__all__ = [
    "ArgumentNullError",
    "CommonKitError",
    "InvalidArgumentError",
    "InvalidCastError",
    "SettingsError",
]


class CommonKitError(Exception):
    """Base exception for all commonkit errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode, optional
        Stable error code. Defaults to ``ErrorCode.RUNTIME_ERROR``.
    log_level : int, optional
        Level callers should use when logging the error. Defaults to ERROR.
    cause : BaseException | None, optional
        Underlying exception, attached as ``__cause__``. Defaults to None.
    context : Mapping[str, object] | None, optional
        Additional structured details. Defaults to None.

    Attributes
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode
        Error code enum value.
    log_level : int
        Logging level for error logging.
    context : dict[str, object]
        Additional context dictionary for error details.

    Examples
    --------
    >>> error = CommonKitError("Operation failed")
    >>> str(error)
    'CommonKitError[runtime-error]: Operation failed'
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.RUNTIME_ERROR,
        log_level: int = logging.ERROR,
        cause: BaseException | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        if not isinstance(code, ErrorCode):
            message = "code must be an instance of ErrorCode"
            raise TypeError(message)
        if context is not None and not isinstance(context, Mapping):
            message = "context must be a mapping when provided"
            raise TypeError(message)
        self.message = str(self.args[0])
        self.code = code
        self.log_level = log_level
        self.context = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of the error.

        Returns
        -------
        dict[str, object]
            Mapping with ``type``, ``code``, ``detail`` and, when present,
            ``context`` keys.
        """
        payload: dict[str, object] = {
            "type": self.__class__.__name__,
            "code": self.code.value,
            "detail": self.message,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload

    def __str__(self) -> str:
        """Return formatted error string.

        Returns
        -------
        str
            Formatted error string (e.g., "InvalidCastError[invalid-cast]: ...").
        """
        base = f"{self.__class__.__name__}[{self.code.value}]: {self.message}"
        if self.__cause__:
            base += f" (caused by: {type(self.__cause__).__name__})"
        return base


class InvalidArgumentError(CommonKitError, ValueError):
    """Error raised when an argument has an unusable value.

    Also a :class:`ValueError`, so callers that do not know about commonkit can
    still catch it the usual way.

    Parameters
    ----------
    message : str
        Human-readable error message.
    argument : str | None, optional
        Name of the offending argument. Defaults to None.
    code : ErrorCode, optional
        Error code. Defaults to ``ErrorCode.INVALID_ARGUMENT``.

    Examples
    --------
    >>> error = InvalidArgumentError("The string to find may not be empty", argument="value")
    >>> isinstance(error, ValueError)
    True
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    ) -> None:
        context = {"argument": argument} if argument is not None else None
        super().__init__(message, code=code, context=context)
        self.argument = argument


class ArgumentNullError(InvalidArgumentError):
    """Error raised when a required argument is ``None``.

    Parameters
    ----------
    argument : str
        Name of the missing argument.

    Examples
    --------
    >>> str(ArgumentNullError("handler"))
    "ArgumentNullError[argument-null]: Argument 'handler' must not be None"
    """

    def __init__(self, argument: str) -> None:
        super().__init__(
            f"Argument '{argument}' must not be None",
            argument=argument,
            code=ErrorCode.ARGUMENT_NULL,
        )


class InvalidCastError(CommonKitError, TypeError):
    """Error raised when an object cannot be treated as the requested type.

    Parameters
    ----------
    item : object
        The object that failed the check.
    target_type : type
        The type that was requested.
    """

    def __init__(self, item: object, target_type: type) -> None:
        source_name = type(item).__name__
        super().__init__(
            f"Unable to cast object of type '{source_name}' to type '{target_type.__name__}'",
            code=ErrorCode.INVALID_CAST,
            context={"source_type": source_name, "target_type": target_type.__name__},
        )
        self.item = item
        self.target_type = target_type


class SettingsError(CommonKitError):
    """Error raised when runtime settings validation fails.

    Parameters
    ----------
    message : str
        Human-readable error message describing the settings validation failure.
    errors : list[dict[str, object]] | None, optional
        List of validation error dictionaries with field/issue details.
        Defaults to None.
    cause : Exception | None, optional
        Underlying exception that caused the validation failure. Defaults to None.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, object]] | None = None,
        cause: Exception | None = None,
    ) -> None:
        context: dict[str, object] = {}
        if errors:
            context["validation_errors"] = [dict(error) for error in errors]
        super().__init__(
            message,
            code=ErrorCode.CONFIGURATION_ERROR,
            log_level=logging.CRITICAL,
            cause=cause,
            context=context,
        )
