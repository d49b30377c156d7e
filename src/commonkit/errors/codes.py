"""Error code registry for commonkit exceptions.

Codes are stable kebab-case strings so they can be matched in logs and
serialized error payloads without depending on exception class names.

Examples
--------
>>> from commonkit.errors.codes import ErrorCode
>>> code = ErrorCode.ARGUMENT_NULL
>>> assert code == "argument-null"
"""

from __future__ import annotations

from enum import StrEnum

__all__ = ["ErrorCode"]


class ErrorCode(StrEnum):
    """Stable error codes for commonkit exceptions.

    Error codes are organized by category:
    - Argument validation
    - Type conversion
    - Configuration & runtime

    Examples
    --------
    >>> code = ErrorCode.INVALID_CAST
    >>> assert code == "invalid-cast"
    >>> assert isinstance(code, ErrorCode)
    """

    # Argument validation
    INVALID_ARGUMENT = "invalid-argument"
    ARGUMENT_NULL = "argument-null"

    # Type conversion
    INVALID_CAST = "invalid-cast"

    # Configuration & runtime
    CONFIGURATION_ERROR = "configuration-error"
    RUNTIME_ERROR = "runtime-error"

    def __str__(self) -> str:
        """Return the code value as a string.

        Returns
        -------
        str
            The error code value (e.g., "argument-null").
        """
        return self.value
