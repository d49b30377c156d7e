"""Exception hierarchy for commonkit.

Examples
--------
>>> from commonkit.errors import CommonKitError, ErrorCode
>>> try:
...     raise CommonKitError("Operation failed", code=ErrorCode.RUNTIME_ERROR)
... except CommonKitError as e:
...     assert e.to_dict()["code"] == "runtime-error"
"""

from __future__ import annotations

from commonkit.errors.codes import ErrorCode
from commonkit.errors.exceptions import (
    ArgumentNullError,
    CommonKitError,
    InvalidArgumentError,
    InvalidCastError,
    SettingsError,
)

__all__ = [
    "ArgumentNullError",
    "CommonKitError",
    "ErrorCode",
    "InvalidArgumentError",
    "InvalidCastError",
    "SettingsError",
]
