"""Runtime settings with typed configuration and fail-fast validation.

Settings are read from ``COMMONKIT_*`` environment variables through
pydantic-settings. Validation failures surface as
:class:`commonkit.errors.SettingsError`.

Examples
--------
>>> from commonkit.settings import load_settings
>>> settings = load_settings()
>>> settings.expected_exception_level
'DEBUG'
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Final

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from commonkit.errors import SettingsError
from commonkit.logging import get_logger

__all__ = [
    "CommonKitSettings",
    "load_settings",
    "reset_settings_cache",
]

logger = get_logger(__name__)

_LEVEL_NAMES: Final[frozenset[str]] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
)


class CommonKitSettings(BaseSettings):
    """Library configuration (``COMMONKIT_*`` namespace)."""

    model_config = SettingsConfigDict(
        env_prefix="COMMONKIT_",
        extra="forbid",
        case_sensitive=False,
    )

    log_level: str = Field(
        default="INFO", description="Level used by setup_logging (DEBUG, INFO, WARNING, ERROR)"
    )
    expected_exception_level: str = Field(
        default="DEBUG",
        description="Level at which intercepted, expected exceptions are logged",
    )
    process_timeout: int = Field(
        default=300, ge=1, le=3600, description="Default run_process timeout in seconds"
    )
    elevation_command: list[str] = Field(
        default_factory=lambda: ["sudo"],
        description="Command prefix used for 'runas' processes on POSIX hosts",
    )

    @field_validator("log_level", "expected_exception_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LEVEL_NAMES:
            msg = f"Unknown logging level: {value!r}"
            raise ValueError(msg)
        return normalized

    @property
    def log_level_number(self) -> int:
        """Return ``log_level`` as a numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]


def _build_settings(**overrides: object) -> CommonKitSettings:
    try:
        return CommonKitSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        logger.exception(
            "Settings validation failed",
            extra={"operation": "load_settings", "error_type": type(exc).__name__},
        )
        errors = [
            {"field": ".".join(str(part) for part in error["loc"]), "issue": error["msg"]}
            for error in exc.errors()
        ]
        msg = f"Configuration validation failed: {exc.error_count()} error(s)"
        raise SettingsError(msg, errors=errors, cause=exc) from exc


@lru_cache(maxsize=1)
def _cached_settings() -> CommonKitSettings:
    return _build_settings()


def load_settings(**overrides: object) -> CommonKitSettings:
    """Load :class:`CommonKitSettings`.

    Without overrides the environment is read once and the result cached;
    with overrides a fresh, uncached instance is returned.

    Parameters
    ----------
    **overrides : object
        Field values taking precedence over the environment.

    Returns
    -------
    CommonKitSettings
        Validated settings.

    Raises
    ------
    SettingsError
        If validation fails.
    """
    if overrides:
        return _build_settings(**overrides)
    return _cached_settings()


def reset_settings_cache() -> None:
    """Forget cached settings so the next :func:`load_settings` re-reads the environment."""
    _cached_settings.cache_clear()
