"""Process start configuration and execution.

:class:`ProcessStartInfo` describes a process to launch; :func:`as_admin`
marks it for elevation; :func:`run_process` runs it with a timeout, no shell,
and structured error reporting.

Examples
--------
>>> import sys
>>> info = ProcessStartInfo(file_name=sys.executable, arguments=["-c", "print('hello')"])
>>> run_process(info, timeout=10).strip()
'hello'
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from commonkit.guards import require
from commonkit.logging import get_logger
from commonkit.settings import CommonKitSettings, load_settings

__all__ = [
    "MAX_TIMEOUT",
    "MIN_TIMEOUT",
    "RUNAS_VERB",
    "ProcessStartInfo",
    "SubprocessError",
    "SubprocessTimeoutError",
    "as_admin",
    "build_command",
    "run_process",
]

logger = get_logger(__name__)

MIN_TIMEOUT: Final[int] = 1
MAX_TIMEOUT: Final[int] = 3600

RUNAS_VERB: Final[str] = "runas"


class ProcessStartInfo(BaseModel):
    """Values used when starting a process.

    Parameters
    ----------
    file_name : str
        Executable to run.
    arguments : list[str], optional
        Arguments passed literally, never shell-interpreted.
    working_directory : Path | None, optional
        Working directory; resolved to an absolute path when the process runs.
    environment : dict[str, str] | None, optional
        Full environment for the process. ``None`` inherits the parent's.
    verb : str | None, optional
        Action to take when starting the process; ``"runas"`` requests
        elevation.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    file_name: str = Field(min_length=1)
    arguments: list[str] = Field(default_factory=list)
    working_directory: Path | None = None
    environment: dict[str, str] | None = None
    verb: str | None = None

    @property
    def elevated(self) -> bool:
        """Whether the process is configured to run elevated."""
        return (self.verb or "").lower() == RUNAS_VERB


class SubprocessTimeoutError(TimeoutError):
    """Raised when a process exceeds its timeout.

    Parameters
    ----------
    message : str
        Error description.
    command : list[str] | None, optional
        The command that timed out.
    timeout_seconds : int | None, optional
        The timeout that was configured.
    """

    def __init__(
        self, message: str, command: list[str] | None = None, timeout_seconds: int | None = None
    ) -> None:
        super().__init__(message)
        self.command = command
        self.timeout_seconds = timeout_seconds


class SubprocessError(RuntimeError):
    """Raised when a process cannot be started or exits with a non-zero status.

    Parameters
    ----------
    message : str
        Error description.
    returncode : int | None, optional
        Exit code. Defaults to None.
    stderr : str | None, optional
        Captured stderr output. Defaults to None.
    """

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str | None = None
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def as_admin(info: ProcessStartInfo) -> ProcessStartInfo:
    """Mark ``info`` to run as administrator and return it.

    The same object is modified and returned so the call can be chained.

    >>> as_admin(ProcessStartInfo(file_name="setup")).verb
    'runas'
    """
    require(info, "info")
    info.verb = RUNAS_VERB
    return info


def build_command(
    info: ProcessStartInfo,
    *,
    settings: CommonKitSettings | None = None,
) -> list[str]:
    """Return the argv that :func:`run_process` executes for ``info``.

    On POSIX hosts an elevated ``info`` is prefixed with the configured
    elevation command (``sudo`` by default). Windows elevation is left to the
    platform's shell-execute verb handling, so no prefix is added there.
    """
    require(info, "info")
    command = [info.file_name, *info.arguments]
    if info.elevated and os.name == "posix":
        active = settings if settings is not None else load_settings()
        command = [*active.elevation_command, *command]
    return command


def run_process(
    info: ProcessStartInfo,
    *,
    timeout: int | None = None,
) -> str:
    """Run ``info`` to completion and return its stdout.

    Parameters
    ----------
    info : ProcessStartInfo
        Process to run.
    timeout : int | None, optional
        Maximum execution time in seconds. Defaults to
        ``CommonKitSettings.process_timeout``. Must be between MIN_TIMEOUT and
        MAX_TIMEOUT.

    Returns
    -------
    str
        Captured stdout.

    Raises
    ------
    SubprocessTimeoutError
        If the process exceeds the timeout.
    SubprocessError
        If the process cannot be started or exits with non-zero status.
    ValueError
        If the timeout is out of range.
    """
    require(info, "info")
    if timeout is None:
        timeout = load_settings().process_timeout
    if not MIN_TIMEOUT <= timeout <= MAX_TIMEOUT:
        msg = f"Timeout must be between {MIN_TIMEOUT} and {MAX_TIMEOUT}, got {timeout}"
        raise ValueError(msg)

    cwd = info.working_directory.resolve() if info.working_directory is not None else None
    cmd = build_command(info)
    rendered = " ".join(cmd)
    logger.debug(
        "Executing process",
        extra={
            "operation": "run_process",
            "command": rendered,
            "timeout": timeout,
            "cwd": str(cwd) if cwd else None,
        },
    )

    try:
        completed = subprocess.run(  # noqa: S603 - arguments are never shell-interpreted
            cmd,
            cwd=cwd,
            env=dict(info.environment) if info.environment is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        msg = f"Subprocess exceeded timeout of {timeout} seconds: {rendered}"
        logger.exception(msg, extra={"operation": "run_process", "command": rendered})
        raise SubprocessTimeoutError(msg, command=cmd, timeout_seconds=timeout) from exc
    except OSError as exc:
        msg = f"Unable to start process: {rendered}"
        logger.exception(msg, extra={"operation": "run_process", "command": rendered})
        raise SubprocessError(msg) from exc

    if completed.returncode != 0:
        stderr_output = completed.stderr or None
        msg = f"Subprocess failed with exit code {completed.returncode}: {rendered}"
        logger.error(
            msg,
            extra={
                "operation": "run_process",
                "command": rendered,
                "returncode": completed.returncode,
                "stderr": stderr_output,
            },
        )
        raise SubprocessError(msg, returncode=completed.returncode, stderr=stderr_output)

    logger.debug(
        "Process completed successfully",
        extra={"operation": "run_process", "returncode": completed.returncode},
    )
    return completed.stdout
