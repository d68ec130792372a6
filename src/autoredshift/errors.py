"""Exception classes for auto-redshift.

This module defines the hierarchy of errors raised while loading the
configuration, parsing the wake time and talking to the external
display/wallpaper services.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional


class AutoRedshiftError(Exception):
    """Base class for all auto-redshift errors."""


class ConfigLoadError(AutoRedshiftError):
    """Raised when the config file is missing, unparsable or invalid."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            path: Config file that failed to load, if known
        """
        super().__init__(message)
        self.message: str = message
        self.path: Optional[str] = path


class WaketimeParseError(AutoRedshiftError, ValueError):
    """Raised when a wake time is not a valid "HH:MM" string."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(
            f'Invalid waketime {value!r}: {reason}. Expected the format "HH:MM"'
        )
        self.value = value
        self.reason = reason


class ExternalCommandError(AutoRedshiftError):
    """Error while running an external program (gdbus, swaymsg, ...).

    Includes the command line and whatever the program wrote to stderr
    when available.
    """

    def __init__(
        self,
        command: Sequence[str],
        message: str,
        stderr: str = "",
        original_error: Optional[Exception] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            command: The argv that was executed
            message: Human-readable error message
            stderr: Captured standard error of the process
            original_error: The original exception that was caught
        """
        super().__init__(f"{command[0] if command else '?'}: {message}")
        self.command: list[str] = list(command)
        self.message: str = message
        self.stderr: str = stderr
        self.original_error = original_error

    @property
    def command_line(self) -> str:
        """The failed command as a single printable string."""
        return " ".join(self.command)


class DisplayQueryError(ExternalCommandError):
    """Raised when the current display state cannot be read or parsed.

    Callers treat this as "no current settings available" rather than
    as a fatal error.
    """
