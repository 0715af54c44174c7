"""Exception classes for the settings registry and its file store.

This module defines a small hierarchy so callers can tell a host that
cannot store settings at all apart from a save that failed halfway.
"""

from __future__ import annotations

from pathlib import Path


class SettingsError(Exception):
    """Base class for every error raised by prefstore."""


class SettingsUnsupportedError(SettingsError):
    """Raised when the host cannot provide managed settings storage.

    This is distinct from the settings file simply not existing yet,
    which is treated as an empty file and never surfaced.
    """


class FileWriteError(SettingsError):
    """Raised when the settings file cannot be opened or written.

    Wraps the underlying OSError so the UI layer can report the cause.
    """

    def __init__(
        self, path: Path | str, message: str, original_error: Exception | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            path: Settings file that could not be written
            message: Human-readable error message
            original_error: The original exception that was caught
        """
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
        self.message = message
        self.original_error = original_error


class DuplicateSettingError(SettingsError):
    """Raised when two setting items register the same identifier."""


class InvalidSettingIdError(SettingsError):
    """Raised when an identifier contains anything but letters, digits and periods."""


class UnknownSettingError(SettingsError, KeyError):
    """Raised when looking up an identifier nobody registered."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument
        return str(self.args[0]) if self.args else ""


class BootstrapError(SettingsError):
    """Raised when factory defaults are captured twice, or not at all before a restore."""
