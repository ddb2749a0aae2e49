"""Domain errors for harbor-migrate."""

from typing import Optional, Sequence


class MigrationError(RuntimeError):
    """Raised when the migration cannot continue safely."""


class ConfigurationError(MigrationError):
    """Raised for invalid options before any network activity."""


class TransportError(MigrationError):
    """Raised when an HTTP call to a registry fails."""


class DecodeError(MigrationError):
    """Raised when a registry response does not have the expected shape."""


class CommandError(MigrationError):
    """Raised when an external command cannot start or exits non-zero."""

    def __init__(self, message: str, command: Sequence[str] = (), returncode: Optional[int] = None):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode


class MigrationCancelled(MigrationError):
    """Raised when the run context has been cancelled."""
