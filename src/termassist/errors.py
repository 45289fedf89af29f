"""Application-level exception types for termassist."""

from __future__ import annotations


class AssistError(Exception):
    """Base exception for termassist."""


class ConfigurationError(AssistError):
    """Base exception for configuration and startup validation errors."""


class HomeDirectoryNotFoundError(ConfigurationError):
    """Raised when the user home directory cannot be resolved."""


class StoreError(AssistError):
    """Raised when a plugin store cannot be read, parsed or written."""


class InvalidArgumentError(AssistError):
    """Raised when a command argument fails validation."""


class UnknownCommandError(AssistError):
    """Raised when a plugin is invoked with a subcommand it does not handle."""


class TerminalUnavailableError(AssistError):
    """Raised when the controlling terminal cannot be switched to raw mode."""


class EventSourceClosedError(AssistError):
    """Raised when every event producer has stopped and no event is left."""
