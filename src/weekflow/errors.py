"""Exception hierarchy for weekflow."""

from typing import Any


class WeekflowError(Exception):
    """Base exception for all weekflow errors."""


class InvalidDateError(WeekflowError, ValueError):
    """Raised when an input cannot be turned into a calendar date."""

    def __init__(self, value: Any, reason: str = "") -> None:
        self.value = value
        message = f"Invalid date input: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ConfigurationError(WeekflowError, ValueError):
    """Raised when weekflow configuration is missing, malformed or inconsistent."""
