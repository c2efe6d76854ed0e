# src/tasktrack/core/errors.py

from __future__ import annotations


class TaskTrackError(Exception):
    """Base class for errors raised by the managers."""


class DuplicateEmailError(TaskTrackError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email is already registered: {email}")
        self.email = email


class InvalidCredentialsError(TaskTrackError):
    """
    Raised by login for an unknown email AND for a wrong password.

    Both cases share one error so callers cannot tell which field was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class StorageError(TaskTrackError):
    """A persistence adapter failed to read or write a key."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
