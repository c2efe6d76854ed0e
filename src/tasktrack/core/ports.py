# src/tasktrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the managers.

The managers depend on Protocols instead of concrete implementations.
This keeps storage backends, credential schemes and data sources swappable
and makes testing easier.
"""

from typing import Any, Protocol

TaskRecord = dict[str, Any]
# Serialized task as stored under the "tasks" key: {"id": ..., "title": ..., ...}.


class StorageAdapter(Protocol):
    """
    Key-value durable storage (browser localStorage equivalent).

    - load() returns None for a key that was never written or was removed
    - save() replaces the whole value of a key
    - remove() of a missing key is a no-op
    """

    def load(self, key: str) -> str | None: ...
    def save(self, key: str, raw: str) -> None: ...
    def remove(self, key: str) -> None: ...


class CredentialVerifier(Protocol):
    """How a password is stored on a User and checked at login."""

    def encode(self, password: str) -> str: ...
    def verify(self, stored: str, supplied: str) -> bool: ...


class UserResolver(Protocol):
    """Resolves the plain user ids kept on tasks (created_by / assigned_to)."""

    def resolve_user(self, user_id: str) -> Any | None: ...


class BootstrapSource(Protocol):
    """
    External source of initial tasks.

    fetch_tasks() resolves once with serialized task records (same shape as
    the persisted "tasks" entries).
    """

    async def fetch_tasks(self) -> list[TaskRecord]: ...
