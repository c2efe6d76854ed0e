# src/tasktrack/auth/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.clock import from_iso, to_iso


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str
    email: str
    password: str  # as produced by the CredentialVerifier (plaintext by default)
    created_at: datetime

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> User:
        """Rebuild a User from its stored record. Raises KeyError/ValueError on bad data."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            email=str(data["email"]),
            password=str(data.get("password") or ""),
            created_at=from_iso(data["createdAt"]),
        )

    def __repr__(self) -> str:
        # password stays out of logs and tracebacks
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"
