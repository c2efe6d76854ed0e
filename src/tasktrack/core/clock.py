# src/tasktrack/core/clock.py

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current UTC time, truncated to milliseconds (the precision we persist)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_iso(value: datetime) -> str:
    """
    Format like JavaScript's Date.toISOString(): UTC, milliseconds, 'Z' suffix.

    Naive datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(raw: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime. Raises ValueError."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"not an ISO-8601 timestamp: {raw!r}")
    s = raw.strip()
    if s.endswith(("z", "Z")):
        s = s[:-1] + "+00:00"
    value = datetime.fromisoformat(s)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_or_none(value: datetime | None) -> str | None:
    return to_iso(value) if value is not None else None


def from_iso_or_none(raw: str | None) -> datetime | None:
    if raw is None or raw == "":
        return None
    return from_iso(raw)
