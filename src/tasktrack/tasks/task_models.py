# src/tasktrack/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..core.clock import from_iso, from_iso_or_none, to_iso, to_iso_or_none, utc_now

ALL_USERS = "all"

_UNSET: Any = object()


class StatusFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | StatusFilter) -> StatusFilter:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown status filter {raw!r} (expected one of: {allowed})") from None

    def matches(self, completed: bool) -> bool:
        if self is StatusFilter.COMPLETED:
            return completed
        if self is StatusFilter.PENDING:
            return not completed
        return True


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str | None
    created_by: str
    assigned_to: str
    created_at: datetime

    deadline: datetime | None = None
    completed: bool = False
    completed_at: datetime | None = None  # set iff completed

    def complete(self, now: datetime | None = None) -> None:
        self.completed = True
        self.completed_at = now or utc_now()

    def uncomplete(self) -> None:
        self.completed = False
        self.completed_at = None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdBy": self.created_by,
            "assignedTo": self.assigned_to,
            "deadline": to_iso_or_none(self.deadline),
            "createdAt": to_iso(self.created_at),
            "completed": self.completed,
            "completedAt": to_iso_or_none(self.completed_at),
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Task:
        """
        Rebuild a Task from its stored record. Raises KeyError/ValueError on bad data.

        A record that claims completed without completedAt (or the reverse) is
        normalised so the completed/completed_at invariant holds.
        """
        completed = bool(data.get("completed", False))
        completed_at = from_iso_or_none(data.get("completedAt"))
        created_at = from_iso(data["createdAt"])
        if completed and completed_at is None:
            completed_at = created_at
        if not completed:
            completed_at = None

        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            description=data.get("description"),
            created_by=str(data.get("createdBy") or ""),
            assigned_to=str(data.get("assignedTo") or ""),
            created_at=created_at,
            deadline=from_iso_or_none(data.get("deadline")),
            completed=completed,
            completed_at=completed_at,
        )


# Stored record name -> TaskUpdate attribute. id / createdAt / createdBy /
# completedAt are deliberately absent: they are never overwritten by an update.
_UPDATABLE_KEYS = {
    "title": "title",
    "description": "description",
    "assignedTo": "assigned_to",
    "assigned_to": "assigned_to",
    "deadline": "deadline",
    "completed": "completed",
}


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """
    Partial update of a Task.

    Only fields passed explicitly are applied; everything else keeps its value.
    `completed` is a paired transition: completed_at is derived from it.
    """

    title: Any = _UNSET
    description: Any = _UNSET
    assigned_to: Any = _UNSET
    deadline: Any = _UNSET
    completed: Any = _UNSET

    @classmethod
    def from_mapping(cls, changes: Mapping[str, Any]) -> TaskUpdate:
        """Build from a loose dict (record or attribute names). Unknown keys are ignored."""
        kwargs: dict[str, Any] = {}
        for key, value in changes.items():
            attr = _UPDATABLE_KEYS.get(key)
            if attr is None:
                continue
            if attr == "deadline" and isinstance(value, str):
                value = from_iso_or_none(value)
            if attr == "completed":
                value = bool(value)
            kwargs[attr] = value
        return cls(**kwargs)

    def is_empty(self) -> bool:
        return all(getattr(self, f) is _UNSET for f in self.__slots__)

    def apply(self, task: Task, *, now: datetime) -> Task:
        """Return an updated copy of `task`; the original is left untouched."""
        fields: dict[str, Any] = {}
        if self.title is not _UNSET:
            fields["title"] = self.title
        if self.description is not _UNSET:
            fields["description"] = self.description
        if self.assigned_to is not _UNSET:
            fields["assigned_to"] = self.assigned_to
        if self.deadline is not _UNSET:
            fields["deadline"] = self.deadline

        updated = replace(task, **fields)
        if self.completed is not _UNSET:
            if self.completed and not task.completed:
                updated.complete(now)
            elif not self.completed and task.completed:
                updated.uncomplete()
        return updated


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total: int
    completed: int
    completion_percentage: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @classmethod
    def compute(cls, total: int, completed: int) -> TaskStatistics:
        if total <= 0:
            return cls(total=0, completed=0, completion_percentage=0)
        # round-half-up of completed/total*100, in integers
        pct = (200 * completed + total) // (2 * total)
        return cls(total=total, completed=completed, completion_percentage=pct)
