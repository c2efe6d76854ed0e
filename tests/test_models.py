# tests/test_models.py

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

from tasktrack.auth.models import User
from tasktrack.core.clock import from_iso, to_iso, utc_now
from tasktrack.core.ids import generate_id
from tasktrack.tasks.task_models import StatusFilter, Task, TaskUpdate

T0 = datetime(2024, 5, 1, 10, 0, 0, 123000, tzinfo=timezone.utc)


def test_user_record_round_trip() -> None:
    user = User(id="u1", name="Ann", email="ann@example.com", password="pw", created_at=T0)
    record = user.to_record()
    assert record["createdAt"] == "2024-05-01T10:00:00.123Z"
    assert User.from_record(record) == user


def test_task_record_round_trip() -> None:
    task = Task(
        id="t1",
        title="Title",
        description="Desc",
        created_by="u1",
        assigned_to="u2",
        created_at=T0,
        deadline=T0 + timedelta(days=3),
    )
    task.complete(T0 + timedelta(hours=1))

    restored = Task.from_record(task.to_record())

    assert restored == task
    assert restored.completed_at == T0 + timedelta(hours=1)


def test_task_complete_uncomplete() -> None:
    task = Task(id="t1", title="x", description=None, created_by="u", assigned_to="u", created_at=T0)
    assert task.completed is False and task.completed_at is None

    task.complete(T0)
    assert task.completed is True and task.completed_at == T0

    task.uncomplete()
    assert task.completed is False and task.completed_at is None


def test_from_record_normalises_completed_invariant() -> None:
    base = {"id": "t", "title": "x", "createdAt": "2024-05-01T10:00:00.000Z"}

    done_without_stamp = Task.from_record({**base, "completed": True, "completedAt": None})
    assert done_without_stamp.completed_at is not None

    pending_with_stamp = Task.from_record({**base, "completed": False, "completedAt": "2024-05-02T00:00:00.000Z"})
    assert pending_with_stamp.completed_at is None


def test_task_update_from_mapping_accepts_record_and_attribute_names() -> None:
    update = TaskUpdate.from_mapping(
        {
            "assignedTo": "u2",
            "deadline": "2024-06-01T00:00:00.000Z",
            "id": "ignored",
            "createdBy": "ignored",
            "completedAt": "ignored",
            "unknown": 1,
        }
    )
    assert update.assigned_to == "u2"
    assert update.deadline == datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert not update.is_empty()

    assert TaskUpdate.from_mapping({"assigned_to": "u3"}).assigned_to == "u3"
    assert TaskUpdate.from_mapping({"id": "x", "createdAt": "y"}).is_empty()


def test_task_update_apply_returns_copy() -> None:
    task = Task(id="t1", title="x", description="d", created_by="u", assigned_to="u", created_at=T0)
    updated = TaskUpdate(title="y", completed=True).apply(task, now=T0 + timedelta(minutes=1))

    assert updated is not task
    assert task.title == "x" and task.completed is False
    assert updated.title == "y"
    assert updated.completed_at == T0 + timedelta(minutes=1)
    assert updated.description == "d"


def test_status_filter_parse() -> None:
    assert StatusFilter.parse("Completed") is StatusFilter.COMPLETED
    assert StatusFilter.parse(StatusFilter.PENDING) is StatusFilter.PENDING
    with pytest.raises(ValueError, match="unknown status filter"):
        StatusFilter.parse("done")


def test_iso_helpers() -> None:
    assert to_iso(datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)) == "2024-01-02T03:04:05.678Z"
    assert to_iso(datetime(2024, 1, 2)) == "2024-01-02T00:00:00.000Z"

    aware = from_iso("2024-01-02T05:04:05+02:00")
    assert aware == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert aware.tzinfo is not None
    assert from_iso("2024-01-02T03:04:05.678Z").microsecond == 678000

    with pytest.raises(ValueError):
        from_iso("")


def test_utc_now_has_millisecond_precision() -> None:
    now = utc_now()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0
    assert from_iso(to_iso(now)) == now


def test_generate_id_shape_and_uniqueness() -> None:
    ids = {generate_id() for _ in range(500)}
    assert len(ids) == 500
    assert all(re.fullmatch(r"[0-9a-z]+", i) for i in ids)
