# tests/test_bootstrap_source.py

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from tasktrack.core.clock import from_iso
from tasktrack.tasks.bootstrap_source import DemoTaskSource
from tasktrack.tasks.task_manager import TaskManager

from .fakes import BlockingTaskSource, CountingStorage, FakeClock, ImmediateTaskSource


def _record(task_id: str, title: str = "remote") -> dict:
    return {
        "id": task_id,
        "title": title,
        "description": "from api",
        "createdBy": "system",
        "assignedTo": "all",
        "deadline": None,
        "createdAt": "2024-05-01T09:00:00.000Z",
        "completed": False,
    }


@pytest.mark.asyncio
async def test_demo_source_yields_fixed_records(clock: FakeClock) -> None:
    records = await DemoTaskSource(delay_seconds=0, clock=clock).fetch_tasks()

    assert [r["id"] for r in records] == ["api-1", "api-2"]
    for r, days in zip(records, (7, 2)):
        assert r["createdBy"] == "system"
        assert r["assignedTo"] == "all"
        assert r["completed"] is False
        assert from_iso(r["deadline"]) == clock.now + timedelta(days=days)


@pytest.mark.asyncio
async def test_load_initial_tasks_inserts_and_persists(tasks: TaskManager, storage: CountingStorage, clock) -> None:
    result = await tasks.load_initial_tasks(DemoTaskSource(delay_seconds=0, clock=clock))

    assert sorted(t.id for t in result) == ["api-1", "api-2"]
    assert all(not t.completed and t.completed_at is None for t in result)
    assert storage.saves == ["tasks"]
    assert TaskManager(storage).get_task("api-2").title == "Prepare team meeting"


@pytest.mark.asyncio
async def test_load_initial_tasks_is_idempotent_on_id(tasks: TaskManager, storage: CountingStorage) -> None:
    await tasks.load_initial_tasks(ImmediateTaskSource([_record("api-1")]))
    tasks.update_task("api-1", {"title": "edited locally"})
    writes = storage.writes

    result = await tasks.load_initial_tasks(ImmediateTaskSource([_record("api-1", "server copy"), _record("api-1")]))

    assert [t.id for t in result] == ["api-1"]
    assert tasks.get_task("api-1").title == "edited locally"
    assert storage.writes == writes


@pytest.mark.asyncio
async def test_load_initial_tasks_keeps_existing_tasks(tasks: TaskManager) -> None:
    local = tasks.create_task("local", None, "u1", "u1")
    result = await tasks.load_initial_tasks(ImmediateTaskSource([_record("api-9")]))
    assert {t.id for t in result} == {local.id, "api-9"}


@pytest.mark.asyncio
async def test_cancelled_bootstrap_changes_nothing(tasks: TaskManager, storage: CountingStorage) -> None:
    source = BlockingTaskSource([_record("api-1")])
    runner = asyncio.create_task(tasks.load_initial_tasks(source))
    await asyncio.sleep(0)

    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert tasks.get_all_tasks() == []
    assert storage.writes == 0
