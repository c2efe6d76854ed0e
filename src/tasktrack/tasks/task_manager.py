# src/tasktrack/tasks/task_manager.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from ..core.clock import Clock, utc_now
from ..core.ids import IdFactory, generate_id
from ..core.ports import BootstrapSource, StorageAdapter
from ..storage.codec import decode_record_list, encode_json
from .task_models import ALL_USERS, StatusFilter, Task, TaskStatistics, TaskUpdate

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class TaskManager:
    """
    In-memory task collection synchronized to a StorageAdapter.

    - the whole collection is rewritten under TASKS_KEY on every mutation
    - storage is written before memory is changed (a failed write changes nothing)
    - created_by / assigned_to are plain user ids and are not validated
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        id_factory: IdFactory = generate_id,
        clock: Clock = utc_now,
    ) -> None:
        self._storage = storage
        self._new_id = id_factory
        self._now = clock

        self._tasks: dict[str, Task] = {}
        self.load_from_storage()

    # ---- persistence ----

    def load_from_storage(self) -> None:
        tasks: dict[str, Task] = {}
        for record in decode_record_list(self._storage.load(TASKS_KEY), key=TASKS_KEY):
            try:
                task = Task.from_record(record)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed task record id=%s", record.get("id"))
                continue
            tasks[task.id] = task
        self._tasks = tasks
        logger.info("TaskManager loaded tasks=%d", len(tasks))

    def _write(self, tasks: dict[str, Task]) -> None:
        self._storage.save(TASKS_KEY, encode_json([t.to_record() for t in tasks.values()]))

    # ---- CRUD ----

    def create_task(
        self,
        title: str,
        description: str | None,
        created_by: str,
        assigned_to: str,
        deadline: datetime | None = None,
    ) -> Task:
        task = Task(
            id=self._new_id(),
            title=title,
            description=description,
            created_by=created_by,
            assigned_to=assigned_to,
            created_at=self._now(),
            deadline=deadline,
        )
        tasks = {**self._tasks, task.id: task}
        self._write(tasks)
        self._tasks = tasks
        logger.debug(
            "Task created id=%s created_by=%s assigned_to=%s deadline=%s",
            task.id,
            created_by,
            assigned_to,
            deadline,
        )
        return task

    def get_task(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def get_all_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_filtered_tasks(
        self,
        status: StatusFilter | str = StatusFilter.ALL,
        user_id: str = ALL_USERS,
    ) -> list[Task]:
        """
        Tasks matching BOTH filters.

        status: "all" | "completed" | "pending" (anything else -> ValueError)
        user_id: "all", or an id compared to assigned_to by exact equality
        """
        status_filter = StatusFilter.parse(status)
        return [
            t
            for t in self._tasks.values()
            if status_filter.matches(t.completed) and (user_id == ALL_USERS or t.assigned_to == user_id)
        ]

    def update_task(self, task_id: str, changes: TaskUpdate | Mapping[str, Any]) -> Task | None:
        """
        Apply a partial update. Returns the updated task, or None for an unknown id.

        A plain mapping is converted with TaskUpdate.from_mapping, so id,
        createdAt and unknown keys are ignored. An update with nothing to apply
        returns the task unchanged without writing to storage.
        """
        current = self._tasks.get(task_id)
        if current is None:
            return None

        update = changes if isinstance(changes, TaskUpdate) else TaskUpdate.from_mapping(changes)
        if update.is_empty():
            return current

        updated = update.apply(current, now=self._now())

        tasks = {**self._tasks, task_id: updated}
        self._write(tasks)
        self._tasks = tasks
        logger.debug("Task updated id=%s completed=%s", task_id, updated.completed)
        return updated

    def complete_task(self, task_id: str) -> Task | None:
        return self.update_task(task_id, TaskUpdate(completed=True))

    def uncomplete_task(self, task_id: str) -> Task | None:
        return self.update_task(task_id, TaskUpdate(completed=False))

    def delete_task(self, task_id: str) -> bool:
        """Remove a task. Storage is only written when something was removed."""
        if task_id not in self._tasks:
            return False
        tasks = {k: v for k, v in self._tasks.items() if k != task_id}
        self._write(tasks)
        self._tasks = tasks
        logger.debug("Task deleted id=%s", task_id)
        return True

    def get_statistics(self) -> TaskStatistics:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks.values() if t.completed)
        return TaskStatistics.compute(total, completed)

    # ---- bootstrap ----

    async def load_initial_tasks(self, source: BootstrapSource) -> list[Task]:
        """
        Merge tasks from an external source, skipping ids already present.

        Nothing changes until the source has resolved; cancelling the awaiting
        asyncio task before that leaves the collection as it was.
        """
        records = await source.fetch_tasks()

        added: dict[str, Task] = {}
        for record in records:
            try:
                task = Task.from_record(record)
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed bootstrap record id=%s", record.get("id"))
                continue
            if task.id in self._tasks or task.id in added:
                continue
            added[task.id] = task

        if added:
            tasks = {**self._tasks, **added}
            self._write(tasks)
            self._tasks = tasks
        logger.info("Bootstrap tasks received=%d added=%d", len(records), len(added))
        return self.get_all_tasks()
