# src/tasktrack/tasks/bootstrap_source.py

from __future__ import annotations

"""
Bootstrap (demo) data source.

Stands in for the remote API the application pulls its first tasks from:
after a fixed delay it resolves once with two fixed task records.
"""

import asyncio
import logging
from datetime import timedelta

from ..core.clock import Clock, to_iso, utc_now
from ..core.ports import TaskRecord

logger = logging.getLogger(__name__)

SYSTEM_USER_ID = "system"

_DEMO_TASKS = (
    # (id, title, description, deadline in days)
    ("api-1", "Review documentation", "Review and update the project documentation", 7),
    ("api-2", "Prepare team meeting", "Prepare the agenda and materials for the meeting", 2),
)


class DemoTaskSource:
    def __init__(self, *, delay_seconds: float = 1.0, clock: Clock = utc_now) -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._now = clock

    async def fetch_tasks(self) -> list[TaskRecord]:
        await asyncio.sleep(self._delay)

        # Deadlines are relative to when the data arrives.
        now = self._now()
        records: list[TaskRecord] = []
        for task_id, title, description, days in _DEMO_TASKS:
            records.append(
                {
                    "id": task_id,
                    "title": title,
                    "description": description,
                    "createdBy": SYSTEM_USER_ID,
                    "assignedTo": "all",
                    "deadline": to_iso(now + timedelta(days=days)),
                    "createdAt": to_iso(now),
                    "completed": False,
                    "completedAt": None,
                }
            )
        logger.debug("DemoTaskSource resolved with %d tasks", len(records))
        return records
