# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktrack.auth.manager import AuthManager
from tasktrack.core.state import AppState
from tasktrack.tasks.task_manager import TaskManager

from .fakes import CountingStorage, FakeClock, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasktrack-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="memory",
        sqlite_path=tmp_path / "tasktrack.sqlite3",
        json_path=tmp_path / "tasktrack.json",
        seed_demo_tasks=False,
        bootstrap_delay_seconds=0.0,
    )


@pytest.fixture()
def storage() -> CountingStorage:
    return CountingStorage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def auth(storage: CountingStorage, clock: FakeClock) -> AuthManager:
    return AuthManager(storage, id_factory=SequentialIds("user"), clock=clock)


@pytest.fixture()
def tasks(storage: CountingStorage, clock: FakeClock) -> TaskManager:
    return TaskManager(storage, id_factory=SequentialIds("task"), clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, storage: CountingStorage, auth: AuthManager, tasks: TaskManager) -> AppState:
    """AppState wired with deterministic ids/clock over a write-counting store."""
    return AppState(settings=settings, storage=storage, auth=auth, tasks=tasks)
