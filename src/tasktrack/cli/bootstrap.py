# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend and wires both managers onto it,
- seeds demo tasks into an empty collection (optional).
"""

from __future__ import annotations

import logging

from ..auth.manager import AuthManager
from ..config import get_settings
from ..core.ports import BootstrapSource, StorageAdapter
from ..core.state import AppState
from ..storage import InMemoryStorage, JsonFileStorage, SqliteStorage
from ..tasks.bootstrap_source import DemoTaskSource
from ..tasks.task_manager import TaskManager

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> StorageAdapter:
    backend = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "json":
        return JsonFileStorage(settings.json_path)
    if backend == "sqlite":
        return SqliteStorage(settings.sqlite_path)
    raise ValueError(f"unknown storage backend: {backend!r}")


def create_initial_state(*, settings=None, storage: StorageAdapter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = create_storage(settings)

    state = AppState(
        settings=settings,
        storage=storage,
        auth=AuthManager(storage),
        tasks=TaskManager(storage),
    )
    logger.info(
        "State ready storage=%s users=%d tasks=%d",
        type(storage).__name__,
        len(state.auth.get_all_users()),
        len(state.tasks.get_all_tasks()),
    )
    return state


async def seed_initial_tasks(state: AppState, source: BootstrapSource | None = None) -> bool:
    """
    Pull demo tasks into an empty collection.

    Returns True when the source was consulted. A non-empty collection is left alone.
    """
    if state.tasks.get_all_tasks():
        return False
    if source is None:
        delay = float(getattr(state.settings, "bootstrap_delay_seconds", 1.0))
        source = DemoTaskSource(delay_seconds=delay)
    await state.tasks.load_initial_tasks(source)
    return True
