# tests/test_bootstrap.py

from __future__ import annotations

import pytest

from tasktrack.cli.bootstrap import create_initial_state, create_storage, seed_initial_tasks
from tasktrack.storage import InMemoryStorage, JsonFileStorage, SqliteStorage

from .fakes import ImmediateTaskSource


@pytest.mark.parametrize(
    ("backend", "expected"),
    [("memory", InMemoryStorage), ("sqlite", SqliteStorage), ("json", JsonFileStorage)],
)
def test_create_storage_picks_backend(settings, backend, expected) -> None:
    settings.storage_backend = backend
    assert isinstance(create_storage(settings), expected)


def test_create_storage_rejects_unknown_backend(settings) -> None:
    settings.storage_backend = "redis"
    with pytest.raises(ValueError):
        create_storage(settings)


def test_state_managers_share_storage(settings) -> None:
    settings.storage_backend = "json"
    state = create_initial_state(settings=settings)
    state.auth.register("Ann", "ann@example.com", "pw")

    reloaded = create_initial_state(settings=settings)
    assert [u.email for u in reloaded.auth.get_all_users()] == ["ann@example.com"]
    assert settings.json_path.exists()


@pytest.mark.asyncio
async def test_seed_only_when_empty(settings) -> None:
    state = create_initial_state(settings=settings, storage=InMemoryStorage())

    assert await seed_initial_tasks(state) is True
    assert sorted(t.id for t in state.tasks.get_all_tasks()) == ["api-1", "api-2"]

    source = ImmediateTaskSource([])
    assert await seed_initial_tasks(state, source) is False
    assert source.calls == 0
