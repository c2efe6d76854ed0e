# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATA_DIR", "STORAGE", "SQLITE_PATH", "JSON_PATH", "SEED_DEMO_TASKS", "BOOTSTRAP_DELAY_SECONDS"):
        monkeypatch.delenv(f"TASKTRACK_{name}", raising=False)

    s = Settings.from_env()

    assert s.storage_backend == "sqlite"
    assert s.data_dir == Path(".local/tasktrack")
    assert s.sqlite_path == Path(".local/tasktrack/tasktrack.sqlite3")
    assert s.seed_demo_tasks is True
    assert s.bootstrap_delay_seconds == 1.0


def test_env_overrides_and_fallbacks(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKTRACK_STORAGE", "JSON")
    monkeypatch.setenv("TASKTRACK_SEED_DEMO_TASKS", "off")
    monkeypatch.setenv("TASKTRACK_BOOTSTRAP_DELAY_SECONDS", "soon")
    monkeypatch.delenv("TASKTRACK_JSON_PATH", raising=False)

    s = Settings.from_env()

    assert s.storage_backend == "json"
    assert s.json_path == tmp_path / "tasktrack.json"
    assert s.seed_demo_tasks is False
    assert s.bootstrap_delay_seconds == 1.0


def test_unknown_backend_falls_back_to_sqlite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKTRACK_STORAGE", "postgres")
    assert Settings.from_env().storage_backend == "sqlite"
