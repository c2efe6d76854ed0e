# src/tasktrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Malformed values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTRACK"

STORAGE_BACKENDS = ("sqlite", "json", "memory")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str  # sqlite | json | memory
    sqlite_path: Path
    json_path: Path

    # ---- Demo data bootstrap ----
    seed_demo_tasks: bool
    bootstrap_delay_seconds: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "tasktrack").strip() or "tasktrack"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktrack"))
        storage_backend = _env_choice(_k("STORAGE"), STORAGE_BACKENDS, "sqlite")
        sqlite_path = _env_path(_k("SQLITE_PATH"), data_dir / "tasktrack.sqlite3")
        json_path = _env_path(_k("JSON_PATH"), data_dir / "tasktrack.json")

        seed_demo_tasks = _env_bool(_k("SEED_DEMO_TASKS"), True)
        bootstrap_delay_seconds = max(0.0, _env_float(_k("BOOTSTRAP_DELAY_SECONDS"), 1.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            sqlite_path=sqlite_path,
            json_path=json_path,
            seed_demo_tasks=seed_demo_tasks,
            bootstrap_delay_seconds=bootstrap_delay_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
