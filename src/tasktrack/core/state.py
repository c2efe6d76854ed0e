# src/tasktrack/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..auth.manager import AuthManager
from ..tasks.task_manager import TaskManager
from .ports import StorageAdapter


@dataclass
class AppState:
    """
    The wired application, built once by the composition root.

    settings is typed loosely so tests can pass a SimpleNamespace.
    """

    settings: Any
    storage: StorageAdapter
    auth: AuthManager
    tasks: TaskManager
