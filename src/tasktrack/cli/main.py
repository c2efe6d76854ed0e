# src/tasktrack/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, seeds demo tasks into an empty
collection (optional), then runs the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, seed_initial_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import StorageError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        storage = getattr(state, "storage", None)
        if storage is not None and hasattr(storage, "close"):
            storage.close()
    except Exception:
        logger.debug("Storage close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/tasktrack")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "tasktrack"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    if settings.seed_demo_tasks:
        try:
            if asyncio.run(seed_initial_tasks(state)):
                logger.info("Demo tasks loaded: %d", len(state.tasks.get_all_tasks()))
        except StorageError:
            logger.exception("Failed to store demo tasks.")

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
