# src/tasktrack/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.errors import TaskTrackError
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    current = state.auth.get_current_user()
    return f"{current.name}> " if current else "> "


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "tasktrack"))
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    current = state.auth.get_current_user()
    if current is not None:
        _print_ts(f"Welcome back, {current.name}.")

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input)
        except TaskTrackError as e:
            logger.warning("Command failed: %s", e)
            response = f"Error: {e}"
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."
        print(f"[{_ts_local()}] {response}")

    logger.info("Console connector finished.")
