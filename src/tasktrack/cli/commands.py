# src/tasktrack/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from ..auth.models import User
from ..core.errors import DuplicateEmailError, InvalidCredentialsError
from ..core.ports import UserResolver
from ..core.state import AppState
from ..tasks.task_models import ALL_USERS, StatusFilter, Task, TaskUpdate

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "You are not logged in. Use /login <email> <password>."


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering helpers ----


def _user_label(users: UserResolver, user_id: str) -> str:
    user = users.resolve_user(user_id)
    return user.name if user else "Unknown"


def _fmt_date(value: datetime | None) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d") if value else "-"


def format_task(state: AppState, task: Task) -> str:
    mark = "x" if task.completed else " "
    line = (
        f"[{mark}] {task.id}  {task.title}"
        f"  (by: {_user_label(state.auth, task.created_by)},"
        f" assigned: {_user_label(state.auth, task.assigned_to)}"
    )
    if task.deadline:
        line += f", due: {_fmt_date(task.deadline)}"
    return line + ")"


def _split_title_description(words: list[str]) -> tuple[str, str | None]:
    """'title words | description words' -> (title, description)."""
    text = " ".join(words)
    if "|" not in text:
        return text.strip(), None
    title, _, description = text.partition("|")
    return title.strip(), (description.strip() or None)


def _parse_deadline(raw: str) -> datetime:
    """YYYY-MM-DD -> midnight UTC of that day. Raises ValueError."""
    day = date.fromisoformat(raw)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def _find_user(state: AppState, ref: str) -> User | None:
    """Accept either a user id or an exact email."""
    user = state.auth.resolve_user(ref)
    if user is not None:
        return user
    for candidate in state.auth.get_all_users():
        if candidate.email == ref:
            return candidate
    return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    current = state.auth.get_current_user()
    backend = getattr(state.settings, "storage_backend", type(state.storage).__name__)
    return (
        "Status:\n"
        f"  Storage: {backend}\n"
        f"  Users: {len(state.auth.get_all_users())}\n"
        f"  Tasks: {len(state.tasks.get_all_tasks())}\n"
        f"  Logged in as: {current.name if current else '-'}"
    )


def cmd_register(state: AppState, args: list[str]) -> str:
    """/register <name...> <email> <password>"""
    if len(args) < 3:
        return "Usage: /register <name> <email> <password>"
    name = " ".join(args[:-2])
    email, password = args[-2], args[-1]
    try:
        user = state.auth.register(name, email, password)
    except DuplicateEmailError as e:
        return str(e)
    return f"Registered {user.name} (id={user.id}). You can now /login."


def cmd_login(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    try:
        user = state.auth.login(args[0], args[1])
    except InvalidCredentialsError as e:
        return str(e)
    return f"Hello, {user.name}."


def cmd_logout(state: AppState, args: list[str]) -> str:
    if not state.auth.is_logged_in:
        return "Nobody is logged in."
    state.auth.logout()
    return "Logged out."


def cmd_whoami(state: AppState, args: list[str]) -> str:
    current = state.auth.get_current_user()
    if current is None:
        return NOT_LOGGED_IN
    return f"{current.name} <{current.email}> (id={current.id})"


def cmd_users(state: AppState, args: list[str]) -> str:
    users = state.auth.get_all_users()
    if not users:
        return "No users registered."
    lines = ["Users:"]
    for u in users:
        lines.append(f"  {u.id}  {u.name} <{u.email}>")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <assignee> <title> [| description] [due=YYYY-MM-DD]

    assignee is a user id or email.
    """
    current = state.auth.get_current_user()
    if current is None:
        return NOT_LOGGED_IN
    if len(args) < 2:
        return "Usage: /add <assignee> <title> [| description] [due=YYYY-MM-DD]"

    assignee = _find_user(state, args[0])
    if assignee is None:
        return f"Unknown user: {args[0]}. Use /users to list users."

    deadline: datetime | None = None
    words: list[str] = []
    for word in args[1:]:
        if word.lower().startswith("due="):
            try:
                deadline = _parse_deadline(word[4:])
            except ValueError:
                return f"Bad deadline {word[4:]!r}, expected YYYY-MM-DD."
            continue
        words.append(word)

    title, description = _split_title_description(words)
    if not title:
        return "A task needs a title."

    task = state.tasks.create_task(title, description, current.id, assignee.id, deadline)
    return f"Created task {task.id} for {assignee.name}."


def cmd_list(state: AppState, args: list[str]) -> str:
    """/list [all|completed|pending] [user id|email|me|all]"""
    status = args[0] if args else StatusFilter.ALL
    user_id = ALL_USERS
    if len(args) > 1 and args[1] != ALL_USERS:
        if args[1] == "me":
            current = state.auth.get_current_user()
            if current is None:
                return NOT_LOGGED_IN
            user_id = current.id
        else:
            user = _find_user(state, args[1])
            user_id = user.id if user else args[1]

    try:
        tasks = state.tasks.get_filtered_tasks(status, user_id)
    except ValueError as e:
        return str(e)

    if not tasks:
        return "No tasks to show."
    return "\n".join(format_task(state, t) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /show <task id>"
    task = state.tasks.get_task(args[0])
    if task is None:
        return f"No task with id {args[0]}."
    lines = [
        format_task(state, task),
        f"  {task.description or 'No description'}",
        f"  created: {_fmt_date(task.created_at)}",
    ]
    if task.completed_at:
        lines.append(f"  completed: {_fmt_date(task.completed_at)}")
    return "\n".join(lines)


def _set_completed(state: AppState, args: list[str], completed: bool) -> str:
    if not state.auth.is_logged_in:
        return NOT_LOGGED_IN
    if len(args) != 1:
        return f"Usage: /{'done' if completed else 'undo'} <task id>"
    task = state.tasks.update_task(args[0], TaskUpdate(completed=completed))
    if task is None:
        return f"No task with id {args[0]}."
    return f"Task {task.id} marked {'completed' if completed else 'pending'}."


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, True)


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, False)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> <title> [| description]"""
    if not state.auth.is_logged_in:
        return NOT_LOGGED_IN
    if len(args) < 2:
        return "Usage: /edit <task id> <title> [| description]"
    title, description = _split_title_description(args[1:])
    if not title:
        return "A task needs a title."
    if "|" in " ".join(args[1:]):
        update = TaskUpdate(title=title, description=description)
    else:
        update = TaskUpdate(title=title)
    task = state.tasks.update_task(args[0], update)
    if task is None:
        return f"No task with id {args[0]}."
    return f"Task {task.id} updated."


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not state.auth.is_logged_in:
        return NOT_LOGGED_IN
    if len(args) != 1:
        return "Usage: /rm <task id>"
    if not state.tasks.delete_task(args[0]):
        return f"No task with id {args[0]}."
    return f"Task {args[0]} deleted."


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = state.tasks.get_statistics()
    return (
        f"Total: {stats.total}  Completed: {stats.completed}"
        f"  Completion: {stats.completion_percentage}%"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage backend, counts and session.")
registry.register("register", cmd_register, help_text="Create an account: /register <name> <email> <password>.")
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Log out.")
registry.register("whoami", cmd_whoami, help_text="Show the logged-in user.")
registry.register("users", cmd_users, help_text="List registered users.")
registry.register(
    "add",
    cmd_add,
    help_text="Create a task: /add <assignee> <title> [| description] [due=YYYY-MM-DD].",
)
registry.register(
    "list",
    cmd_list,
    help_text="List tasks: /list [all|completed|pending] [user|me|all].",
    aliases=["ls"],
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a task pending again: /undo <id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <title> [| description].")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("stats", cmd_stats, help_text="Task totals and completion percentage.")
