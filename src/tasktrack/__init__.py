"""
tasktrack: users, sessions and assignable tasks over a key-value store.

Subpackages:
- core/: ports (Protocols), errors, clock, id generation, AppState
- auth/: User model, credential verification, AuthManager
- tasks/: Task model, TaskManager, bootstrap (demo) data source
- storage/: concrete persistence adapters (memory, SQLite, JSON file)
- cli/, connectors/: composition root, slash commands, console REPL
"""

__version__ = "0.1.0"
