"""
Persistence adapters (StorageAdapter implementations).

Components:
- memory.py: dict-backed, for tests and throwaway runs
- sqlite_store.py: SQLite key-value table
- json_file.py: a single JSON document on disk
- codec.py: JSON helpers shared by the managers
"""

from .json_file import JsonFileStorage
from .memory import InMemoryStorage
from .sqlite_store import SqliteStorage

__all__ = ["InMemoryStorage", "JsonFileStorage", "SqliteStorage"]
