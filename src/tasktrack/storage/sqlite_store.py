# src/tasktrack/storage/sqlite_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class SqliteStorage:
    """
    SQLite key-value store.

    One table, kv(key PRIMARY KEY, value, updated_at). Each value is a whole
    serialized collection, rewritten on every save.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasktrack.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteStorage ready db=%s keys=%s", self._db_path, self.keys())

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StorageError(f"cannot open {self._db_path}: {e}") from e
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"schema setup failed for {self._db_path}: {e}") from e
        finally:
            conn.close()

    # ---- StorageAdapter ----

    def load(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])
        except sqlite3.Error as e:
            raise StorageError(f"load failed: {e}", key=key) from e
        finally:
            conn.close()

    def save(self, key: str, raw: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                               updated_at = excluded.updated_at
                """,
                (key, raw, time.time()),
            )
            conn.commit()
            logger.debug("kv saved key=%s bytes=%d", key, len(raw))
        except sqlite3.Error as e:
            raise StorageError(f"save failed: {e}", key=key) from e
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
            logger.debug("kv removed key=%s", key)
        except sqlite3.Error as e:
            raise StorageError(f"remove failed: {e}", key=key) from e
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_conn()
        try:
            return [str(r[0]) for r in conn.execute("SELECT key FROM kv ORDER BY key")]
        except sqlite3.Error as e:
            raise StorageError(f"listing keys failed: {e}") from e
        finally:
            conn.close()
