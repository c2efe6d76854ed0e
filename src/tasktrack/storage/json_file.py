# src/tasktrack/storage/json_file.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    All keys in one JSON object on disk: {"users": "...", "tasks": "...", ...}.

    Values are the raw strings handed to save(). Every write rewrites the file
    via a temp file + os.replace, so readers never see a half-written document.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not contain a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"cannot write {self._path}: {e}") from e
        with contextlib.suppress(OSError):
            # Contains plaintext passwords, keep it private on disk.
            os.chmod(self._path, 0o600)

    def load(self, key: str) -> str | None:
        return self._read_all().get(key)

    def save(self, key: str, raw: str) -> None:
        data = self._read_all()
        data[key] = raw
        self._write_all(data)
        logger.debug("json saved key=%s path=%s", key, self._path)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
        logger.debug("json removed key=%s path=%s", key, self._path)
