# src/tasktrack/storage/codec.py

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def encode_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def decode_json(raw: str | None, *, key: str) -> Any | None:
    """
    Parse a stored value. Missing -> None; malformed -> logged, None.

    Loading is best-effort: a corrupt key must not prevent the app from starting.
    """
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.exception("Stored value for key=%s is not valid JSON; ignoring it.", key)
        return None


def decode_record_list(raw: str | None, *, key: str) -> list[dict[str, Any]]:
    data = decode_json(raw, key=key)
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("Stored value for key=%s is not a list; ignoring it.", key)
        return []
    out: list[dict[str, Any]] = []
    for item in data:
        if isinstance(item, dict):
            out.append(item)
        else:
            logger.warning("Skipping non-object entry under key=%s: %r", key, item)
    return out
