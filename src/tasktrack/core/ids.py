# src/tasktrack/core/ids.py

from __future__ import annotations

import secrets
import time
from collections.abc import Callable

IdFactory = Callable[[], str]

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n <= 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_ALPHABET[rem])
    return "".join(reversed(out))


def generate_id() -> str:
    """
    Time-ordered prefix (epoch ms, base36) + random base36 suffix.

    No counter and no collision check: each manager keeps its own namespace and
    the random part (~52 bits) makes collisions negligible.
    """
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(10))
    return _base36(millis) + suffix
