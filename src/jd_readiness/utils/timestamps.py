"""Timestamp helpers. Records store integer epoch milliseconds."""

from __future__ import annotations

import time


def now_ms() -> int:
    return int(time.time() * 1000)


def bump_timestamp(previous: int | None, now: int | None = None) -> int:
    """Return a timestamp that never moves backwards from ``previous``."""
    stamp = now_ms() if now is None else now
    if previous is None:
        return stamp
    return max(stamp, previous)
