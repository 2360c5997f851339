"""Wall-clock helpers for the text timestamp columns."""

from __future__ import annotations

import time


def now_millis() -> str:
    """Current time as epoch milliseconds, in the text form the tables store."""

    return str(time.time_ns() // 1_000_000)
