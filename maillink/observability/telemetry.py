"""
In-process telemetry helpers for link resolution.

Nothing is shipped to an external metrics backend. Events go to the log and
counters live in memory, keyed by fallback tier.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("maillink.telemetry")

_COUNTERS: dict[str, int] = {}


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event. Caller must keep subjects and addresses out of fields.

    Side Effects:
        - Writes to logger (info level)
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Increment an in-memory counter and emit a debug log.

    Side Effects:
        - Modifies _COUNTERS dict (in-memory state)
        - Writes to logger (debug level)
    """
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    """Current value of a counter (0 if never incremented)."""
    return _COUNTERS.get(name, 0)


def get_counters() -> dict[str, int]:
    return dict(_COUNTERS)


def reset_counters() -> None:
    """
    Clear all counters (useful for tests).

    Side Effects:
        - Clears _COUNTERS dict
    """
    _COUNTERS.clear()
