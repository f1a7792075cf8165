"""Logical clock for the registry.

Issuance timestamps and the graduation-year bound both read from a
``Clock``.  Readings are integer seconds and never decrease.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol

EPOCH_YEAR = 1970
SECONDS_PER_YEAR = 31_536_000  # 365 days


def approximate_year(seconds: int) -> int:
    """Return the calendar year for ``seconds`` using 365-day years.

    No leap-year correction: near a year boundary this may be a day or
    so ahead of the real calendar.  Callers rely on this exact formula.
    """
    return EPOCH_YEAR + seconds // SECONDS_PER_YEAR


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Wall-clock seconds, clamped so a reading never goes backwards."""

    def __init__(self, source: Callable[[], float] = time.time) -> None:
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(self._source()))
            return self._last


class FixedClock:
    """Manually driven clock for tests and replays."""

    def __init__(self, start: int) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self._now += seconds

    def set(self, value: int) -> None:
        if value < self._now:
            raise ValueError("clock cannot move backwards")
        self._now = value
