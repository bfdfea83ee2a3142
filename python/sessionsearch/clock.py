"""Millisecond clocks used to anchor relative search windows."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class FixedClock:
    """Clock that only moves when told to."""

    __slots__ = ("_now",)

    def __init__(self, now_ms: int = 0) -> None:
        self._now = int(now_ms)

    def __call__(self) -> int:
        return self._now

    def set(self, now_ms: int) -> None:
        self._now = int(now_ms)

    def advance(self, millis: int) -> int:
        self._now += int(millis)
        return self._now


__all__ = ["Clock", "FixedClock", "system_clock"]
