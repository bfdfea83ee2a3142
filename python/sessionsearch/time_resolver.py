"""Resolution of the selected time mode into a concrete search window."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from .clock import Clock, system_clock
from .time_mode import HOUR_MS, SearchParamError, TimeMode, is_valid_millis, seconds_to_millis

logger = logging.getLogger(__name__)


@dataclass
class TimeWindow:
    """Start/stop pair in epoch milliseconds."""

    start_time: Optional[int] = None
    stop_time: Optional[int] = None

    @property
    def is_defined(self) -> bool:
        return self.start_time is not None and self.stop_time is not None

    @property
    def delta(self) -> Optional[int]:
        if not self.is_defined:
            return None
        return self.stop_time - self.start_time


@unique
class InitSource(Enum):
    """Which initialization rule produced the starting time mode."""

    MODE_PARAM = "mode_param"
    TIME_PARAMS = "time_params"
    FALLBACK = "fallback"
    DEFAULT = "default"


class TimeResolver:
    def __init__(
        self,
        clock: Clock = system_clock,
        *,
        default_hours: int = 1,
        all_time_lookback_hours: int = 5,
    ) -> None:
        self.clock = clock
        self.default_hours = default_hours
        self.all_time_lookback_hours = all_time_lookback_hours
        self.mode: Optional[TimeMode] = None
        self.window = TimeWindow()
        self.delta_time: Optional[int] = None

    # ------------------------------------------------------------------
    def initialize(
        self,
        date: Optional[str] = None,
        start: Optional[str] = None,
        stop: Optional[str] = None,
    ) -> InitSource:
        """Pick the starting mode from incoming ``date``/``startTime``/``stopTime`` values."""
        self.window = TimeWindow()
        self.delta_time = None

        if date:
            try:
                self.mode = TimeMode.parse(date)
            except SearchParamError:
                logger.warning("Ignoring unrecognised time mode %r", date)
                self.mode = TimeMode.relative(self.default_hours)
                return InitSource.FALLBACK
            if self.mode.is_all_time:
                self._apply_all_time(self.clock())
            return InitSource.MODE_PARAM

        if start or stop:
            try:
                start_ms = seconds_to_millis(start)
                stop_ms = seconds_to_millis(stop)
            except SearchParamError:
                logger.warning("Ignoring unparseable time bounds start=%r stop=%r", start, stop)
                self.mode = TimeMode.relative(self.default_hours)
                return InitSource.FALLBACK
            self.mode = TimeMode.custom()
            self.window = TimeWindow(start_ms, stop_ms)
            return InitSource.TIME_PARAMS

        self.mode = TimeMode.relative(self.default_hours)
        return InitSource.DEFAULT

    # ------------------------------------------------------------------
    def select_mode(self, mode: TimeMode) -> None:
        self.mode = mode

    def set_custom(self, start_time: Optional[int], stop_time: Optional[int]) -> bool:
        """Adopt explicit bounds; returns False and changes nothing when either is unusable.

        Bounds are not ordered: a stop before the start is kept as given.
        """
        if not (is_valid_millis(start_time) and is_valid_millis(stop_time)):
            logger.debug("Discarding custom time edit start=%r stop=%r", start_time, stop_time)
            return False
        self.mode = TimeMode.custom()
        self.window = TimeWindow(int(start_time), int(stop_time))
        return True

    # ------------------------------------------------------------------
    def recompute(self) -> TimeWindow:
        """Refresh the window for the current mode, sampling the clock once."""
        mode = self.mode
        if mode is not None and mode.is_relative:
            now = self.clock()
            self.window = TimeWindow(now - mode.hours * HOUR_MS, now)
        elif mode is not None and mode.is_all_time:
            self._apply_all_time(self.clock())

        self.delta_time = self.window.delta
        return self.window

    @property
    def start_time(self) -> Optional[int]:
        return self.window.start_time

    @property
    def stop_time(self) -> Optional[int]:
        return self.window.stop_time

    def _apply_all_time(self, now: int) -> None:
        self.window = TimeWindow(now - self.all_time_lookback_hours * HOUR_MS, now)


__all__ = ["InitSource", "TimeResolver", "TimeWindow"]
