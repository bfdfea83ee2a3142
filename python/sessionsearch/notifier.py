"""Delivery of resolved search requests to registered listeners."""

from __future__ import annotations

import logging
from typing import List, Optional

from .listeners import SearchListener
from .messages import ALL_TIME_DATE, SearchChanged, SearchIssued
from .time_mode import TimeMode, millis_to_seconds_param
from .time_resolver import TimeWindow

logger = logging.getLogger(__name__)


def build_search_changed(
    mode: TimeMode,
    window: TimeWindow,
    expression: Optional[str],
    strictly: bool,
) -> SearchChanged:
    # all-time searches go out as the sentinel so paging is not tied to a moving window
    if mode.is_all_time:
        return SearchChanged(expression=expression, strictly=strictly, date=ALL_TIME_DATE)
    return SearchChanged(
        expression=expression,
        strictly=strictly,
        start_time=millis_to_seconds_param(window.start_time),
        stop_time=millis_to_seconds_param(window.stop_time),
    )


class Notifier:
    """Sends ``SearchChanged`` followed by ``SearchIssued`` on every publish."""

    def __init__(self) -> None:
        self._listeners: List[SearchListener] = []

    def add_listener(self, listener: SearchListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SearchListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(
        self,
        mode: Optional[TimeMode],
        window: TimeWindow,
        expression: Optional[str],
        strictly: bool,
    ) -> Optional[SearchChanged]:
        """Notify listeners; returns None without notifying when the window is unresolved."""
        if mode is None or not window.is_defined:
            return None

        changed = build_search_changed(mode, window, expression, strictly)
        issued = SearchIssued(expression=expression)

        for listener in list(self._listeners):
            self._deliver(listener.on_search_changed, changed)
        for listener in list(self._listeners):
            self._deliver(listener.on_search_issued, issued)
        return changed

    @staticmethod
    def _deliver(handler, message) -> None:
        try:
            handler(message)
        except Exception:
            logger.exception("Search listener raised an exception")


__all__ = ["Notifier", "build_search_changed"]
