"""Projection of resolved search state onto the query string."""

from __future__ import annotations

from typing import Optional

from .query_params import (
    DATE_KEY,
    EXPRESSION_KEY,
    START_TIME_KEY,
    STOP_TIME_KEY,
    STRICTLY_KEY,
    QueryParamStore,
)
from .time_mode import TimeMode, millis_to_seconds_param
from .time_resolver import TimeWindow


class ParameterSynchronizer:
    """Writes the minimal query-string encoding of the current search.

    Only one time encoding is ever left in place: either ``date`` or the
    ``startTime``/``stopTime`` pair. The stale encoding is cleared before the
    new one is written.
    """

    def __init__(self, params: QueryParamStore) -> None:
        self.params = params

    def sync(
        self,
        mode: Optional[TimeMode],
        window: TimeWindow,
        expression: Optional[str],
        strictly: bool,
    ) -> None:
        self.sync_expression(expression)
        self.sync_strictly(strictly)
        if mode is not None:
            self.sync_time(mode, window)

    def sync_expression(self, expression: Optional[str]) -> None:
        self.params.set(EXPRESSION_KEY, expression if expression else None)

    def sync_strictly(self, strictly: bool) -> None:
        self.params.set(STRICTLY_KEY, "true" if strictly else None)

    def sync_time(self, mode: TimeMode, window: TimeWindow) -> None:
        if mode.is_custom and window.is_defined:
            self.params.set(DATE_KEY, None)
            self.params.set(STOP_TIME_KEY, millis_to_seconds_param(window.stop_time))
            self.params.set(START_TIME_KEY, millis_to_seconds_param(window.start_time))
            return

        self.params.set(STOP_TIME_KEY, None)
        self.params.set(START_TIME_KEY, None)
        # custom mode without bounds keeps the sentinel so a time encoding stays present
        self.params.set(DATE_KEY, mode.to_param())


__all__ = ["ParameterSynchronizer"]
