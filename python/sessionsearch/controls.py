"""Search controls: time window, expression and boundedness kept in step with the URL."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .action_form import ActionFormSelector
from .clock import Clock, system_clock
from .clusters import Cluster, ClusterSource
from .date_formatter import ALT_INPUT_FORMATS, DATE_TIME_FORMAT, format_delta, format_millis, parse_picker_value
from .listeners import SearchListener
from .messages import CloseForm, SearchChanged, TimeUpdated
from .notifier import Notifier
from .param_sync import ParameterSynchronizer
from .query_params import (
    DATE_KEY,
    EXPRESSION_KEY,
    START_TIME_KEY,
    STOP_TIME_KEY,
    STRICTLY_KEY,
    QueryParamStore,
)
from .time_mode import SearchParamError, TimeMode, seconds_to_millis
from .time_resolver import TimeResolver

logger = logging.getLogger(__name__)


@dataclass
class SearchSettings:
    default_hours: int = 1
    all_time_lookback_hours: int = 5
    date_time_format: str = DATE_TIME_FORMAT
    alt_input_formats: Tuple[str, ...] = ALT_INPUT_FORMATS


class SearchControls:
    """State behind the search panel of the session viewer.

    Every mutation funnels through :meth:`change`, which recomputes the time
    window, rewrites the query parameters and notifies listeners. The query
    parameters are only read back in :meth:`initialize`.
    """

    def __init__(
        self,
        params: QueryParamStore,
        *,
        cluster_source: Optional[ClusterSource] = None,
        clock: Clock = system_clock,
        settings: Optional[SearchSettings] = None,
        listeners: Iterable[SearchListener] = (),
    ) -> None:
        self.params = params
        self.cluster_source = cluster_source
        self.settings = settings or SearchSettings()

        self.resolver = TimeResolver(
            clock,
            default_hours=self.settings.default_hours,
            all_time_lookback_hours=self.settings.all_time_lookback_hours,
        )
        self.synchronizer = ParameterSynchronizer(params)
        self.notifier = Notifier()
        for listener in listeners:
            self.notifier.add_listener(listener)
        self.actions = ActionFormSelector()

        self.expression: Optional[str] = None
        self.strictly = False
        self.clusters: Optional[List[Cluster]] = None
        self.cluster_error: Optional[str] = None
        self._clusters_done = threading.Event()
        self.last_request: Optional[SearchChanged] = None

    # ------------------------------------------------------------------
    def add_listener(self, listener: SearchListener) -> None:
        self.notifier.add_listener(listener)

    def remove_listener(self, listener: SearchListener) -> None:
        self.notifier.remove_listener(listener)

    # ------------------------------------------------------------------
    def initialize(self) -> Optional[SearchChanged]:
        """Read the incoming query parameters and publish the first request."""
        self._fetch_clusters()

        source = self.resolver.initialize(
            date=self.params.get(DATE_KEY),
            start=self.params.get(START_TIME_KEY),
            stop=self.params.get(STOP_TIME_KEY),
        )
        self.expression = self.params.get(EXPRESSION_KEY) or None
        self.strictly = bool(self.params.get(STRICTLY_KEY))

        logger.info(
            "Search controls initialized from %s: mode=%s strictly=%s",
            source.value,
            self.resolver.mode.to_param(),
            self.strictly,
        )
        return self.change()

    def change(self) -> Optional[SearchChanged]:
        """Recompute the window, project it onto the URL and notify listeners."""
        window = self.resolver.recompute()
        self.synchronizer.sync(self.resolver.mode, window, self.expression, self.strictly)
        request = self.notifier.publish(self.resolver.mode, window, self.expression, self.strictly)
        if request is not None:
            self.last_request = request
            logger.debug("Search changed: %s", request.to_dict())
        return request

    # ------------------------------------------------------------------
    def change_time_range(self, mode: Union[TimeMode, str, int]) -> Optional[SearchChanged]:
        """Radio selection of a relative, all-time or custom range.

        An unrecognised value is ignored and returns None without a recompute.
        """
        if not isinstance(mode, TimeMode):
            try:
                mode = TimeMode.parse(str(mode))
            except SearchParamError:
                logger.debug("Ignoring time range selection %r", mode)
                return None
        self.resolver.select_mode(mode)
        return self.change()

    def change_date(
        self,
        start_time: Optional[int] = None,
        stop_time: Optional[int] = None,
    ) -> bool:
        """Custom window edit in milliseconds; omitted bounds keep their current value.

        Returns False, leaving state and URL untouched, when a bound is unusable.
        """
        start = self.resolver.start_time if start_time is None else start_time
        stop = self.resolver.stop_time if stop_time is None else stop_time
        if not self.resolver.set_custom(start, stop):
            return False
        self.change()
        return True

    def edit_start_text(self, text: Optional[str]) -> bool:
        millis = parse_picker_value(text, self._picker_formats())
        if millis is None:
            logger.debug("Ignoring start time entry %r", text)
            return False
        return self.change_date(start_time=millis)

    def edit_stop_text(self, text: Optional[str]) -> bool:
        millis = parse_picker_value(text, self._picker_formats())
        if millis is None:
            logger.debug("Ignoring stop time entry %r", text)
            return False
        return self.change_date(stop_time=millis)

    def change_bounded(self) -> Optional[SearchChanged]:
        self.strictly = not self.strictly
        return self.change()

    def set_expression(self, expression: Optional[str]) -> Optional[SearchChanged]:
        """Notifications carry the value as given; an empty one is only dropped from the URL."""
        self.expression = expression
        return self.change()

    # ------------------------------------------------------------------
    def on_time_updated(self, message: TimeUpdated) -> bool:
        try:
            start = None if message.start is None else seconds_to_millis(message.start)
            stop = None if message.stop is None else seconds_to_millis(message.stop)
        except SearchParamError:
            logger.debug("Ignoring time update %s", message)
            return False
        return self.change_date(start_time=start, stop_time=stop)

    def on_close_form(self, message: Optional[CloseForm] = None) -> None:
        self.actions.close(message.message if message is not None else None)

    # ------------------------------------------------------------------
    @property
    def mode(self) -> Optional[TimeMode]:
        return self.resolver.mode

    @property
    def start_time(self) -> Optional[int]:
        return self.resolver.start_time

    @property
    def stop_time(self) -> Optional[int]:
        return self.resolver.stop_time

    @property
    def delta_time(self) -> Optional[int]:
        return self.resolver.delta_time

    def display_window(self) -> Optional[Tuple[str, str, str]]:
        """Start, stop and duration strings for the date pickers."""
        if self.start_time is None or self.stop_time is None or self.delta_time is None:
            return None
        fmt = self.settings.date_time_format
        try:
            start = format_millis(self.start_time, fmt)
            stop = format_millis(self.stop_time, fmt)
        except (OverflowError, ValueError, OSError):
            logger.debug("Window %s-%s is outside the displayable range", self.start_time, self.stop_time)
            return None
        return start, stop, format_delta(self.delta_time)

    def wait_for_clusters(self, timeout: Optional[float] = None) -> bool:
        """Block until the cluster fetch has settled; True when it has."""
        if self.cluster_source is None:
            return True
        return self._clusters_done.wait(timeout)

    # ------------------------------------------------------------------
    def _picker_formats(self) -> Tuple[str, ...]:
        return (self.settings.date_time_format, *self.settings.alt_input_formats)

    def _fetch_clusters(self) -> None:
        if self.cluster_source is None:
            return
        future = self.cluster_source.get_clusters()
        future.add_done_callback(self._on_clusters_loaded)

    def _on_clusters_loaded(self, future: "Future[List[Cluster]]") -> None:
        try:
            clusters = future.result()
        except Exception as exc:
            logger.exception("Failed to load remote clusters")
            self.clusters = []
            self.cluster_error = str(exc)
        else:
            self.clusters = list(clusters)
            self.cluster_error = None
            logger.info("Loaded %d remote cluster(s)", len(self.clusters))
        finally:
            self._clusters_done.set()


__all__ = ["SearchControls", "SearchSettings"]
