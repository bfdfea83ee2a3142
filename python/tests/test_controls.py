from __future__ import annotations

from concurrent.futures import Future

from sessionsearch import (
    HOUR_MS,
    CloseForm,
    Cluster,
    FixedClock,
    QueryParams,
    SearchChanged,
    SearchControls,
    SearchIssued,
    StaticClusterSource,
    TimeMode,
    TimeUpdated,
)
from sessionsearch.action_form import ActionForm
from sessionsearch.date_formatter import parse_picker_value

NOW = 1_700_000_000_000


class RecordingListener:
    def __init__(self) -> None:
        self.events = []

    def on_search_changed(self, message: SearchChanged) -> None:
        self.events.append(message)

    def on_search_issued(self, message: SearchIssued) -> None:
        self.events.append(message)

    @property
    def changed(self):
        return [event for event in self.events if isinstance(event, SearchChanged)]


class FailingClusterSource:
    def get_clusters(self):
        future = Future()
        future.set_exception(ConnectionError("config service unavailable"))
        return future


def _controls(query: str = "", **kwargs):
    params = QueryParams.from_query_string(query)
    clock = FixedClock(NOW)
    listener = RecordingListener()
    controls = SearchControls(params, clock=clock, listeners=[listener], **kwargs)
    return controls, params, clock, listener


def _time_keys(params):
    return {key for key in ("date", "startTime", "stopTime") if key in params}


def test_default_initialization_writes_one_hour_mode():
    controls, params, _, listener = _controls()
    request = controls.initialize()

    assert controls.mode == TimeMode.relative(1)
    assert params.as_dict() == {"date": "1"}
    assert controls.delta_time == HOUR_MS
    assert request == SearchChanged(
        expression=None,
        strictly=False,
        start_time=str((NOW - HOUR_MS) // 1000),
        stop_time=str(NOW // 1000),
    )
    assert listener.events == [request, SearchIssued(expression=None)]


def test_start_stop_params_select_custom_window():
    controls, params, _, listener = _controls("startTime=1000&stopTime=2000")
    controls.initialize()

    assert controls.mode.is_custom
    assert controls.start_time == 1_000_000
    assert controls.stop_time == 2_000_000
    assert "date" not in params
    assert params.get("startTime") == "1000"
    assert params.get("stopTime") == "2000"
    assert listener.changed[-1].to_dict() == {
        "expression": None,
        "strictly": False,
        "startTime": "1000",
        "stopTime": "2000",
    }


def test_unparseable_start_stop_fall_back_to_one_hour():
    controls, params, _, _ = _controls("startTime=abc&stopTime=abc")
    controls.initialize()

    assert controls.mode == TimeMode.relative(1)
    assert params.get("date") == "1"
    assert _time_keys(params) == {"date"}


def test_all_time_param_clears_time_pair_and_emits_sentinel():
    controls, params, _, listener = _controls("date=-1&startTime=1000&stopTime=2000")
    controls.initialize()

    assert _time_keys(params) == {"date"}
    assert params.get("date") == "-1"
    assert controls.delta_time == 5 * HOUR_MS
    assert listener.changed[-1].to_dict() == {"expression": None, "strictly": False, "date": -1}


def test_custom_mode_without_bounds_does_not_notify():
    controls, params, _, listener = _controls("date=0")
    assert controls.initialize() is None

    assert listener.events == []
    assert controls.last_request is None
    assert params.get("date") == "0"


def test_expression_and_strictly_are_read_from_params():
    controls, params, _, listener = _controls("date=2&expression=ip.dst%3D%3D10.0.0.1&strictly=true")
    controls.initialize()

    assert controls.expression == "ip.dst==10.0.0.1"
    assert controls.strictly is True
    assert params.get("strictly") == "true"
    changed, issued = listener.events
    assert changed.expression == issued.expression == "ip.dst==10.0.0.1"
    assert changed.strictly is True


def test_toggling_bounded_twice_restores_state():
    controls, params, _, _ = _controls()
    controls.initialize()

    controls.change_bounded()
    assert controls.strictly is True
    assert params.get("strictly") == "true"

    controls.change_bounded()
    assert controls.strictly is False
    assert "strictly" not in params


def test_empty_expression_is_absent_from_params_but_sent_as_given():
    controls, params, _, listener = _controls("expression=tls")
    controls.initialize()

    controls.set_expression("")
    assert "expression" not in params
    changed, issued = listener.events[-2:]
    assert changed.expression == ""
    assert issued == SearchIssued(expression="")


def test_relative_window_is_resampled_on_every_change():
    controls, _, clock, listener = _controls("date=6")
    controls.initialize()

    clock.advance(30 * 60_000)
    controls.change()
    assert controls.stop_time == NOW + 30 * 60_000
    assert controls.stop_time - controls.start_time == 6 * HOUR_MS
    assert len(listener.changed) == 2


def test_every_change_emits_changed_then_issued_without_dedup():
    controls, _, _, listener = _controls()
    controls.initialize()
    controls.change()
    controls.change()

    kinds = [type(event) for event in listener.events]
    assert kinds == [SearchChanged, SearchIssued] * 3


def test_switching_between_modes_keeps_one_time_encoding():
    controls, params, _, _ = _controls()
    controls.initialize()

    controls.change_date(start_time=1_000_000, stop_time=2_000_000)
    assert _time_keys(params) == {"startTime", "stopTime"}

    controls.change_time_range("-1")
    assert _time_keys(params) == {"date"}
    assert controls.last_request.is_all_time

    controls.change_time_range(TimeMode.relative(24))
    assert params.get("date") == "24"
    assert _time_keys(params) == {"date"}


def test_custom_edit_with_stop_before_start_is_accepted():
    controls, _, _, _ = _controls()
    controls.initialize()

    assert controls.change_date(start_time=5_000_000, stop_time=2_000_000)
    assert controls.delta_time == -3_000_000


def test_invalid_custom_edit_is_a_silent_no_op():
    controls, params, _, listener = _controls()
    controls.initialize()
    writes_before = len(params.writes)
    events_before = len(listener.events)

    assert controls.change_date(start_time=0) is False
    assert controls.change_date(stop_time=float("nan")) is False

    assert controls.mode == TimeMode.relative(1)
    assert len(params.writes) == writes_before
    assert len(listener.events) == events_before


def test_time_updated_overwrites_present_bounds_only():
    controls, params, _, _ = _controls("startTime=1000&stopTime=2000")
    controls.initialize()

    assert controls.on_time_updated(TimeUpdated(stop=3000))
    assert controls.start_time == 1_000_000
    assert controls.stop_time == 3_000_000
    assert params.get("stopTime") == "3000"

    assert controls.on_time_updated(TimeUpdated(start="1500", stop="2500"))
    assert (controls.start_time, controls.stop_time) == (1_500_000, 2_500_000)

    assert controls.on_time_updated(TimeUpdated(start="abc")) is False
    assert controls.start_time == 1_500_000


def test_time_updated_switches_relative_mode_to_custom():
    controls, params, _, _ = _controls("date=4")
    controls.initialize()

    controls.on_time_updated(TimeUpdated(start=1000, stop=2000))
    assert controls.mode.is_custom
    assert "date" not in params


def test_picker_text_edits():
    controls, _, _, _ = _controls("startTime=1000&stopTime=2000")
    controls.initialize()

    assert controls.edit_start_text("not a date") is False
    assert controls.start_time == 1_000_000

    assert controls.edit_stop_text("2024/03/01 12:00:00")
    assert controls.stop_time == parse_picker_value("2024/03/01 12:00:00")


def test_display_window_formats_delta():
    controls, _, _, _ = _controls("date=1")
    controls.initialize()
    start, stop, delta = controls.display_window()
    assert delta == "01:00:00"
    assert start and stop


def test_clusters_are_loaded_from_source():
    clusters = [Cluster("east", "https://east.example:8005"), Cluster("west")]
    controls, _, _, _ = _controls(cluster_source=StaticClusterSource(clusters))
    assert controls.clusters is None

    controls.initialize()
    assert controls.clusters == clusters
    assert controls.cluster_error is None


def test_cluster_failure_leaves_empty_list_and_keeps_searching():
    controls, _, _, listener = _controls(cluster_source=FailingClusterSource())
    controls.initialize()

    assert controls.clusters == []
    assert "unavailable" in controls.cluster_error
    assert len(listener.changed) == 1


def test_listener_errors_do_not_block_other_listeners():
    class Broken:
        def on_search_changed(self, message):
            raise RuntimeError("boom")

        def on_search_issued(self, message):
            raise RuntimeError("boom")

    listener = RecordingListener()
    controls = SearchControls(QueryParams(), clock=FixedClock(NOW), listeners=[Broken(), listener])
    controls.initialize()
    assert len(listener.events) == 2


def test_close_form_notification_resets_action_form():
    controls, _, _, _ = _controls()
    controls.initialize()

    controls.actions.send_session(Cluster("east"))
    assert controls.actions.form is ActionForm.SEND_SESSION

    controls.on_close_form(CloseForm(message="Sent 12 sessions"))
    assert controls.actions.form is ActionForm.NONE
    assert controls.actions.message == "Sent 12 sessions"
    assert controls.actions.message_type == "success"


def test_unknown_radio_value_is_ignored():
    controls, params, _, listener = _controls("date=6")
    controls.initialize()
    writes_before = len(params.writes)

    assert controls.change_time_range("fortnight") is None
    assert controls.mode == TimeMode.relative(6)
    assert len(params.writes) == writes_before
    assert len(listener.events) == 2


def test_display_window_tolerates_out_of_range_bounds():
    controls, _, _, listener = _controls("startTime=1&stopTime=1e12")
    controls.initialize()

    assert controls.stop_time == 1_000_000_000_000_000
    assert listener.changed[-1].stop_time == "1000000000000"
    assert controls.display_window() is None


def test_wait_for_clusters_reports_settled_fetch():
    controls, _, _, _ = _controls(cluster_source=FailingClusterSource())
    assert controls.wait_for_clusters(timeout=0) is False

    controls.initialize()
    assert controls.wait_for_clusters(timeout=1) is True
    assert controls.clusters == []
