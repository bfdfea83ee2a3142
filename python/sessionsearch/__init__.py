"""Search controls for the network-session viewer."""

from .action_form import ActionForm, ActionFormSelector, ItemScope
from .clock import Clock, FixedClock, system_clock
from .clusters import Cluster, JsonClusterSource, StaticClusterSource
from .controls import SearchControls, SearchSettings
from .messages import CloseForm, SearchChanged, SearchIssued, TimeUpdated
from .notifier import Notifier
from .param_sync import ParameterSynchronizer
from .query_params import QueryParams
from .time_mode import HOUR_MS, SearchParamError, TimeMode, TimeModeKind
from .time_resolver import InitSource, TimeResolver, TimeWindow

__all__ = [
    "ActionForm",
    "ActionFormSelector",
    "ItemScope",
    "Clock",
    "FixedClock",
    "system_clock",
    "Cluster",
    "JsonClusterSource",
    "StaticClusterSource",
    "SearchControls",
    "SearchSettings",
    "CloseForm",
    "SearchChanged",
    "SearchIssued",
    "TimeUpdated",
    "Notifier",
    "ParameterSynchronizer",
    "QueryParams",
    "HOUR_MS",
    "SearchParamError",
    "TimeMode",
    "TimeModeKind",
    "InitSource",
    "TimeResolver",
    "TimeWindow",
]
