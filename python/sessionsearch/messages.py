"""Typed notifications exchanged between the search controls and sibling regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

ALL_TIME_DATE = -1


@dataclass(frozen=True)
class SearchChanged:
    """Resolved search request for the component that runs the query.

    Either ``date`` is the all-time sentinel, or ``start_time``/``stop_time``
    hold whole seconds as strings.
    """

    expression: Optional[str]
    strictly: bool
    date: Optional[int] = None
    start_time: Optional[str] = None
    stop_time: Optional[str] = None

    @property
    def is_all_time(self) -> bool:
        return self.date == ALL_TIME_DATE

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"expression": self.expression, "strictly": self.strictly}
        if self.is_all_time:
            payload["date"] = ALL_TIME_DATE
        else:
            payload["startTime"] = self.start_time
            payload["stopTime"] = self.stop_time
        return payload


@dataclass(frozen=True)
class SearchIssued:
    """Filter text only, broadcast to regions that ignore the time window."""

    expression: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"expression": self.expression}


@dataclass(frozen=True)
class TimeUpdated:
    """Inbound request to move the custom window; bounds are in seconds."""

    start: Optional[float] = None
    stop: Optional[float] = None


@dataclass(frozen=True)
class CloseForm:
    """Inbound request to close the open action form."""

    message: Optional[str] = None


__all__ = ["ALL_TIME_DATE", "CloseForm", "SearchChanged", "SearchIssued", "TimeUpdated"]
