"""In-memory address-bar query parameters."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Protocol, Tuple
from urllib.parse import parse_qsl, urlencode

DATE_KEY = "date"
START_TIME_KEY = "startTime"
STOP_TIME_KEY = "stopTime"
EXPRESSION_KEY = "expression"
STRICTLY_KEY = "strictly"


class QueryParamStore(Protocol):
    def get(self, key: str) -> Optional[str]:  # pragma: no cover - protocol definition
        ...

    def set(self, key: str, value: Optional[str]) -> None:  # pragma: no cover - protocol definition
        ...


class QueryParams:
    """Ordered query-string parameters where writing ``None`` deletes a key.

    Every write is appended to :attr:`writes` so callers can inspect the
    order in which keys were touched.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self.writes: List[Tuple[str, Optional[str]]] = []

    @classmethod
    def from_query_string(cls, query: str) -> "QueryParams":
        if query.startswith("?"):
            query = query[1:]
        values: Dict[str, str] = {}
        for key, value in parse_qsl(query, keep_blank_values=True):
            values.setdefault(key, value)
        return cls(values)

    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: Optional[str]) -> None:
        self.writes.append((key, value))
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = str(value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def to_query_string(self) -> str:
        return urlencode(list(self._values.items()))


__all__ = [
    "DATE_KEY",
    "EXPRESSION_KEY",
    "QueryParamStore",
    "QueryParams",
    "START_TIME_KEY",
    "STOP_TIME_KEY",
    "STRICTLY_KEY",
]
