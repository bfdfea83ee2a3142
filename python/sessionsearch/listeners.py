"""Listener interfaces for search notifications."""

from __future__ import annotations

from typing import Protocol

from .messages import SearchChanged, SearchIssued


class SearchListener(Protocol):
    def on_search_changed(self, message: SearchChanged) -> None:  # pragma: no cover - protocol definition
        ...

    def on_search_issued(self, message: SearchIssued) -> None:  # pragma: no cover - protocol definition
        ...


__all__ = ["SearchListener"]
