"""Qt-aware bridge re-emitting search notifications as signals."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from ..controls import SearchControls
from ..messages import CloseForm, SearchChanged, SearchIssued, TimeUpdated

logger = logging.getLogger(__name__)


class QtSearchBridge(QObject):
    """Connects :class:`SearchControls` to sibling widgets through Qt signals."""

    search_changed = Signal(object)
    search_issued = Signal(object)
    form_closed = Signal(str)

    def __init__(self, controls: SearchControls, parent=None) -> None:
        super().__init__(parent)
        self._controls = controls
        controls.add_listener(self)

    # ------------------------------------------------------------------
    def on_search_changed(self, message: SearchChanged) -> None:
        self.search_changed.emit(message)

    def on_search_issued(self, message: SearchIssued) -> None:
        self.search_issued.emit(message)

    # ------------------------------------------------------------------
    @Slot(object, object)
    def update_time(self, start: Optional[float] = None, stop: Optional[float] = None) -> bool:
        """Inbound time update in seconds."""
        return self._controls.on_time_updated(TimeUpdated(start=start, stop=stop))

    @Slot(object)
    def close_form(self, message: Optional[str] = None) -> None:
        self._controls.on_close_form(CloseForm(message=message))
        self.form_closed.emit(message or "")

    def detach(self) -> None:
        self._controls.remove_listener(self)
        logger.debug("Search bridge detached")


__all__ = ["QtSearchBridge"]
