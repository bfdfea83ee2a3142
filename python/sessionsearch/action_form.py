"""Which bulk-action sub-form is open in the search panel."""

from __future__ import annotations

import logging
from enum import Enum, unique
from typing import Optional

from .clusters import Cluster

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE_TYPE = "success"


@unique
class ActionForm(Enum):
    NONE = "none"
    ADD_TAGS = "add:tags"
    REMOVE_TAGS = "remove:tags"
    EXPORT_PCAP = "export:pcap"
    EXPORT_CSV = "export:csv"
    SCRUB_PCAP = "scrub:pcap"
    DELETE_SESSION = "delete:session"
    SEND_SESSION = "send:session"


@unique
class ItemScope(Enum):
    """Sessions a bulk action applies to."""

    OPEN = "open"
    VISIBLE = "visible"
    MATCHING = "matching"


class ActionFormSelector:
    def __init__(self) -> None:
        self.form = ActionForm.NONE
        self.cluster: Optional[Cluster] = None
        self.item_scope = ItemScope.VISIBLE
        self.message: Optional[str] = None
        self.message_type: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.form is not ActionForm.NONE

    # ------------------------------------------------------------------
    def add_tags(self) -> None:
        self._open(ActionForm.ADD_TAGS)

    def remove_tags(self) -> None:
        self._open(ActionForm.REMOVE_TAGS)

    def export_pcap(self) -> None:
        self._open(ActionForm.EXPORT_PCAP)

    def export_csv(self) -> None:
        self._open(ActionForm.EXPORT_CSV)

    def scrub_pcap(self) -> None:
        self._open(ActionForm.SCRUB_PCAP)

    def delete_session(self) -> None:
        self._open(ActionForm.DELETE_SESSION)

    def send_session(self, cluster: Cluster) -> None:
        self._open(ActionForm.SEND_SESSION)
        self.cluster = cluster

    def set_item_scope(self, scope: ItemScope) -> None:
        self.item_scope = ItemScope(scope)

    # ------------------------------------------------------------------
    def close(self, message: Optional[str] = None) -> None:
        """Reset to no form, keeping an optional status message for display."""
        logger.debug("Closing action form %s", self.form.value)
        self.form = ActionForm.NONE
        if message:
            self.message = message
            self.message_type = SUCCESS_MESSAGE_TYPE

    def _open(self, form: ActionForm) -> None:
        logger.debug("Opening action form %s", form.value)
        self.form = form


__all__ = ["ActionForm", "ActionFormSelector", "ItemScope", "SUCCESS_MESSAGE_TYPE"]
