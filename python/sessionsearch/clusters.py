"""Remote cluster descriptors and the sources that supply them."""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Protocol, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cluster:
    name: str
    url: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Cluster":
        return cls(name=str(data["name"]), url=str(data.get("url", "")))


class ClusterSource(Protocol):
    def get_clusters(self) -> "Future[List[Cluster]]":  # pragma: no cover - protocol definition
        ...


class StaticClusterSource:
    """Already-known clusters, returned as a completed future."""

    def __init__(self, clusters: Iterable[Cluster] = ()) -> None:
        self._clusters = list(clusters)

    def get_clusters(self) -> "Future[List[Cluster]]":
        future: "Future[List[Cluster]]" = Future()
        future.set_result(list(self._clusters))
        return future


class JsonClusterSource:
    """Loads clusters from a JSON file on a daemon worker thread.

    The file holds either a list of ``{"name", "url"}`` objects or a mapping
    of name to url.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def get_clusters(self) -> "Future[List[Cluster]]":
        future: "Future[List[Cluster]]" = Future()
        thread = threading.Thread(target=self._load_into, args=(future,), daemon=True)
        thread.start()
        return future

    def load(self) -> List[Cluster]:
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            return [Cluster(name=str(name), url=str(url)) for name, url in raw.items()]
        return [Cluster.from_dict(item) for item in raw]

    def _load_into(self, future: "Future[List[Cluster]]") -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            clusters = self.load()
        except Exception as exc:
            future.set_exception(exc)
            return
        logger.debug("Loaded %d clusters from %s", len(clusters), self.path)
        future.set_result(clusters)


__all__ = ["Cluster", "ClusterSource", "JsonClusterSource", "StaticClusterSource"]
