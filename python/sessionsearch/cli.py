"""Command-line entry point resolving a search query string."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .clock import FixedClock, system_clock
from .clusters import JsonClusterSource
from .controls import SearchControls, SearchSettings
from .query_params import QueryParams
from .time_mode import MS_PER_SECOND

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve session search parameters into a canonical search request.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Address-bar query string, e.g. 'date=24&expression=port%%3D%%3D443'.",
    )
    parser.add_argument(
        "--now",
        type=float,
        metavar="SECONDS",
        help="Pin the current time (epoch seconds) instead of using the system clock.",
    )
    parser.add_argument(
        "--expression",
        metavar="TEXT",
        help="Replace the search expression after initialization.",
    )
    parser.add_argument(
        "--toggle-strictly",
        action="store_true",
        help="Flip the bounded-results flag after initialization.",
    )
    parser.add_argument(
        "--default-hours",
        type=int,
        default=1,
        metavar="HOURS",
        help="Relative window used when the query has no usable time (default: 1).",
    )
    parser.add_argument(
        "--clusters",
        metavar="FILE",
        help="JSON file listing remote clusters.",
    )
    parser.add_argument(
        "--cluster-timeout",
        type=float,
        default=10.0,
        metavar="SECONDS",
        help="How long to wait for the cluster file to load (default: 10).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level for diagnostic output.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.default_hours <= 0:
        parser.error("--default-hours must be greater than 0.")

    clock = FixedClock(int(args.now * MS_PER_SECOND)) if args.now is not None else system_clock
    params = QueryParams.from_query_string(args.query)
    controls = SearchControls(
        params,
        cluster_source=JsonClusterSource(args.clusters) if args.clusters else None,
        clock=clock,
        settings=SearchSettings(default_hours=args.default_hours),
    )

    controls.initialize()
    if args.expression is not None:
        controls.set_expression(args.expression)
    if args.toggle_strictly:
        controls.change_bounded()

    request = controls.last_request
    if request is None:
        logger.error("No search window could be resolved from %r", args.query)
        print(params.to_query_string())
        return 1

    print(json.dumps(request.to_dict()))
    print(params.to_query_string())

    if args.clusters:
        if not controls.wait_for_clusters(args.cluster_timeout):
            logger.error("Timed out loading clusters from %s", args.clusters)
            return 1
        print(json.dumps(_cluster_report(controls)))
        if controls.cluster_error is not None:
            return 1
    return 0


def _cluster_report(controls: SearchControls) -> dict:
    report = {"clusters": [cluster.to_dict() for cluster in controls.clusters or []]}
    if controls.cluster_error is not None:
        report["error"] = controls.cluster_error
    return report


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
