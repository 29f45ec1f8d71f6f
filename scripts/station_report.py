"""Headless station report against the GIOŚ API (with offline snapshot fallback).

Examples:
    python scripts/station_report.py --list
    python scripts/station_report.py --station 114 --metric PM10 --start 2024-05-01 --end 2024-05-03
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from airquality_analysis.analysis import format_summary
from airquality_analysis.config import load_service_config
from airquality_analysis.data_access.service import OFFLINE_NOTICE, DataService
from airquality_analysis.workflows import build_station_listing, build_station_report


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("--config", type=Path, help="Service config YAML (default: config/service.yaml)")
    p.add_argument("--list", action="store_true", help="List stations and exit")
    p.add_argument("--station", type=int, help="Station id to analyze")
    p.add_argument("--metric", help="Metric name, e.g. PM10 (default: first available)")
    p.add_argument("--start", default="", help="Inclusive lower bound, e.g. '2024-05-01'")
    p.add_argument("--end", default="", help="Inclusive upper bound, e.g. '2024-05-03 23:59'")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    service = DataService.from_config(load_service_config(args.config))

    if args.list or args.station is None:
        listing = build_station_listing(service)
        if listing["used_fallback"]:
            print(f"[warn] {OFFLINE_NOTICE}")
        for station in listing["stations"]:
            print(f"{station.id:>6}  {station.label}")
        if listing["cached_station_ids"]:
            print("No cached station list; stations with cached measurements:")
            for station_id in listing["cached_station_ids"]:
                print(f"{station_id:>6}")
        return 0

    report = build_station_report(
        service, args.station, metric=args.metric, start=args.start, end=args.end
    )
    if report["stations_fallback"] or report["measurements_fallback"]:
        print(f"[warn] {OFFLINE_NOTICE}")
    if report["station"] is not None:
        print(f"Station: {report['station'].label}")
    print(f"Metrics: {', '.join(report['metrics']) or '-'}")
    if report["summary"] is None:
        print(report["message"])
        return 1
    print(format_summary(report["summary"]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
