"""Command line front-end for the route-and-fare engine.

Usage:
    python -m subway route 1 3 --age 21
    python -m subway add-section 1 3 6 4
    python -m subway remove-section 1 2

Edits are applied to the network loaded from the CSV data directory for
the duration of the command; the files are not rewritten.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import SubwayError
from .domain.sections import Sections
from .logging_setup import configure_logging
from .ports.repository import StationRepositoryPort
from .services import PathService, SectionService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subway", description="Shortest subway routes and their fares."
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding stations.csv, lines.csv and sections.csv",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    route = commands.add_parser("route", help="Find the shortest route and its fare")
    route.add_argument("source", type=int, help="Departure station id")
    route.add_argument("target", type=int, help="Arrival station id")
    route.add_argument("--age", type=int, required=True, help="Passenger age")

    add = commands.add_parser("add-section", help="Add a section to a line")
    add.add_argument("line", type=int)
    add.add_argument("up", type=int, help="Up station id")
    add.add_argument("down", type=int, help="Down station id")
    add.add_argument("distance", type=int)

    remove = commands.add_parser("remove-section", help="Take a station off a line")
    remove.add_argument("line", type=int)
    remove.add_argument("station", type=int)

    return parser


def _config_for(data_dir: Optional[Path]) -> AppConfig:
    config = get_config()
    if data_dir is None:
        return config
    graph = config.graph.model_copy(update={"data_dir": data_dir})
    return config.model_copy(update={"graph": graph})


def _describe(container: Container, sections: Sections) -> str:
    stations = container.resolve(StationRepositoryPort)
    names = []
    for station_id in sections.station_ids():
        station = stations.find_by_id(station_id)
        names.append(station.name if station else str(station_id))
    return " -> ".join(names)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = _config_for(args.data_dir)
    configure_logging(config.observability)

    try:
        container = Container.create_default(config)
        if args.command == "route":
            paths = container.resolve(PathService)
            route = paths.find_route(args.source, args.target, args.age)
            print(paths.format_result(route))
        elif args.command == "add-section":
            sections = container.resolve(SectionService).add_section(
                args.line, args.up, args.down, args.distance
            )
            print(_describe(container, sections))
        else:
            sections = container.resolve(SectionService).remove_section(
                args.line, args.station
            )
            print(_describe(container, sections))
    except SubwayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
