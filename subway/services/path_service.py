"""Path service - Route query orchestrator.

Answers "how do I get from A to B and what do I pay" from a snapshot of
the network read once per query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import FareConfig, get_config
from ..domain.errors import StationNotFoundError, UnreachablePathError
from ..domain.fare import FareCalculator
from ..domain.models import AgeGroup, RouteResult
from ..graph.builder import build_graph
from ..ports.graph import RouteSolverPort
from ..ports.repository import (
    LineRepositoryPort,
    SectionRepositoryPort,
    StationRepositoryPort,
)


@dataclass
class PathService:
    """Service answering route and fare queries.

    This service orchestrates one query:
    1. Age validation
    2. Station lookup
    3. Graph construction
    4. Route computation
    5. Fare calculation

    Attributes:
        station_repository: Reads stations
        section_repository: Reads sections
        line_repository: Reads lines and their extra fares
        route_solver: Computes shortest paths
        fare_config: Fare table
    """

    station_repository: StationRepositoryPort
    section_repository: SectionRepositoryPort
    line_repository: LineRepositoryPort
    route_solver: RouteSolverPort
    fare_config: FareConfig = field(default_factory=lambda: get_config().fare)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def find_route(self, source_id: int, target_id: int, age: int) -> RouteResult:
        """Find the shortest route and its fare.

        Args:
            source_id: Departure station id.
            target_id: Arrival station id.
            age: Passenger age in years.

        Returns:
            RouteResult with stations, distance and fare.

        Raises:
            InvalidAgeError: If age is zero or negative.
            StationNotFoundError: If either station is unknown.
            UnreachablePathError: If the stations are the same or not
                connected.
        """
        age_group = AgeGroup.from_age(age)

        for station_id in (source_id, target_id):
            if not self.station_repository.exists(station_id):
                raise StationNotFoundError(
                    f"Station not found: {station_id}", station_id=station_id
                )

        graph = build_graph(
            self.station_repository.find_all(),
            self.section_repository.find_all(),
        )
        self._logger.debug(
            "Graph built",
            extra={"stations": len(graph), "edges": len(graph.edges)},
        )

        path = self.route_solver.solve(graph, source_id, target_id)
        if path.is_empty:
            raise UnreachablePathError(
                f"No path from {source_id} to {target_id}",
                source_id=source_id,
                target_id=target_id,
            )

        extra_fares = {line.id: line.extra_fare for line in self.line_repository.find_all()}
        calculator = FareCalculator(extra_fares, age_group, self.fare_config.to_rules())
        fare = calculator.calculate(path.distance, path.line_ids)

        self._logger.info(
            "Route computed",
            extra={
                "stops": len(path.stations),
                "distance": path.distance,
                "fare": fare,
                "age_group": age_group.value,
            },
        )
        return RouteResult(stations=path.stations, distance=path.distance, fare=fare)

    def format_result(self, route: RouteResult) -> str:
        """Format route result as human-readable string."""
        path_str = " -> ".join(station.name for station in route.stations)
        return (
            f"Shortest path: {path_str}\n"
            f"Total distance: {route.distance} km\n"
            f"Fare: {route.fare}"
        )
