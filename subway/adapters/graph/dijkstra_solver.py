"""Dijkstra Route Solver adapter.

This adapter wraps the shortest-path search and adds:
- Search cost cap from configuration
- Logging
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...config import PathConfig, get_config
from ...domain.models import Path
from ...graph.builder import NetworkGraph
from ...graph.dijkstra import shortest_path


@dataclass
class DijkstraRouteSolver:
    """Route solver using Dijkstra's shortest path algorithm.

    This adapter implements RouteSolverPort.

    Attributes:
        config: Path-search configuration
    """

    config: PathConfig = field(default_factory=lambda: get_config().path)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(self, graph: NetworkGraph, source_id: int, target_id: int) -> Path:
        """Find the shortest path between two stations.

        Args:
            graph: The network graph.
            source_id: Departure station id.
            target_id: Arrival station id.

        Returns:
            Path with stations, sections and distance, empty if there is
            no route.

        Raises:
            SearchLimitExceededError: If the configured search cap is hit.
        """
        self._logger.debug(
            "Solving route",
            extra={"source_id": source_id, "target_id": target_id},
        )

        path, settled = shortest_path(
            graph,
            source_id,
            target_id,
            max_settled=self.config.max_settled_vertices,
        )

        if path.is_empty:
            self._logger.warning(
                "No route found",
                extra={
                    "source_id": source_id,
                    "target_id": target_id,
                    "settled": settled,
                },
            )
            return path

        self._logger.info(
            "Route found",
            extra={
                "source_id": source_id,
                "target_id": target_id,
                "stops": len(path.stations),
                "distance": path.distance,
                "settled": settled,
            },
        )
        return path
