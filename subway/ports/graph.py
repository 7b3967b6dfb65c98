"""Graph ports - Abstractions for route computation.

These protocols define the contract for computing shortest paths over
the network graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Path
    from ..graph.builder import NetworkGraph


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/dijkstra_solver.py

    The solver computes optimal paths through the subway network.
    """

    def solve(self, graph: NetworkGraph, source_id: int, target_id: int) -> Path:
        """Find the shortest path between two stations.

        Args:
            graph: The network graph.
            source_id: Departure station id.
            target_id: Arrival station id.

        Returns:
            Path with stations, sections and distance; empty if there is
            no route or both stations are the same.
        """
        ...
