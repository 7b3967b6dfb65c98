"""Shortest-path computation using Dijkstra's algorithm.

Edges are only relaxed on a strictly shorter distance and heap entries
compare by (distance, vertex index), so among equal-distance routes the
one discovered first in input order is returned.
"""

import heapq
from typing import Dict, List, Optional, Tuple

from ..domain.errors import SearchLimitExceededError
from ..domain.models import Path
from .builder import NetworkGraph


def shortest_path(
    graph: NetworkGraph,
    start: int,
    end: int,
    max_settled: Optional[int] = None,
) -> Tuple[Path, int]:
    """Compute the shortest path between two stations using Dijkstra.

    Parameters
    ----------
    graph:
        Network graph as produced by ``build_graph``.
    start:
        Id of the departure station.
    end:
        Id of the arrival station.
    max_settled:
        Optional cap on the number of vertices settled before giving up.

    Returns
    -------
    Path, int
        The path from ``start`` to ``end`` and the number of settled
        vertices. The path is empty if the stations are equal, unknown
        or not connected.
    """
    source = graph.vertex_of(start)
    target = graph.vertex_of(end)
    if source is None or target is None or source == target:
        return Path(), 0

    distances: Dict[int, int] = {source: 0}
    previous: Dict[int, int] = {}

    heap: List[Tuple[int, int]] = [(0, source)]
    visited = set()

    while heap:
        current_distance, u = heapq.heappop(heap)

        if u in visited:
            continue

        visited.add(u)
        if max_settled is not None and len(visited) > max_settled:
            raise SearchLimitExceededError(
                f"Search settled more than {max_settled} stations",
                limit=max_settled,
            )

        if u == target:
            break

        for edge in graph.outgoing(u):
            new_distance = current_distance + edge.distance
            if new_distance < distances.get(edge.target, float("inf")):
                distances[edge.target] = new_distance
                previous[edge.target] = edge.index
                heapq.heappush(heap, (new_distance, edge.target))

    if target not in distances:
        return Path(), len(visited)

    sections = []
    vertices = [target]
    current = target
    while current != source:
        edge = graph.edges[previous[current]]
        sections.append(edge.section)
        current = edge.source
        vertices.append(current)

    vertices.reverse()
    sections.reverse()
    path = Path(
        stations=tuple(graph.stations[vertex] for vertex in vertices),
        sections=tuple(sections),
        distance=distances[target],
    )
    return path, len(visited)
