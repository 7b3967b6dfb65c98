"""Network graph construction.

This module defines the multigraph searched for routes. Vertices are
stations and every section contributes one edge per riding direction.
Vertices and edges live in flat lists and refer to each other by index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..domain.errors import GraphError
from ..domain.models import Section, Station


@dataclass(frozen=True, slots=True)
class Edge:
    """One riding direction of a section."""

    index: int
    source: int
    target: int
    distance: int
    section: Section


@dataclass
class NetworkGraph:
    """Weighted directed multigraph of the whole network.

    Parallel edges between the same stations are kept, since each one
    carries its own line.
    """

    stations: List[Station] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    adjacency: List[List[int]] = field(default_factory=list)
    _index: Dict[int, int] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self.stations)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self._index

    def vertex_of(self, station_id: int) -> Optional[int]:
        return self._index.get(station_id)

    def add_station(self, station: Station) -> int:
        if station.id in self._index:
            return self._index[station.id]
        vertex = len(self.stations)
        self.stations.append(station)
        self.adjacency.append([])
        self._index[station.id] = vertex
        return vertex

    def add_section(self, section: Section) -> None:
        up = self._require(section.up_station_id, section)
        down = self._require(section.down_station_id, section)
        self._add_edge(up, down, section)
        self._add_edge(down, up, section)

    def outgoing(self, vertex: int) -> Iterable[Edge]:
        return (self.edges[index] for index in self.adjacency[vertex])

    def _add_edge(self, source: int, target: int, section: Section) -> None:
        edge = Edge(
            index=len(self.edges),
            source=source,
            target=target,
            distance=section.distance,
            section=section,
        )
        self.edges.append(edge)
        self.adjacency[source].append(edge.index)

    def _require(self, station_id: int, section: Section) -> int:
        vertex = self._index.get(station_id)
        if vertex is None:
            raise GraphError(
                f"Section {section.id} of line {section.line_id} references "
                f"unknown station {station_id}"
            )
        return vertex


def build_graph(stations: Iterable[Station], sections: Iterable[Section]) -> NetworkGraph:
    """Assemble the network graph from a snapshot.

    Parameters
    ----------
    stations:
        Every station of the network.
    sections:
        Every section of every line.

    Returns
    -------
    NetworkGraph
        Graph with one vertex per station and two edges per section.
    """
    graph = NetworkGraph()
    for station in stations:
        graph.add_station(station)
    for section in sections:
        graph.add_section(section)
    return graph
