from pathlib import Path

import pytest

from subway.adapters.repository import CSVNetworkRepository
from subway.config import GraphConfig
from subway.domain.errors import GraphError, SearchLimitExceededError
from subway.domain.models import Section, Station
from subway.graph import build_graph, shortest_path


DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def stations(*ids):
    return [Station(id=i, name=f"S{i}") for i in ids]


def test_build_graph_contains_all_stations():
    network = CSVNetworkRepository(GraphConfig(data_dir=DATA_DIR)).load()

    graph = build_graph(network.stations.find_all(), network.sections.find_all())

    for station in network.stations.find_all():
        assert station.id in graph


def test_build_graph_adds_both_directions():
    section = Section(line_id=1, up_station_id=1, down_station_id=2, distance=7)
    graph = build_graph(stations(1, 2), [section])

    assert len(graph.edges) == 2
    assert [(e.source, e.target) for e in graph.edges] == [(0, 1), (1, 0)]
    assert all(e.section is section for e in graph.edges)


def test_build_graph_keeps_parallel_edges():
    sections = [
        Section(line_id=1, up_station_id=1, down_station_id=2, distance=5),
        Section(line_id=2, up_station_id=1, down_station_id=2, distance=5),
    ]
    graph = build_graph(stations(1, 2), sections)

    assert len(graph.edges) == 4
    assert {e.section.line_id for e in graph.outgoing(0)} == {1, 2}


def test_build_graph_rejects_unknown_station():
    section = Section(line_id=1, up_station_id=1, down_station_id=9, distance=5)

    with pytest.raises(GraphError):
        build_graph(stations(1, 2), [section])


def test_dijkstra_finds_direct_edge():
    graph = build_graph(
        stations(1, 2),
        [Section(line_id=1, up_station_id=1, down_station_id=2, distance=10)],
    )

    path, _ = shortest_path(graph, 1, 2)

    assert [s.id for s in path.stations] == [1, 2]
    assert path.distance == 10


def test_dijkstra_rides_sections_against_their_direction():
    graph = build_graph(
        stations(1, 2),
        [Section(line_id=1, up_station_id=1, down_station_id=2, distance=10)],
    )

    path, _ = shortest_path(graph, 2, 1)

    assert [s.id for s in path.stations] == [2, 1]


def test_dijkstra_chooses_shortest_path():
    # 1 can reach 3 directly, but 1 -> 2 -> 3 is shorter
    sections = [
        Section(line_id=1, up_station_id=1, down_station_id=2, distance=3),
        Section(line_id=2, up_station_id=1, down_station_id=3, distance=10),
        Section(line_id=1, up_station_id=2, down_station_id=3, distance=4),
    ]
    graph = build_graph(stations(1, 2, 3), sections)

    path, _ = shortest_path(graph, 1, 3)

    assert [s.id for s in path.stations] == [1, 2, 3]
    assert path.sections == (sections[0], sections[2])
    assert path.distance == 7
    assert path.line_ids == {1}


def test_dijkstra_picks_cheaper_parallel_edge():
    sections = [
        Section(line_id=1, up_station_id=1, down_station_id=2, distance=9),
        Section(line_id=2, up_station_id=1, down_station_id=2, distance=4),
    ]
    graph = build_graph(stations(1, 2), sections)

    path, _ = shortest_path(graph, 1, 2)

    assert path.sections == (sections[1],)


def test_dijkstra_tie_prefers_first_section():
    sections = [
        Section(line_id=1, up_station_id=1, down_station_id=2, distance=5),
        Section(line_id=2, up_station_id=1, down_station_id=2, distance=5),
    ]
    graph = build_graph(stations(1, 2), sections)

    for _ in range(3):
        path, _ = shortest_path(graph, 1, 2)
        assert path.sections == (sections[0],)


def test_dijkstra_no_path_returns_empty():
    graph = build_graph(stations(1, 2), [])

    path, _ = shortest_path(graph, 1, 2)

    assert path.is_empty
    assert path.sections == ()
    assert path.distance == 0


def test_dijkstra_same_station_returns_empty():
    graph = build_graph(
        stations(1, 2),
        [Section(line_id=1, up_station_id=1, down_station_id=2, distance=10)],
    )

    path, settled = shortest_path(graph, 1, 1)

    assert path.is_empty
    assert settled == 0


def test_dijkstra_unknown_station_returns_empty():
    graph = build_graph(stations(1), [])

    path, _ = shortest_path(graph, 1, 99)

    assert path.is_empty


def test_dijkstra_search_limit():
    chain = [
        Section(line_id=1, up_station_id=i, down_station_id=i + 1, distance=1)
        for i in range(1, 10)
    ]
    graph = build_graph(stations(*range(1, 11)), chain)

    with pytest.raises(SearchLimitExceededError) as exc_info:
        shortest_path(graph, 1, 10, max_settled=3)

    assert exc_info.value.limit == 3
