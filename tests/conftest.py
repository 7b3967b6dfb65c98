"""Shared fixtures: a small two-line network.

Line A (extra fare 0):   station1 -5- station2 -4- station3
Line B (extra fare 500): station2 -3- station4
Line C (extra fare 0):   station5 -6- station6  (disconnected)
"""

import pytest

from subway.adapters.graph import DijkstraRouteSolver
from subway.adapters.repository import InMemoryNetworkRepository
from subway.config import FareConfig, PathConfig, reset_config
from subway.services import PathService, SectionService


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def network():
    network = InMemoryNetworkRepository()
    stations = [network.create_station(f"station{i}") for i in range(1, 7)]
    s1, s2, s3, s4, s5, s6 = stations

    line_a = network.create_line("A", "bg-red-600", s1.id, s2.id, 5, extra_fare=0)
    network.create_line("B", "bg-green-600", s2.id, s4.id, 3, extra_fare=500)
    network.create_line("C", "bg-yellow-600", s5.id, s6.id, 6, extra_fare=0)

    SectionService(network.stations, network.lines, network.sections).add_section(
        line_a.id, s2.id, s3.id, 4
    )
    return network


@pytest.fixture
def path_service(network):
    return PathService(
        station_repository=network.stations,
        section_repository=network.sections,
        line_repository=network.lines,
        route_solver=DijkstraRouteSolver(PathConfig()),
        fare_config=FareConfig(),
    )


@pytest.fixture
def section_service(network):
    return SectionService(
        station_repository=network.stations,
        line_repository=network.lines,
        section_repository=network.sections,
    )
