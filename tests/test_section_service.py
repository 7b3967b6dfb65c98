"""Adding and removing sections through SectionService."""

import threading

import pytest

from subway.domain.errors import (
    LineNotFoundError,
    SectionNotAddableError,
    SectionNotDeletableError,
    StationNotFoundError,
)

LINE_A = 1
LINE_B = 2


def test_add_section_at_down_terminus(network, section_service):
    sections = section_service.add_section(LINE_A, 3, 5, 7)

    assert sections.station_ids() == [1, 2, 3, 5]
    assert all(section.id is not None for section in sections)
    assert section_service.sections_of(LINE_A).station_ids() == [1, 2, 3, 5]


def test_add_section_splits_and_persists(network, section_service):
    section_service.add_section(LINE_A, 1, 5, 2)

    stored = network.sections.find_by_line(LINE_A)
    assert sorted((s.up_station_id, s.down_station_id, s.distance) for s in stored) == [
        (1, 5, 2),
        (2, 3, 4),
        (5, 2, 3),
    ]


def test_add_section_too_long_to_split(network, section_service):
    before = network.sections.find_by_line(LINE_A)

    with pytest.raises(SectionNotAddableError):
        section_service.add_section(LINE_A, 1, 5, 5)

    assert network.sections.find_by_line(LINE_A) == before


@pytest.mark.parametrize("distance", [0, -3])
def test_add_section_with_non_positive_distance(section_service, distance):
    with pytest.raises(SectionNotAddableError):
        section_service.add_section(LINE_A, 3, 5, distance)


def test_add_section_with_same_stations(section_service):
    with pytest.raises(SectionNotAddableError):
        section_service.add_section(LINE_A, 3, 3, 2)


def test_add_section_to_unknown_line(section_service):
    with pytest.raises(LineNotFoundError) as exc_info:
        section_service.add_section(99, 1, 2, 3)

    assert exc_info.value.status_code == 404


def test_add_section_with_unknown_station(section_service):
    with pytest.raises(StationNotFoundError):
        section_service.add_section(LINE_A, 3, 99, 3)


def test_remove_interior_station(network, section_service):
    sections = section_service.remove_section(LINE_A, 2)

    assert sections.station_ids() == [1, 3]
    assert [s.distance for s in sections] == [9]
    assert len(network.sections.find_by_line(LINE_A)) == 1


def test_remove_terminus(section_service):
    sections = section_service.remove_section(LINE_A, 3)

    assert sections.station_ids() == [1, 2]


def test_remove_last_section(section_service):
    with pytest.raises(SectionNotDeletableError):
        section_service.remove_section(LINE_B, 4)


def test_remove_station_not_on_line(section_service):
    with pytest.raises(SectionNotDeletableError):
        section_service.remove_section(LINE_A, 4)


def test_remove_from_unknown_line(section_service):
    with pytest.raises(LineNotFoundError):
        section_service.remove_section(99, 1)


def test_concurrent_edits_keep_single_path(network, section_service):
    extra = [network.create_station(f"extra{i}") for i in range(20)]
    errors = []

    def extend(station):
        try:
            section_service.add_section(LINE_B, 4, station.id, 1)
        except SectionNotAddableError as e:
            errors.append(e)

    # Every thread tries to extend or split at station4
    threads = [threading.Thread(target=extend, args=(s,)) for s in extra]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    sections = section_service.sections_of(LINE_B)
    ids = sections.station_ids()
    assert len(ids) == len(set(ids))
    assert len(sections) == 1 + len(extra) - len(errors)
