"""Tests for the ordered section chain of a line."""

from collections import Counter

import pytest

from subway.domain.errors import (
    InvalidLineError,
    SectionMergeError,
    SectionNotAddableError,
    SectionNotDeletableError,
    SectionSplitError,
)
from subway.domain.models import Line, Section
from subway.domain.sections import Sections

LINE = 1


def section(up, down, distance, section_id=None):
    return Section(
        line_id=LINE,
        up_station_id=up,
        down_station_id=down,
        distance=distance,
        id=section_id,
    )


def assert_single_path(sections: Sections):
    degree = Counter()
    for s in sections:
        degree[s.up_station_id] += 1
        degree[s.down_station_id] += 1
    assert sorted(degree.values()).count(1) == 2
    assert all(count in (1, 2) for count in degree.values())
    ids = sections.station_ids()
    assert len(ids) == len(set(ids)) == len(sections) + 1
    for upper, lower in zip(sections.items, sections.items[1:]):
        assert upper.down_station_id == lower.up_station_id


@pytest.fixture
def chain():
    # 1 -10- 2 -10- 3
    return Sections(LINE).add(section(1, 2, 10)).add(section(2, 3, 10))


def test_add_to_empty_line():
    sections = Sections(LINE).add(section(1, 2, 10))

    assert sections.station_ids() == [1, 2]
    assert sections.up_terminus == 1
    assert sections.down_terminus == 2


def test_add_extends_down_terminus(chain):
    sections = chain.add(section(3, 4, 7))

    assert sections.station_ids() == [1, 2, 3, 4]
    assert_single_path(sections)


def test_add_extends_up_terminus(chain):
    sections = chain.add(section(0, 1, 7))

    assert sections.station_ids() == [0, 1, 2, 3]
    assert_single_path(sections)


def test_add_splits_section_below_known_up_station(chain):
    sections = chain.add(section(1, 5, 4))

    assert sections.station_ids() == [1, 5, 2, 3]
    assert [s.distance for s in sections] == [4, 6, 10]
    assert_single_path(sections)


def test_add_splits_section_above_known_down_station(chain):
    sections = chain.add(section(5, 3, 3))

    assert sections.station_ids() == [1, 2, 5, 3]
    assert [s.distance for s in sections] == [10, 7, 3]
    assert_single_path(sections)


def test_split_keeps_total_distance(chain):
    before = sum(s.distance for s in chain)
    sections = chain.add(section(2, 9, 1))

    assert sum(s.distance for s in sections) == before


@pytest.mark.parametrize("distance", [10, 11])
def test_split_with_equal_or_longer_distance_fails(chain, distance):
    with pytest.raises(SectionNotAddableError):
        chain.add(section(1, 5, distance))


def test_add_with_both_stations_known_fails(chain):
    with pytest.raises(SectionNotAddableError):
        chain.add(section(1, 3, 5))


def test_add_with_no_station_known_fails(chain):
    with pytest.raises(SectionNotAddableError):
        chain.add(section(7, 8, 5))


def test_add_from_other_line_fails(chain):
    other = Section(line_id=2, up_station_id=3, down_station_id=4, distance=5)
    with pytest.raises(SectionNotAddableError):
        chain.add(other)


def test_failed_add_leaves_chain_untouched(chain):
    with pytest.raises(SectionNotAddableError):
        chain.add(section(1, 5, 10))

    assert chain.station_ids() == [1, 2, 3]


def test_remove_up_terminus(chain):
    sections = chain.remove(1)

    assert sections.station_ids() == [2, 3]


def test_remove_down_terminus(chain):
    sections = chain.remove(3)

    assert sections.station_ids() == [1, 2]


def test_remove_interior_station_merges_sections():
    chain = Sections(LINE).add(section(1, 2, 4, 11)).add(section(2, 3, 6, 12))

    sections = chain.remove(2)

    assert len(sections) == 1
    merged = sections.items[0]
    assert (merged.up_station_id, merged.down_station_id) == (1, 3)
    assert merged.distance == 10
    assert merged.id == 11


def test_remove_last_section_fails():
    chain = Sections(LINE).add(section(1, 2, 10))

    with pytest.raises(SectionNotDeletableError):
        chain.remove(1)


def test_remove_unknown_station_fails(chain):
    with pytest.raises(SectionNotDeletableError) as exc_info:
        chain.remove(42)

    assert exc_info.value.station_id == 42


def test_edit_sequence_keeps_single_path():
    sections = Sections(LINE).add(section(1, 2, 20))
    edits = [
        lambda s: s.add(section(2, 3, 10)),
        lambda s: s.add(section(1, 4, 5)),
        lambda s: s.add(section(5, 2, 3)),
        lambda s: s.add(section(0, 1, 8)),
        lambda s: s.remove(4),
        lambda s: s.remove(3),
        lambda s: s.add(section(2, 6, 2)),
        lambda s: s.remove(0),
    ]
    for edit in edits:
        sections = edit(sections)
        assert_single_path(sections)

    assert sections.station_ids() == [1, 5, 2, 6]
    assert sum(s.distance for s in sections) == 22


def test_of_orders_unordered_sections():
    sections = Sections.of(
        LINE, [section(3, 4, 1), section(1, 2, 1), section(2, 3, 1)]
    )

    assert sections.station_ids() == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "items",
    [
        [section(1, 2, 1), section(1, 3, 1)],
        [section(1, 2, 1), section(3, 4, 1)],
        [section(1, 2, 1), section(2, 3, 1), section(3, 1, 1)],
    ],
    ids=["branch", "disconnected", "cycle"],
)
def test_of_rejects_non_path(items):
    with pytest.raises(SectionNotAddableError):
        Sections.of(LINE, items)


def test_section_split_at_existing_end_fails():
    with pytest.raises(SectionSplitError):
        section(1, 2, 10).split_at(2, 4, from_up=True)


def test_section_merge_requires_adjacent_sections():
    with pytest.raises(SectionMergeError):
        section(1, 2, 4).merge(section(3, 4, 4))


@pytest.mark.parametrize(
    "up, down, distance",
    [(1, 2, 0), (1, 2, -1), (3, 3, 5)],
    ids=["zero-distance", "negative-distance", "same-station"],
)
def test_invalid_section_raises_typed_error(up, down, distance):
    with pytest.raises(SectionNotAddableError) as exc_info:
        section(up, down, distance)

    assert exc_info.value.line_id == LINE
    assert exc_info.value.status_code == 400


def test_line_with_negative_extra_fare_raises_typed_error():
    with pytest.raises(InvalidLineError) as exc_info:
        Line(id=7, name="A", color="red", extra_fare=-1)

    assert exc_info.value.line_id == 7
