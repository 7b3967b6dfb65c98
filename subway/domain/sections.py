"""Ordered section chain of a single line.

A line's sections always form one simple path. ``Sections`` keeps them
sorted from the up terminus to the down terminus, so terminus checks are
constant time and a split or merge only touches the sections around one
station.

``Sections`` is immutable: ``add`` and ``remove`` return a new chain and
leave the original untouched when they fail.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .errors import SectionNotAddableError, SectionNotDeletableError
from .models import Section


@dataclass(frozen=True)
class Sections:
    """The sections of one line, ordered up terminus first.

    Attributes:
        line_id: The line owning these sections
        items: Sections ordered from the up terminus to the down terminus
    """

    line_id: int
    items: tuple[Section, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, line_id: int, sections: Iterable[Section]) -> Sections:
        """Build a chain from sections in any order.

        Raises:
            SectionNotAddableError: If the sections do not form exactly
                one simple path or belong to another line.
        """
        unordered = list(sections)
        for section in unordered:
            if section.line_id != line_id:
                raise SectionNotAddableError(
                    f"Section {section.id} belongs to line {section.line_id}",
                    line_id=line_id,
                )
        return cls(line_id=line_id, items=tuple(_order(line_id, unordered)))

    def __iter__(self) -> Iterator[Section]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def up_terminus(self) -> Optional[int]:
        return self.items[0].up_station_id if self.items else None

    @property
    def down_terminus(self) -> Optional[int]:
        return self.items[-1].down_station_id if self.items else None

    def station_ids(self) -> List[int]:
        """Station ids in riding order from the up terminus."""
        if not self.items:
            return []
        return [self.items[0].up_station_id] + [s.down_station_id for s in self.items]

    def contains(self, station_id: int) -> bool:
        return station_id in self.station_ids()

    def add(self, section: Section) -> Sections:
        """Attach a section to the line.

        Returns:
            A new chain including the section.

        Raises:
            SectionNotAddableError: If the section matches no terminus or
                split position, would create a branch or cycle, or is not
                shorter than the section it subdivides.
        """
        if section.line_id != self.line_id:
            raise SectionNotAddableError(
                f"Section belongs to line {section.line_id}, not {self.line_id}",
                line_id=self.line_id,
            )
        if self.is_empty:
            return self._with([section])

        stations = set(self.station_ids())
        up_known = section.up_station_id in stations
        down_known = section.down_station_id in stations

        if up_known and down_known:
            raise SectionNotAddableError(
                "Both stations are already on the line",
                line_id=self.line_id,
            )
        if not up_known and not down_known:
            raise SectionNotAddableError(
                "Section must share a station with the line",
                line_id=self.line_id,
            )

        if section.down_station_id == self.up_terminus:
            return self._with([section, *self.items])
        if section.up_station_id == self.down_terminus:
            return self._with([*self.items, section])

        if up_known:
            index = self._index_where(lambda s: s.up_station_id == section.up_station_id)
            parts = self._split(index, section, section.down_station_id, from_up=True)
        else:
            index = self._index_where(
                lambda s: s.down_station_id == section.down_station_id
            )
            parts = self._split(index, section, section.up_station_id, from_up=False)

        items = list(self.items)
        items[index : index + 1] = parts
        return self._with(items)

    def remove(self, station_id: int) -> Sections:
        """Take a station off the line.

        A terminus drops its section; an interior station merges its two
        sections into one spanning both.

        Returns:
            A new chain without the station.

        Raises:
            SectionNotDeletableError: If the station is not on the line or
                the line has a single section left.
        """
        if not self.contains(station_id):
            raise SectionNotDeletableError(
                f"Station {station_id} is not on line {self.line_id}",
                line_id=self.line_id,
                station_id=station_id,
            )
        if len(self.items) == 1:
            raise SectionNotDeletableError(
                "A line must keep at least one section",
                line_id=self.line_id,
                station_id=station_id,
            )

        if station_id == self.up_terminus:
            return self._with(self.items[1:])
        if station_id == self.down_terminus:
            return self._with(self.items[:-1])

        index = self._index_where(lambda s: s.down_station_id == station_id)
        upper, lower = self.items[index], self.items[index + 1]
        items = list(self.items)
        items[index : index + 2] = [upper.merge(lower)]
        return self._with(items)

    def _split(
        self, index: int, section: Section, new_station_id: int, from_up: bool
    ) -> List[Section]:
        existing = self.items[index]
        if section.distance >= existing.distance:
            raise SectionNotAddableError(
                f"New section distance {section.distance} must be shorter than "
                f"the existing {existing.distance}",
                line_id=self.line_id,
            )
        upper, lower = existing.split_at(new_station_id, section.distance, from_up)
        return [upper, lower]

    def _index_where(self, predicate) -> int:
        for index, section in enumerate(self.items):
            if predicate(section):
                return index
        raise SectionNotAddableError(
            "No section matches the requested position", line_id=self.line_id
        )

    def _with(self, items: Sequence[Section]) -> Sections:
        return Sections(line_id=self.line_id, items=tuple(items))


def _order(line_id: int, sections: List[Section]) -> List[Section]:
    """Sort sections into a single path, validating its shape."""
    if not sections:
        return []

    degree: Counter[int] = Counter()
    by_up = {}
    downs = set()
    for section in sections:
        degree[section.up_station_id] += 1
        degree[section.down_station_id] += 1
        if section.up_station_id in by_up or section.down_station_id in downs:
            raise SectionNotAddableError(
                f"Line {line_id} branches at a station", line_id=line_id
            )
        by_up[section.up_station_id] = section
        downs.add(section.down_station_id)

    starts = [station for station in by_up if station not in downs]
    if len(starts) != 1 or any(count > 2 for count in degree.values()):
        raise SectionNotAddableError(
            f"Sections of line {line_id} do not form a single path", line_id=line_id
        )

    ordered = []
    current = starts[0]
    while current in by_up:
        section = by_up[current]
        ordered.append(section)
        current = section.down_station_id
    if len(ordered) != len(sections):
        raise SectionNotAddableError(
            f"Sections of line {line_id} are disconnected", line_id=line_id
        )
    return ordered
