"""In-memory repositories for stations, lines and sections.

These adapters implement the repository ports over plain dicts. They back
the CSV loader and the tests, and stand in for a database when the engine
runs on its own.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Sequence

from ...domain.errors import (
    DuplicateLineError,
    SectionNotAddableError,
    StationNotFoundError,
)
from ...domain.models import Line, Section, Station
from ...domain.sections import Sections


@dataclass
class InMemoryStationRepository:
    """Station store implementing StationRepositoryPort."""

    _stations: Dict[int, Station] = field(default_factory=dict, repr=False)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def save(self, name: str) -> Station:
        with self._lock:
            station = Station(id=self._next_id(), name=name)
            self._stations[station.id] = station
            return station

    def put(self, station: Station) -> Station:
        """Store a station with a known id."""
        with self._lock:
            self._stations[station.id] = station
            return station

    def find_all(self) -> List[Station]:
        with self._lock:
            return list(self._stations.values())

    def find_by_id(self, station_id: int) -> Optional[Station]:
        with self._lock:
            return self._stations.get(station_id)

    def exists(self, station_id: int) -> bool:
        with self._lock:
            return station_id in self._stations

    def _next_id(self) -> int:
        station_id = next(self._ids)
        while station_id in self._stations:
            station_id = next(self._ids)
        return station_id


@dataclass
class InMemoryLineRepository:
    """Line store implementing LineRepositoryPort."""

    _lines: Dict[int, Line] = field(default_factory=dict, repr=False)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def save(self, name: str, color: str, extra_fare: int = 0) -> Line:
        """Register a new line.

        Raises:
            DuplicateLineError: If a line with the same name exists.
        """
        with self._lock:
            if any(line.name == name for line in self._lines.values()):
                raise DuplicateLineError(f"Line already exists: {name}", name=name)
            line_id = next(self._ids)
            while line_id in self._lines:
                line_id = next(self._ids)
            line = Line(id=line_id, name=name, color=color, extra_fare=extra_fare)
            self._lines[line.id] = line
            return line

    def put(self, line: Line) -> Line:
        """Store a line with a known id."""
        with self._lock:
            self._lines[line.id] = line
            return line

    def find_all(self) -> List[Line]:
        with self._lock:
            return list(self._lines.values())

    def find_by_id(self, line_id: int) -> Optional[Line]:
        with self._lock:
            return self._lines.get(line_id)


@dataclass
class InMemorySectionRepository:
    """Section store implementing SectionRepositoryPort."""

    _sections: Dict[int, List[Section]] = field(default_factory=dict, repr=False)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)
    _used_ids: set[int] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def find_all(self) -> List[Section]:
        with self._lock:
            return [section for line in self._sections.values() for section in line]

    def find_by_line(self, line_id: int) -> List[Section]:
        with self._lock:
            return list(self._sections.get(line_id, []))

    def replace_line(self, line_id: int, sections: Sequence[Section]) -> List[Section]:
        with self._lock:
            stored = [
                section if section.id is not None else replace(section, id=self._next_id())
                for section in sections
            ]
            self._used_ids.update(section.id for section in stored)
            self._sections[line_id] = stored
            return list(stored)

    def _next_id(self) -> int:
        section_id = next(self._ids)
        while section_id in self._used_ids:
            section_id = next(self._ids)
        return section_id


@dataclass
class InMemoryNetworkRepository:
    """The three repositories of one network, sharing a lifetime.

    Attributes:
        stations: Station repository
        lines: Line repository
        sections: Section repository
    """

    stations: InMemoryStationRepository = field(default_factory=InMemoryStationRepository)
    lines: InMemoryLineRepository = field(default_factory=InMemoryLineRepository)
    sections: InMemorySectionRepository = field(default_factory=InMemorySectionRepository)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def create_station(self, name: str) -> Station:
        station = self.stations.save(name)
        self._logger.debug("Station created", extra={"station_id": station.id})
        return station

    def create_line(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
        extra_fare: int = 0,
    ) -> Line:
        """Register a line together with its first section.

        Raises:
            StationNotFoundError: If either station is unknown.
            DuplicateLineError: If a line with the same name exists.
            SectionNotAddableError: If the first section has a non-positive
                distance or the same station at both ends.
        """
        for station_id in (up_station_id, down_station_id):
            if not self.stations.exists(station_id):
                raise StationNotFoundError(
                    f"Station not found: {station_id}", station_id=station_id
                )
        if distance <= 0:
            raise SectionNotAddableError(f"Distance must be positive, got {distance}")
        if up_station_id == down_station_id:
            raise SectionNotAddableError(
                f"Up and down stations must differ, got {up_station_id}"
            )

        line = self.lines.save(name, color, extra_fare)
        first = Section(
            line_id=line.id,
            up_station_id=up_station_id,
            down_station_id=down_station_id,
            distance=distance,
        )
        self.sections.replace_line(line.id, list(Sections(line.id).add(first)))
        self._logger.info(
            "Line created",
            extra={"line_id": line.id, "line_name": name, "extra_fare": extra_fare},
        )
        return line
