"""Section service - Line editing.

Adds and removes sections of a line. Each edit reads the line's sections,
applies it to the ordered chain and stores the result while holding a
lock for that line, so concurrent edits of one line never interleave.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict

from ..domain.errors import (
    LineNotFoundError,
    SectionNotAddableError,
    StationNotFoundError,
)
from ..domain.models import Line, Section
from ..domain.sections import Sections
from ..ports.repository import (
    LineRepositoryPort,
    SectionRepositoryPort,
    StationRepositoryPort,
)


@dataclass
class SectionService:
    """Service editing the section chain of a line.

    Attributes:
        station_repository: Checks station existence
        line_repository: Resolves lines
        section_repository: Reads and stores sections
    """

    station_repository: StationRepositoryPort
    line_repository: LineRepositoryPort
    section_repository: SectionRepositoryPort

    _line_locks: Dict[int, threading.Lock] = field(default_factory=dict, repr=False)
    _locks_guard: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def add_section(
        self, line_id: int, up_station_id: int, down_station_id: int, distance: int
    ) -> Sections:
        """Add a section to a line.

        Returns:
            The line's sections after the edit.

        Raises:
            LineNotFoundError: If the line is unknown.
            StationNotFoundError: If either station is unknown.
            SectionNotAddableError: If the section does not fit the line.
        """
        self._require_line(line_id)
        for station_id in (up_station_id, down_station_id):
            if not self.station_repository.exists(station_id):
                raise StationNotFoundError(
                    f"Station not found: {station_id}", station_id=station_id
                )
        if distance <= 0:
            raise SectionNotAddableError(
                f"Distance must be positive, got {distance}", line_id=line_id
            )
        if up_station_id == down_station_id:
            raise SectionNotAddableError(
                "Up and down stations must differ", line_id=line_id
            )

        section = Section(
            line_id=line_id,
            up_station_id=up_station_id,
            down_station_id=down_station_id,
            distance=distance,
        )
        with self._lock_for(line_id):
            sections = self._load(line_id).add(section)
            sections = self._store(sections)

        self._logger.info(
            "Section added",
            extra={
                "line_id": line_id,
                "up_station_id": up_station_id,
                "down_station_id": down_station_id,
                "distance": distance,
            },
        )
        return sections

    def remove_section(self, line_id: int, station_id: int) -> Sections:
        """Take a station off a line.

        Returns:
            The line's sections after the edit.

        Raises:
            LineNotFoundError: If the line is unknown.
            SectionNotDeletableError: If the station is not on the line or
                the line has a single section.
        """
        self._require_line(line_id)

        with self._lock_for(line_id):
            sections = self._load(line_id).remove(station_id)
            sections = self._store(sections)

        self._logger.info(
            "Section removed",
            extra={"line_id": line_id, "station_id": station_id},
        )
        return sections

    def sections_of(self, line_id: int) -> Sections:
        """Return the ordered sections of a line."""
        self._require_line(line_id)
        return self._load(line_id)

    def _require_line(self, line_id: int) -> Line:
        line = self.line_repository.find_by_id(line_id)
        if line is None:
            raise LineNotFoundError(f"Line not found: {line_id}", line_id=line_id)
        return line

    def _load(self, line_id: int) -> Sections:
        return Sections.of(line_id, self.section_repository.find_by_line(line_id))

    def _store(self, sections: Sections) -> Sections:
        stored = self.section_repository.replace_line(sections.line_id, list(sections))
        return Sections(line_id=sections.line_id, items=tuple(stored))

    def _lock_for(self, line_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._line_locks.setdefault(line_id, threading.Lock())
