"""Repository ports - Abstractions over network persistence.

Stations, lines and sections are stored by an external system. The
engine only needs these synchronous reads and one write: replacing the
sections of a line after an edit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Line, Section, Station


class StationRepositoryPort(Protocol):
    """Port for reading stations."""

    def find_all(self) -> Sequence[Station]:
        """List every station of the network."""
        ...

    def find_by_id(self, station_id: int) -> Optional[Station]:
        """Get a station by id.

        Args:
            station_id: The station id to look up.

        Returns:
            The station, or None if not found.
        """
        ...

    def exists(self, station_id: int) -> bool:
        """Check if a station id is known."""
        ...


class LineRepositoryPort(Protocol):
    """Port for reading lines."""

    def find_all(self) -> Sequence[Line]:
        """List every line with its extra fare."""
        ...

    def find_by_id(self, line_id: int) -> Optional[Line]:
        """Get a line by id, or None if not found."""
        ...


class SectionRepositoryPort(Protocol):
    """Port for reading and replacing sections."""

    def find_all(self) -> Sequence[Section]:
        """List every section of every line."""
        ...

    def find_by_line(self, line_id: int) -> Sequence[Section]:
        """List the sections of one line, in any order."""
        ...

    def replace_line(self, line_id: int, sections: Sequence[Section]) -> Sequence[Section]:
        """Store the complete section set of a line.

        Sections without an id are new and receive one.

        Args:
            line_id: The line being edited.
            sections: Every section the line has after the edit.

        Returns:
            The stored sections, all with ids.
        """
        ...
