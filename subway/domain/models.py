"""Immutable domain models for the subway network.

All models are frozen dataclasses with slots for memory efficiency.
These models have no external dependencies and represent the core
business concepts of the application.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional

from .errors import (
    InvalidAgeError,
    InvalidLineError,
    SectionMergeError,
    SectionNotAddableError,
    SectionSplitError,
)


class AgeGroup(Enum):
    """Passenger age bracket used to select the fare discount."""

    INFANT = "infant"
    CHILD = "child"
    TEENAGER = "teenager"
    ADULT = "adult"

    @classmethod
    def from_age(cls, age: int) -> AgeGroup:
        """Classify a passenger age.

        Args:
            age: Passenger age in years.

        Returns:
            The age group for the given age.

        Raises:
            InvalidAgeError: If age is zero or negative.
        """
        if age <= 0:
            raise InvalidAgeError(f"Age must be positive, got {age}", age=age)
        if age <= 5:
            return cls.INFANT
        if age <= 12:
            return cls.CHILD
        if age <= 18:
            return cls.TEENAGER
        return cls.ADULT


@dataclass(frozen=True, slots=True)
class Station:
    """A subway station.

    Attributes:
        id: Unique station identifier
        name: Human-readable station name
    """

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Line:
    """A subway line and its surcharge.

    The ordered sections of a line are held separately in
    ``subway.domain.sections.Sections``.

    Attributes:
        id: Unique line identifier
        name: Line name
        color: Display color
        extra_fare: Surcharge paid by riders of this line
    """

    id: int
    name: str
    color: str
    extra_fare: int = 0

    def __post_init__(self) -> None:
        if self.extra_fare < 0:
            raise InvalidLineError(
                f"Extra fare must not be negative, got {self.extra_fare}",
                line_id=self.id,
            )


@dataclass(frozen=True, slots=True)
class Section:
    """A directed track segment between two stations of one line.

    Attributes:
        line_id: Owning line
        up_station_id: Station at the up end
        down_station_id: Station at the down end
        distance: Positive track distance
        id: Persistent identifier, None until saved
    """

    line_id: int
    up_station_id: int
    down_station_id: int
    distance: int
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.distance <= 0:
            raise SectionNotAddableError(
                f"Distance must be positive, got {self.distance}",
                line_id=self.line_id,
            )
        if self.up_station_id == self.down_station_id:
            raise SectionNotAddableError(
                f"Up and down stations must differ, got {self.up_station_id}",
                line_id=self.line_id,
            )

    def has_station(self, station_id: int) -> bool:
        return station_id in (self.up_station_id, self.down_station_id)

    def split_at(self, station_id: int, distance: int, from_up: bool) -> tuple[Section, Section]:
        """Subdivide this section at a new station.

        Args:
            station_id: The station inserted between the two ends.
            distance: Length of the new part touching the known end.
            from_up: True if ``distance`` is measured from the up end,
                False if it is measured from the down end.

        Returns:
            The (upper, lower) parts, which sum to this section's distance.

        Raises:
            SectionSplitError: If the station is already an end or the
                distance leaves no positive remainder.
        """
        if self.has_station(station_id):
            raise SectionSplitError(
                f"Station {station_id} is already an end of section {self.id}"
            )
        if not 0 < distance < self.distance:
            raise SectionSplitError(
                f"Cannot split section of distance {self.distance} at {distance}"
            )

        upper_distance = distance if from_up else self.distance - distance
        upper = Section(
            line_id=self.line_id,
            up_station_id=self.up_station_id,
            down_station_id=station_id,
            distance=upper_distance,
        )
        lower = Section(
            line_id=self.line_id,
            up_station_id=station_id,
            down_station_id=self.down_station_id,
            distance=self.distance - upper_distance,
        )
        return upper, lower

    def merge(self, lower: Section) -> Section:
        """Join this section with the one that continues it downwards.

        The merged section keeps this section's id.

        Raises:
            SectionMergeError: If the sections belong to different lines or
                ``lower`` does not start where this one ends.
        """
        if self.line_id != lower.line_id:
            raise SectionMergeError(
                f"Sections of lines {self.line_id} and {lower.line_id} cannot merge"
            )
        if self.down_station_id != lower.up_station_id:
            raise SectionMergeError(
                f"Section ending at {self.down_station_id} does not meet "
                f"section starting at {lower.up_station_id}"
            )
        return replace(
            self,
            down_station_id=lower.down_station_id,
            distance=self.distance + lower.distance,
        )


@dataclass(frozen=True, slots=True)
class Path:
    """Result of a shortest-path search.

    Attributes:
        stations: Ordered stations from departure to arrival
        sections: Sections connecting consecutive stations
        distance: Total distance of the route
    """

    stations: tuple[Station, ...] = field(default_factory=tuple)
    sections: tuple[Section, ...] = field(default_factory=tuple)
    distance: int = 0

    @property
    def is_empty(self) -> bool:
        """Check if no route was found."""
        return len(self.stations) == 0

    @property
    def line_ids(self) -> FrozenSet[int]:
        """Lines ridden along this path."""
        return frozenset(section.line_id for section in self.sections)


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Route and fare answered to a passenger.

    Attributes:
        stations: Ordered stations from departure to arrival
        distance: Total distance of the route
        fare: Final fare after surcharge and discount
    """

    stations: tuple[Station, ...]
    distance: int
    fare: int

    @property
    def num_stops(self) -> int:
        """Return the number of stops in the route."""
        return len(self.stations)
