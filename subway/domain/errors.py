"""Typed domain errors for the subway route-and-fare engine.

Every expected rejection (bad age, unknown station, unreachable route,
invalid section edit) is reported with its own error type so callers can
render a distinct message for each kind.

All errors inherit from SubwayError and can optionally wrap a root cause
exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional


@dataclass
class SubwayError(Exception):
    """Base error for the subway domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    # 4xx-style status a web layer should answer with
    status_code: ClassVar[int] = 400

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidAgeError(SubwayError):
    """Passenger age is zero or negative.

    Attributes:
        age: The rejected age
    """

    age: int = 0


@dataclass
class StationNotFoundError(SubwayError):
    """Station id does not resolve to a known station.

    Attributes:
        station_id: The station id that was not found
    """

    station_id: Optional[int] = None

    status_code: ClassVar[int] = 404


@dataclass
class LineNotFoundError(SubwayError):
    """Line id does not resolve to a known line.

    Attributes:
        line_id: The line id that was not found
    """

    line_id: Optional[int] = None

    status_code: ClassVar[int] = 404


@dataclass
class InvalidLineError(SubwayError):
    """Line attributes break a line invariant, such as a negative extra fare.

    Attributes:
        line_id: The offending line
    """

    line_id: Optional[int] = None


@dataclass
class DuplicateLineError(SubwayError):
    """A line with the same name is already registered."""

    name: str = ""


@dataclass
class UnreachablePathError(SubwayError):
    """No route connects the requested stations.

    Also raised when departure and arrival are the same station.

    Attributes:
        source_id: Departure station id
        target_id: Arrival station id
    """

    source_id: Optional[int] = None
    target_id: Optional[int] = None


@dataclass
class SectionNotAddableError(SubwayError):
    """The new section fits no valid attach or split position.

    Attributes:
        line_id: Line the section was meant for
    """

    line_id: Optional[int] = None


@dataclass
class SectionNotDeletableError(SubwayError):
    """The section cannot be removed from the line.

    Attributes:
        line_id: Line the removal was requested on
        station_id: Station whose sections were to be removed
    """

    line_id: Optional[int] = None
    station_id: Optional[int] = None


@dataclass
class SectionSplitError(SubwayError):
    """Splitting a section would break the line's path."""


@dataclass
class SectionMergeError(SubwayError):
    """Merging two sections would break the line's path."""


@dataclass
class GraphError(SubwayError):
    """Network data loading or integrity error.

    Attributes:
        file_path: Path to the network data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class SearchLimitExceededError(SubwayError):
    """Shortest-path search settled more vertices than allowed.

    Attributes:
        limit: The configured maximum number of settled vertices
    """

    limit: int = 0
