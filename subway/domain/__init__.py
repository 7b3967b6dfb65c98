"""Domain layer - Core business models, rules and errors.

This module contains immutable domain models, the section chain of a
line, the fare table and typed errors used throughout the application.
No external dependencies.
"""

from .errors import (
    DuplicateLineError,
    GraphError,
    InvalidAgeError,
    InvalidLineError,
    LineNotFoundError,
    SearchLimitExceededError,
    SectionMergeError,
    SectionNotAddableError,
    SectionNotDeletableError,
    SectionSplitError,
    StationNotFoundError,
    SubwayError,
    UnreachablePathError,
)
from .fare import FareCalculator, FareRules
from .models import AgeGroup, Line, Path, RouteResult, Section, Station
from .sections import Sections

__all__ = [
    # Models
    "AgeGroup",
    "Station",
    "Line",
    "Section",
    "Sections",
    "Path",
    "RouteResult",
    # Fare
    "FareCalculator",
    "FareRules",
    # Errors
    "SubwayError",
    "InvalidAgeError",
    "InvalidLineError",
    "StationNotFoundError",
    "LineNotFoundError",
    "DuplicateLineError",
    "UnreachablePathError",
    "SectionNotAddableError",
    "SectionNotDeletableError",
    "SectionSplitError",
    "SectionMergeError",
    "GraphError",
    "SearchLimitExceededError",
]
