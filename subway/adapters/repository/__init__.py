"""Repository adapters - Implementations of the persistence ports.

Available implementations:
- InMemoryNetworkRepository: Dict-backed stations, lines and sections
- CSVNetworkRepository: Loads a network from CSV files
"""

from .csv_repository import CSVNetworkRepository
from .memory_repository import (
    InMemoryLineRepository,
    InMemoryNetworkRepository,
    InMemorySectionRepository,
    InMemoryStationRepository,
)

__all__ = [
    "CSVNetworkRepository",
    "InMemoryNetworkRepository",
    "InMemoryStationRepository",
    "InMemoryLineRepository",
    "InMemorySectionRepository",
]
