"""CSV network repository adapter.

Loads stations, lines and sections from CSV files into an in-memory
network, checking that every line's sections form a single path.
"""

from __future__ import annotations

import csv
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError, SubwayError
from ...domain.models import Line, Section, Station
from ...domain.sections import Sections
from .memory_repository import InMemoryNetworkRepository


def _rows(path: Path) -> Iterator[Dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            yield {key.strip(): (value or "").strip() for key, value in row.items()}


@dataclass
class CSVNetworkRepository:
    """Network repository that loads from CSV files.

    Expected files (names from GraphConfig):
    - stations.csv: station_id, station_name
    - lines.csv: line_id, name, color, extra_fare
    - sections.csv: section_id, line_id, up_station_id, down_station_id, distance

    Attributes:
        config: Graph configuration (paths, file names)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _network: Optional[InMemoryNetworkRepository] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> InMemoryNetworkRepository:
        """Load the network from CSV files.

        Returns:
            An in-memory network holding the loaded data.

        Raises:
            GraphError: If a file cannot be read or holds invalid data.
        """
        if self._network is not None:
            return self._network

        self._logger.debug(
            "Loading network",
            extra={"data_dir": str(self.config.data_dir)},
        )

        network = InMemoryNetworkRepository()
        self._load_stations(network)
        self._load_lines(network)
        self._load_sections(network)

        self._network = network
        self._logger.info(
            "Network loaded",
            extra={
                "stations": len(network.stations.find_all()),
                "lines": len(network.lines.find_all()),
                "sections": len(network.sections.find_all()),
            },
        )
        return network

    def _load_stations(self, network: InMemoryNetworkRepository) -> None:
        path = self.config.stations_path
        try:
            for row in _rows(path):
                station_id = row.get("station_id", "")
                if not station_id:
                    continue
                name = row.get("station_name", "") or station_id
                network.stations.put(Station(id=int(station_id), name=name))
        except (OSError, KeyError, ValueError) as e:
            raise GraphError(
                f"Failed to load stations: {e}", file_path=str(path), cause=e
            )

    def _load_lines(self, network: InMemoryNetworkRepository) -> None:
        path = self.config.lines_path
        try:
            for row in _rows(path):
                line_id = row.get("line_id", "")
                if not line_id:
                    continue
                network.lines.put(
                    Line(
                        id=int(line_id),
                        name=row["name"],
                        color=row.get("color", ""),
                        extra_fare=int(row.get("extra_fare") or 0),
                    )
                )
        except (OSError, KeyError, ValueError, SubwayError) as e:
            raise GraphError(f"Failed to load lines: {e}", file_path=str(path), cause=e)

    def _load_sections(self, network: InMemoryNetworkRepository) -> None:
        path = self.config.sections_path
        by_line: Dict[int, List[Section]] = defaultdict(list)
        try:
            for row in _rows(path):
                line_id = row.get("line_id", "")
                if not line_id:
                    continue
                section_id = row.get("section_id", "")
                by_line[int(line_id)].append(
                    Section(
                        id=int(section_id) if section_id else None,
                        line_id=int(line_id),
                        up_station_id=int(row["up_station_id"]),
                        down_station_id=int(row["down_station_id"]),
                        distance=int(row["distance"]),
                    )
                )
        except (OSError, KeyError, ValueError, SubwayError) as e:
            raise GraphError(
                f"Failed to load sections: {e}", file_path=str(path), cause=e
            )

        for line_id, sections in by_line.items():
            if network.lines.find_by_id(line_id) is None:
                raise GraphError(
                    f"Sections reference unknown line {line_id}", file_path=str(path)
                )
            for section in sections:
                for station_id in (section.up_station_id, section.down_station_id):
                    if not network.stations.exists(station_id):
                        raise GraphError(
                            f"Section of line {line_id} references unknown "
                            f"station {station_id}",
                            file_path=str(path),
                        )
            try:
                chain = Sections.of(line_id, sections)
            except SubwayError as e:
                raise GraphError(
                    f"Invalid sections for line {line_id}", file_path=str(path), cause=e
                )
            network.sections.replace_line(line_id, list(chain))

    def clear_cache(self) -> None:
        """Drop the loaded network so the next load reads the files again."""
        self._network = None
        self._logger.debug("Network cache cleared")
