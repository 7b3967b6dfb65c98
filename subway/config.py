"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
the fare table, path-search limits, network data files and logging.

Configuration can be overridden via environment variables:
- SUBWAY_FARE_BASE_FARE=1350
- SUBWAY_PATH_MAX_SETTLED_VERTICES=10000
- SUBWAY_GRAPH_DATA_DIR=/path/to/data
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.fare import FareRules


class FareConfig(BaseSettings):
    """Fare table configuration.

    Environment variables prefixed with SUBWAY_FARE_.
    """

    model_config = SettingsConfigDict(env_prefix="SUBWAY_FARE_")

    base_fare: int = Field(default=1250, ge=0)
    base_distance: int = Field(default=10, gt=0)
    middle_distance: int = Field(default=50, gt=0)
    middle_unit_distance: int = Field(default=5, gt=0)
    far_unit_distance: int = Field(default=8, gt=0)
    unit_fare: int = Field(default=100, ge=0)
    discount_deduction: int = Field(default=350, ge=0)
    teenager_rate: float = Field(default=0.8, ge=0, le=1)
    child_rate: float = Field(default=0.5, ge=0, le=1)

    @model_validator(mode="after")
    def check_distance_tiers(self) -> FareConfig:
        """Reject a middle tier that does not start after the base tier."""
        if self.middle_distance <= self.base_distance:
            raise ValueError(
                f"middle_distance ({self.middle_distance}) must be greater than "
                f"base_distance ({self.base_distance})"
            )
        return self

    def to_rules(self) -> FareRules:
        """Return the fare table as a domain value."""
        return FareRules(**self.model_dump())


class PathConfig(BaseSettings):
    """Path-search configuration.

    Environment variables prefixed with SUBWAY_PATH_.
    """

    model_config = SettingsConfigDict(env_prefix="SUBWAY_PATH_")

    max_settled_vertices: Optional[int] = Field(default=None, gt=0)


class GraphConfig(BaseSettings):
    """Network data configuration.

    Environment variables prefixed with SUBWAY_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="SUBWAY_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stations_file: str = "stations.csv"
    lines_file: str = "lines.csv"
    sections_file: str = "sections.csv"

    @property
    def stations_path(self) -> Path:
        """Full path to stations CSV file."""
        return self.data_dir / self.stations_file

    @property
    def lines_path(self) -> Path:
        """Full path to lines CSV file."""
        return self.data_dir / self.lines_file

    @property
    def sections_path(self) -> Path:
        """Full path to sections CSV file."""
        return self.data_dir / self.sections_file


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with SUBWAY_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="SUBWAY_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.fare.base_fare)
        print(config.graph.stations_path)

    Environment variables prefixed with SUBWAY_.
    """

    model_config = SettingsConfigDict(env_prefix="SUBWAY_")

    fare: FareConfig = Field(default_factory=FareConfig)
    path: PathConfig = Field(default_factory=PathConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
