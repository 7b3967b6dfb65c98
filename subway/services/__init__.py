"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data through adapters to fulfill use cases.

Available services:
- PathService: Shortest route and fare queries
- SectionService: Adding and removing sections of a line
"""

from .path_service import PathService
from .section_service import SectionService

__all__ = ["PathService", "SectionService"]
