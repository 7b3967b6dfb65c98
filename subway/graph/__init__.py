"""Graph-related utilities for representing the subway network.

This subpackage contains modules to build an in-memory multigraph from
station and section snapshots and to run path-finding on top of it.
"""

from .builder import Edge, NetworkGraph, build_graph
from .dijkstra import shortest_path

__all__ = ["Edge", "NetworkGraph", "build_graph", "shortest_path"]
