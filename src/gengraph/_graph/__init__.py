"""Graph module providing the generic directed graph engine.

This module contains:
- Graph[N, E]: A mutable, thread-safe directed graph with node and edge payloads
- Node, Edge: Records owned by a graph
- NodeId, EdgeId: Identity types
- kahn_sort: Destructive topological sort used on graph snapshots
"""

from ._algorithms import kahn_sort
from ._errors import (
    CyclicGraphError,
    EdgeExistsError,
    GraphError,
    NodeNotFoundError,
    SortLimitExceededError,
)
from ._graph import Graph
from ._ids import EdgeId, NodeId
from ._records import Edge, Node
from ._rwlock import ReadWriteLock

__all__ = [
    "CyclicGraphError",
    "Edge",
    "EdgeExistsError",
    "EdgeId",
    "Graph",
    "GraphError",
    "Node",
    "NodeId",
    "NodeNotFoundError",
    "ReadWriteLock",
    "SortLimitExceededError",
    "kahn_sort",
]
