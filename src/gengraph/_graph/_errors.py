"""Exceptions raised by graph operations."""

from collections.abc import Iterable

from ._ids import EdgeId, NodeId


class GraphError(Exception):
    """Base class for graph errors."""


class NodeNotFoundError(GraphError, LookupError):
    """A referenced node identity does not exist in the graph."""

    def __init__(self, node_id: NodeId, message: str | None = None) -> None:
        self.node_id = node_id
        super().__init__(message or f"Node {node_id} not found")


class EdgeExistsError(GraphError, ValueError):
    """An edge with the same ordered endpoint pair is already present."""

    def __init__(self, edge_id: EdgeId) -> None:
        self.edge_id = edge_id
        super().__init__(f"Edge {edge_id.source} -> {edge_id.target} already exists")


class CyclicGraphError(GraphError, ValueError):
    """The graph contains a cycle, so no topological order exists."""

    def __init__(self, remaining_edges: Iterable[EdgeId]) -> None:
        self.remaining_edges = frozenset(remaining_edges)
        super().__init__(f"Graph is cyclic ({len(self.remaining_edges)} edges left unresolved)")


class SortLimitExceededError(GraphError, RuntimeError):
    """Topological sort dequeued more nodes than its step limit allows."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Topological sort exceeded its limit of {limit} steps")
