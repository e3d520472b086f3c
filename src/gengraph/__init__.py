"""Generic in-memory directed graph with typed node and edge payloads."""

__all__ = [
    "CyclicGraphError",
    "Edge",
    "EdgeEntry",
    "EdgeExistsError",
    "EdgeId",
    "Graph",
    "GraphDocument",
    "GraphDocumentError",
    "GraphError",
    "LoadedGraph",
    "Node",
    "NodeEntry",
    "NodeId",
    "NodeNotFoundError",
    "SortLimitExceededError",
    "graph_from_document",
    "load_graph_from_toml",
    "parse_graph_document",
]

from ._graph import (
    CyclicGraphError,
    Edge,
    EdgeExistsError,
    EdgeId,
    Graph,
    GraphError,
    Node,
    NodeId,
    NodeNotFoundError,
    SortLimitExceededError,
)
from ._io import (
    EdgeEntry,
    GraphDocument,
    GraphDocumentError,
    LoadedGraph,
    NodeEntry,
    graph_from_document,
    load_graph_from_toml,
    parse_graph_document,
)
