"""Loading graphs from TOML documents."""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._graph import Graph, NodeId

logger = logging.getLogger(__name__)


class GraphDocumentError(Exception):
    """A graph document could not be read or is invalid."""


# =============================================================================
# Document Models
# =============================================================================


class NodeEntry(BaseModel):
    """A node as described in a graph document.

    Example:
        [[nodes]]
        key = "a"
        label = "This is node a"

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(min_length=1)
    label: str = ""

    def __str__(self) -> str:
        return self.label or self.key


class EdgeEntry(BaseModel):
    """An edge as described in a graph document, referring to nodes by key.

    Example:
        [[edges]]
        source = "a"
        target = "b"
        label = "from a to b"

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    target: str
    label: str = ""

    def __str__(self) -> str:
        return self.label or f"{self.source} -> {self.target}"


class GraphDocument(BaseModel):
    """A whole graph document: a list of nodes and a list of edges between them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    nodes: list[NodeEntry] = Field(default_factory=list)
    edges: list[EdgeEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> Self:
        """Reject duplicate node keys, dangling edge endpoints and repeated edges."""
        keys: set[str] = set()
        for node in self.nodes:
            if node.key in keys:
                msg = f"Duplicate node key '{node.key}'"
                raise ValueError(msg)
            keys.add(node.key)

        pairs: set[tuple[str, str]] = set()
        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in keys:
                    msg = f"Edge {edge.source} -> {edge.target} references unknown node '{endpoint}'"
                    raise ValueError(msg)
            pair = (edge.source, edge.target)
            if pair in pairs:
                msg = f"Duplicate edge {edge.source} -> {edge.target}"
                raise ValueError(msg)
            pairs.add(pair)
        return self


# =============================================================================
# Graph Construction
# =============================================================================


@dataclass(frozen=True, slots=True)
class LoadedGraph:
    """A graph built from a document, with the document's keys resolved to node identities."""

    graph: Graph[NodeEntry, EdgeEntry]
    ids: dict[str, NodeId]

    def key_of(self, node_id: NodeId) -> str:
        """Return the document key of a node identity."""
        node = self.graph.get_node(node_id)
        if node is None:
            msg = f"Node {node_id} is not part of this graph"
            raise KeyError(msg)
        return node.data.key


def graph_from_document(document: GraphDocument) -> LoadedGraph:
    """Build a graph from a validated document.

    Nodes receive identities in document order, so the first node listed
    gets identity 0.

    Args:
        document: The validated graph document.

    Returns:
        The built graph and the mapping from node keys to identities.

    """
    ids = {node.key: NodeId(position) for position, node in enumerate(document.nodes)}
    graph = Graph[NodeEntry, EdgeEntry].from_data(
        document.nodes,
        [((ids[edge.source], ids[edge.target]), edge) for edge in document.edges],
    )
    return LoadedGraph(graph=graph, ids=ids)


def parse_graph_document(contents: dict[str, Any]) -> GraphDocument:
    """Validate parsed TOML contents as a graph document.

    Raises:
        GraphDocumentError: If the contents do not describe a valid graph.

    """
    try:
        return GraphDocument.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid graph document: {e}"
        raise GraphDocumentError(msg) from e


def load_graph_from_toml(input_path: Path | str) -> LoadedGraph:
    """Load a graph from a TOML file.

    Args:
        input_path: Path to the TOML graph document.

    Returns:
        The built graph and the mapping from node keys to identities.

    Raises:
        GraphDocumentError: If the file is not valid TOML or not a valid graph document.

    """
    input_path = Path(input_path)

    with input_path.open("rb") as f:
        try:
            contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise GraphDocumentError(msg) from e

    loaded = graph_from_document(parse_graph_document(contents))
    logger.debug("Loaded graph with %d nodes from %s", len(loaded.ids), input_path)
    return loaded
