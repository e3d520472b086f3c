"""Node and edge records owned by a ``Graph``."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, TypeVar

from ._ids import EdgeId, NodeId

N = TypeVar("N")
E = TypeVar("E")


@dataclass(slots=True, eq=False)
class Edge(Generic[E]):
    """A directed edge with a payload.

    Edges refer to their endpoints by identity only. Use
    ``Graph.get_node(edge.target)`` to reach the endpoint record.

    Attributes:
        id: The ordered ``(source, target)`` pair identifying the edge.
        data: Caller-defined payload.

    """

    id: EdgeId
    data: E

    @property
    def source(self) -> NodeId:
        return self.id.source

    @property
    def target(self) -> NodeId:
        return self.id.target

    def __repr__(self) -> str:
        return f"Edge({self.id.source} -> {self.id.target}, data={self.data!r})"


@dataclass(slots=True, eq=False)
class Node(Generic[N, E]):
    """A node with a payload and its incoming/outgoing adjacency.

    Records are created and updated only by the owning graph. The adjacency
    mappings are live, read-only views keyed by neighbor identity.

    Attributes:
        id: Identity assigned by the graph.
        data: Caller-defined payload.

    """

    id: NodeId
    data: N
    _incoming: dict[NodeId, Edge[E]] = field(default_factory=dict, repr=False)
    _outgoing: dict[NodeId, Edge[E]] = field(default_factory=dict, repr=False)

    @property
    def incoming(self) -> Mapping[NodeId, Edge[E]]:
        """Edges pointing at this node, keyed by their source."""
        return MappingProxyType(self._incoming)

    @property
    def outgoing(self) -> Mapping[NodeId, Edge[E]]:
        """Edges leaving this node, keyed by their target."""
        return MappingProxyType(self._outgoing)
