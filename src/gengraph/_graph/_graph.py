"""Generic mutable directed graph."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Generic, TypeVar

from ._algorithms import kahn_sort
from ._errors import CyclicGraphError, EdgeExistsError, NodeNotFoundError
from ._ids import EdgeId, NodeId
from ._records import Edge, Node
from ._rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

N = TypeVar("N")
E = TypeVar("E")


class Graph(Generic[N, E]):
    """A thread-safe directed graph with payloads on nodes and edges.

    The graph is generic over the node payload type ``N`` and the edge payload
    type ``E``. Nodes are identified by a ``NodeId`` handed out by
    ``add_node``; identities only ever increase and are never reused, even
    after the node is removed. Edges are identified by the ordered pair of
    their endpoints, so at most one edge exists from a given node to another.

    Every edge is recorded in three places which always agree: the graph's
    edge collection, the source node's ``outgoing`` map and the target node's
    ``incoming`` map.

    A single reader/writer lock guards the whole graph. Lookups take a shared
    hold, mutations an exclusive one. The private ``_``-prefixed helpers
    assume the caller already holds the lock.

    Example:
        >>> g = Graph[str, str]()
        >>> a = g.add_node("a")
        >>> b = g.add_node("b")
        >>> g.add_edge(a, b, "a to b")
        EdgeId(source=0, target=1)
        >>> g.topological_sort()
        [0, 1]

    """

    def __init__(self) -> None:
        self._nodes: dict[NodeId, Node[N, E]] = {}
        self._edges: dict[EdgeId, Edge[E]] = {}
        self._next_id = 0
        self._lock = ReadWriteLock()

    @classmethod
    def from_data(
        cls,
        nodes: Sequence[N],
        edges: Mapping[tuple[int, int], E] | Iterable[tuple[tuple[int, int], E]] = (),
    ) -> Graph[N, E]:
        """Build a graph from node payloads and an edge description.

        Node ``i`` of the new graph gets the payload ``nodes[i]`` and the
        identity ``i``. Edges are given either as a mapping from
        ``(source, target)`` positions to payloads or as an iterable of
        ``((source, target), payload)`` pairs.

        Args:
            nodes: Node payloads, in identity order.
            edges: Edge payloads keyed by ordered endpoint positions.

        Returns:
            A new Graph instance.

        Raises:
            NodeNotFoundError: If an edge references a position outside ``nodes``.
            EdgeExistsError: If the same ordered pair is described twice.

        Example:
            >>> g = Graph.from_data(["a", "b", "c"], {(0, 1): "ab", (1, 2): "bc"})
            >>> g.successors(0)
            [1]

        """
        graph = cls()
        for data in nodes:
            graph._add_node(data)
        items = edges.items() if isinstance(edges, Mapping) else edges
        for (source, target), data in items:
            graph._add_edge(NodeId(source), NodeId(target), data)
        return graph

    # -- nodes ---------------------------------------------------------------

    def add_node(self, data: N) -> NodeId:
        """Add a node carrying ``data`` and return its new identity."""
        with self._lock.write():
            return self._add_node(data)

    def _add_node(self, data: N) -> NodeId:
        node_id = NodeId(self._next_id)
        self._nodes[node_id] = Node(id=node_id, data=data)
        self._next_id += 1
        logger.debug("Added node %d", node_id)
        return node_id

    def get_node(self, node_id: NodeId) -> Node[N, E] | None:
        """Get the node record for ``node_id``, or None if there is none."""
        with self._lock.read():
            return self._get_node(node_id)

    def _get_node(self, node_id: NodeId) -> Node[N, E] | None:
        return self._nodes.get(node_id)

    def _require_node(self, node_id: NodeId) -> Node[N, E]:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def remove_node(self, node_id: NodeId) -> None:
        """Remove a node together with every edge touching it.

        Args:
            node_id: The node to remove.

        Raises:
            NodeNotFoundError: If the node does not exist.

        """
        with self._lock.write():
            self._remove_node(node_id)

    def _remove_node(self, node_id: NodeId) -> None:
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id, f"Node {node_id} not found to remove")
        incident = [edge_id for edge_id in self._edges if node_id in edge_id]
        for source, target in incident:
            self._remove_edge(source, target)
        del self._nodes[node_id]
        logger.debug("Removed node %d and %d incident edge(s)", node_id, len(incident))

    # -- edges ---------------------------------------------------------------

    def add_edge(self, source: NodeId, target: NodeId, data: E) -> EdgeId:
        """Add an edge from ``source`` to ``target`` carrying ``data``.

        Args:
            source: Identity of the source node.
            target: Identity of the target node.
            data: Payload for the edge.

        Returns:
            The identity of the new edge.

        Raises:
            NodeNotFoundError: If either endpoint does not exist.
            EdgeExistsError: If an edge from ``source`` to ``target`` already exists.

        """
        with self._lock.write():
            return self._add_edge(source, target, data)

    def _add_edge(self, source: NodeId, target: NodeId, data: E) -> EdgeId:
        source_node = self._require_node(source)
        target_node = self._require_node(target)
        edge_id = EdgeId(source, target)
        if edge_id in self._edges:
            raise EdgeExistsError(edge_id)

        edge = Edge(id=edge_id, data=data)
        source_node._outgoing[target] = edge  # noqa: SLF001
        target_node._incoming[source] = edge  # noqa: SLF001
        self._edges[edge_id] = edge
        logger.debug("Added edge %s", edge_id)
        return edge_id

    def get_edge(self, source: NodeId, target: NodeId) -> Edge[E] | None:
        """Get the edge from ``source`` to ``target``, or None if there is none."""
        with self._lock.read():
            return self._get_edge(source, target)

    def _get_edge(self, source: NodeId, target: NodeId) -> Edge[E] | None:
        return self._edges.get(EdgeId(source, target))

    def remove_edge(self, source: NodeId, target: NodeId) -> None:
        """Remove the edge from ``source`` to ``target``.

        Only the endpoints are checked: removing an edge that does not exist
        between two existing nodes does nothing.

        Raises:
            NodeNotFoundError: If either endpoint does not exist.

        """
        with self._lock.write():
            self._remove_edge(source, target)

    def _remove_edge(self, source: NodeId, target: NodeId) -> None:
        source_node = self._require_node(source)
        target_node = self._require_node(target)
        edge = self._edges.pop(EdgeId(source, target), None)
        source_node._outgoing.pop(target, None)  # noqa: SLF001
        target_node._incoming.pop(source, None)  # noqa: SLF001
        if edge is not None:
            logger.debug("Removed edge %s", edge.id)

    # -- whole-graph operations ----------------------------------------------

    def clone(self) -> Graph[N, E]:
        """Return an independent copy of the graph.

        The copy is taken under a single read hold, so it reflects one
        consistent state. Nodes are renumbered from 0 in ascending order of
        their original identities. Payloads are shared, not copied.

        Raises:
            NodeNotFoundError: If an edge of this graph references a missing node.
            EdgeExistsError: If an ordered pair is recorded twice.

        """
        with self._lock.read():
            copy, _ = self._clone()
        return copy

    def _clone(self) -> tuple[Graph[N, E], dict[NodeId, NodeId]]:
        """Copy the graph, also returning the original-to-copy identity map."""
        copy = type(self)()
        remap = {node_id: copy._add_node(self._nodes[node_id].data) for node_id in sorted(self._nodes)}
        for edge_id, edge in self._edges.items():
            for endpoint in edge_id:
                if endpoint not in remap:
                    raise NodeNotFoundError(endpoint)
            copy._add_edge(remap[edge_id.source], remap[edge_id.target], edge.data)
        return copy, remap

    def topological_sort(self, *, max_steps: int | None = None) -> list[NodeId]:
        """Return node identities ordered so that every edge points forward.

        Sorting works on a snapshot taken with ``clone``, so the graph itself
        is never modified and later concurrent mutations do not affect the
        result. The relative order of nodes that become ready at the same time
        is not guaranteed.

        Args:
            max_steps: Upper bound on the number of nodes the sort may process.
                Defaults to the number of nodes in the snapshot.

        Returns:
            List of node identities in topological order.

        Raises:
            CyclicGraphError: If the graph contains a cycle.
            SortLimitExceededError: If more than ``max_steps`` nodes are processed.

        """
        with self._lock.read():
            snapshot, remap = self._clone()
        original = {new: old for old, new in remap.items()}
        try:
            order = kahn_sort(snapshot, max_steps=max_steps)
        except CyclicGraphError as e:
            remaining = [EdgeId(original[edge_id.source], original[edge_id.target]) for edge_id in e.remaining_edges]
            raise CyclicGraphError(remaining) from None
        return [original[node_id] for node_id in order]

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        try:
            self.topological_sort()
        except CyclicGraphError:
            return True
        return False

    # -- queries -------------------------------------------------------------

    def nodes(self) -> list[Node[N, E]]:
        """Snapshot of all node records, in ascending identity order."""
        with self._lock.read():
            return [self._nodes[node_id] for node_id in sorted(self._nodes)]

    def edges(self) -> list[Edge[E]]:
        """Snapshot of all edge records."""
        with self._lock.read():
            return list(self._edges.values())

    @property
    def node_count(self) -> int:
        with self._lock.read():
            return len(self._nodes)

    @property
    def edge_count(self) -> int:
        with self._lock.read():
            return len(self._edges)

    def successors(self, node_id: NodeId) -> list[NodeId]:
        """Get the targets of the edges leaving ``node_id``.

        Raises:
            NodeNotFoundError: If the node does not exist.

        """
        with self._lock.read():
            return list(self._require_node(node_id)._outgoing)  # noqa: SLF001

    def predecessors(self, node_id: NodeId) -> list[NodeId]:
        """Get the sources of the edges pointing at ``node_id``.

        Raises:
            NodeNotFoundError: If the node does not exist.

        """
        with self._lock.read():
            return list(self._require_node(node_id)._incoming)  # noqa: SLF001

    def roots(self) -> list[NodeId]:
        """Get nodes with no incoming edges."""
        with self._lock.read():
            return [node.id for node in self._nodes.values() if not node._incoming]  # noqa: SLF001

    def leaves(self) -> list[NodeId]:
        """Get nodes with no outgoing edges."""
        with self._lock.read():
            return [node.id for node in self._nodes.values() if not node._outgoing]  # noqa: SLF001

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return self.node_count

    def __contains__(self, node_id: object) -> bool:
        """Check if a node identity is in the graph."""
        with self._lock.read():
            return node_id in self._nodes

    def __str__(self) -> str:
        with self._lock.read():
            lines = ["Nodes:"]
            lines.extend(f"  {node.id} = {node.data}" for node in self._nodes.values())
            lines.append("Edges:")
            lines.extend(f"  {edge.id} = {edge.data}" for edge in self._edges.values())
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        with self._lock.read():
            return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"
