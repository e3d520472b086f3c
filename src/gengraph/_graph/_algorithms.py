"""Graph algorithms operating on ``Graph`` instances."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any

from ._errors import CyclicGraphError, SortLimitExceededError

if TYPE_CHECKING:
    from ._graph import Graph
    from ._ids import NodeId

logger = logging.getLogger(__name__)


def kahn_sort(working: Graph[Any, Any], *, max_steps: int | None = None) -> list[NodeId]:
    """Sort a graph topologically by consuming its edges (Kahn's algorithm).

    The graph is modified: every edge that is resolved is removed from it.
    Pass a private copy (``Graph.clone``), never a graph other code can see.

    Nodes with no incoming edges seed a FIFO queue in the graph's node order.
    Each dequeued node is appended to the result and its outgoing edges are
    removed; a target whose last incoming edge goes away joins the queue.
    Edges still present once the queue is empty belong to a cycle.

    Args:
        working: Graph to sort. Emptied of edges on success.
        max_steps: Maximum number of nodes to dequeue. Defaults to the number
            of nodes in ``working``, which a correct run never exceeds.

    Returns:
        List of node identities of ``working`` in topological order.

    Raises:
        CyclicGraphError: If the graph contains a cycle.
        SortLimitExceededError: If more than ``max_steps`` nodes are dequeued.

    Example:
        >>> from gengraph import Graph
        >>> kahn_sort(Graph.from_data(["a", "b", "c"], {(0, 1): None, (1, 2): None}))
        [0, 1, 2]

    """
    limit = working.node_count if max_steps is None else max_steps
    queue = deque(working.roots())
    order: list[NodeId] = []

    while queue:
        if len(order) >= limit:
            raise SortLimitExceededError(limit)
        node_id = queue.popleft()
        order.append(node_id)
        for target in working.successors(node_id):
            working.remove_edge(node_id, target)
            target_node = working.get_node(target)
            if target_node is not None and not target_node.incoming:
                queue.append(target)

    remaining = [edge.id for edge in working.edges()]
    if remaining:
        logger.debug("Sort stopped after %d node(s), %d edge(s) left", len(order), len(remaining))
        raise CyclicGraphError(remaining)

    return order
