"""Identity types for graph nodes and edges."""

from typing import NamedTuple, NewType

NodeId = NewType("NodeId", int)
"""Opaque node identity, assigned by the graph in increasing order."""


class EdgeId(NamedTuple):
    """Identity of an edge: the ordered pair of its endpoint identities.

    Being a tuple, ``EdgeId(0, 1) == (0, 1)`` and both hash the same, so plain
    pairs can be used wherever an edge identity is expected.
    """

    source: NodeId
    target: NodeId

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"
