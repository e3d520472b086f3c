"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from gengraph._graph import Graph, NodeId


def render_graph(graph: Graph[Any, Any], console: Console) -> None:
    """Render the nodes and edges of a graph as two Rich tables.

    Args:
        graph: Graph to render.
        console: Rich Console to output to.

    """
    nodes = graph.nodes()
    if not nodes:
        console.print("[dim]Graph is empty[/dim]")
        return

    node_table = Table(show_header=True, header_style="bold cyan", title="Nodes")
    node_table.add_column("ID", justify="right", style="bold")
    node_table.add_column("Data")
    node_table.add_column("In", justify="right")
    node_table.add_column("Out", justify="right")
    for node in nodes:
        node_table.add_row(
            str(node.id),
            escape(str(node.data)),
            str(len(node.incoming)),
            str(len(node.outgoing)),
        )
    console.print(node_table)

    edges = sorted(graph.edges(), key=lambda edge: edge.id)
    if not edges:
        console.print("[dim]No edges[/dim]")
        return

    edge_table = Table(show_header=True, header_style="bold cyan", title="Edges")
    edge_table.add_column("Edge", style="bold")
    edge_table.add_column("Data")
    for edge in edges:
        edge_table.add_row(str(edge.id), escape(str(edge.data)))
    console.print(edge_table)


def render_connections(graph: Graph[Any, Any], node_id: NodeId, console: Console) -> None:
    """Render the direct successors of a node using Rich Tree.

    Args:
        graph: Graph containing the node.
        node_id: Node whose outgoing edges are shown.
        console: Rich Console to output to.

    """
    node = graph.get_node(node_id)
    if node is None:
        console.print(f"[red]Node {node_id} not found[/red]")
        return

    rich_tree = Tree(f"[bold]{escape(str(node.data))}[/bold]")
    for target_id, edge in sorted(node.outgoing.items()):
        target = graph.get_node(target_id)
        if target is None:
            continue
        branch = rich_tree.add(escape(str(target.data)))
        branch.add(f"[dim]{escape(str(edge.data))}[/dim]")
    console.print(rich_tree)


def render_order(order: list[NodeId], graph: Graph[Any, Any], console: Console) -> None:
    """Render a topological order as a Rich table.

    Args:
        order: Node identities in topological order.
        graph: Graph the identities belong to.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Data")

    for position, node_id in enumerate(order, start=1):
        node = graph.get_node(node_id)
        data = escape(str(node.data)) if node is not None else "[dim]<removed>[/dim]"
        table.add_row(str(position), str(node_id), data)

    console.print(table)
    console.print(f"\n[dim]Total: {len(order)} nodes[/dim]")
