import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gengraph._graph import CyclicGraphError, Graph, GraphError, SortLimitExceededError
from gengraph._io import EdgeEntry, GraphDocumentError, LoadedGraph, NodeEntry, load_graph_from_toml

from .config import ConfigError, GengraphConfig, get_config
from .render import render_connections, render_graph, render_order

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Generic directed graph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _config() -> GengraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load(path: Path | None, config: GengraphConfig) -> LoadedGraph:
    """Load the graph document at ``path``, falling back to the configured input."""
    if path is None:
        if config.input is None:
            err_console.print("[red]✗ No graph given and no \\[tool.gengraph].input configured[/red]")
            raise typer.Exit(code=1)
        path = config.input

    err_console.print(f"[cyan]Loading graph from:[/cyan] {escape(str(path))}")
    try:
        return load_graph_from_toml(path)
    except (OSError, GraphDocumentError, GraphError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def build_demo_graph() -> Graph[NodeEntry, EdgeEntry]:
    """Build the three-node example graph: a -> b, b -> c and a -> c."""
    g = Graph[NodeEntry, EdgeEntry]()
    a = g.add_node(NodeEntry(key="a", label="This is node a"))
    b = g.add_node(NodeEntry(key="b", label="This is node b"))
    c = g.add_node(NodeEntry(key="c", label="This is node c"))
    g.add_edge(a, b, EdgeEntry(source="a", target="b", label="from a... ...to b"))
    g.add_edge(b, c, EdgeEntry(source="b", target="c", label="from b... ...to c"))
    g.add_edge(a, c, EdgeEntry(source="a", target="c", label="from a... ...to c"))
    return g


@app.command()
def demo() -> None:
    """Build a small example graph and print it."""
    g = build_demo_graph()
    out_console.out(str(g), end="")
    out_console.print()

    first = g.nodes()[0]
    out_console.print(f"[cyan]{first.data.key} is connected to:[/cyan]")
    render_connections(g, first.id, out_console)
    out_console.print()

    render_order(g.topological_sort(), g, out_console)


@app.command()
def show(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to a TOML graph document (defaults to the configured input)"),
    ] = None,
) -> None:
    """Show the nodes and edges of a graph document."""
    loaded = _load(path, _config())
    render_graph(loaded.graph, out_console)


@app.command()
def sort(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to a TOML graph document (defaults to the configured input)"),
    ] = None,
    *,
    max_steps: Annotated[
        int | None,
        typer.Option("--max-steps", min=1, help="Maximum number of nodes the sort may process"),
    ] = None,
) -> None:
    """Print the nodes of a graph document in topological order."""
    config = _config()
    loaded = _load(path, config)
    if max_steps is None:
        max_steps = config.max_sort_steps

    try:
        order = loaded.graph.topological_sort(max_steps=max_steps)
    except CyclicGraphError as e:
        edges = ", ".join(
            f"{loaded.key_of(edge_id.source)} -> {loaded.key_of(edge_id.target)}"
            for edge_id in sorted(e.remaining_edges)
        )
        err_console.print(f"[red]✗ Graph is cyclic; unresolved edges: {escape(edges)}[/red]")
        raise typer.Exit(code=1) from e
    except SortLimitExceededError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    logger.debug("Sorted %d nodes", len(order))
    render_order(order, loaded.graph, out_console)


def main() -> None:
    app()
