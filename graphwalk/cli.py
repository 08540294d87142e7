"""CLI entry point for Graphwalk."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from graphwalk.core.config import get_settings
from graphwalk.core.exceptions import GraphwalkError
from graphwalk.core.graph import (
    Graph,
    TraversalOrder,
    articulation_points,
    biconnected_components,
    connected_components,
    load_graph,
    max_flow,
    strongly_connected_components,
    traverse,
    traverse_all,
)
from graphwalk.core.logging import get_logger, setup_logging

app = typer.Typer(
    name="graphwalk",
    help="Graph traversal and connectivity analysis.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

GraphFile = Annotated[Path, typer.Argument(help="Adjacency list file ('node: n1 n2 ...')")]
Directed = Annotated[bool, typer.Option("--directed", "-D", help="Treat the graph as directed")]
EdgesFile = Annotated[
    Path | None,
    typer.Option(
        "--edges", "-e", help="Edge directions file ('from to [capacity]'), needed with --directed"
    ),
]
RequiredEdgesFile = Annotated[
    Path,
    typer.Option("--edges", "-e", help="Edge directions file ('from to [capacity]')"),
]
OutputJson = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn engine errors into a message and exit code 1."""
    try:
        yield
    except GraphwalkError as e:
        logger.info("command_failed", error=str(e), error_type=type(e).__name__)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def format_nodes(nodes: tuple[int, ...] | list[int]) -> str:
    return ", ".join(str(n) for n in nodes) if nodes else "[dim]none[/]"


def print_groups(title: str, groups: tuple[tuple[int, ...], ...]) -> None:
    """Print numbered node groups as a table."""
    if not groups:
        console.print(f"[bold]{title}:[/] [dim]none[/]")
        return
    table = Table(title=title, title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Nodes", style="cyan")
    for i, group in enumerate(groups, start=1):
        table.add_row(str(i), str(len(group)), format_nodes(group))
    console.print(table)


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    ] = None,
) -> None:
    """Configure logging before any command runs."""
    settings = get_settings().logging
    if log_level:
        settings = settings.model_copy(update={"level": log_level.upper()})
    setup_logging(settings)


@app.command("traverse")
def traverse_command(
    path: GraphFile,
    start: Annotated[
        int | None, typer.Option("--start", "-s", help="Start node (default: whole graph)")
    ] = None,
    order: Annotated[str | None, typer.Option("--order", "-o", help="bfs or dfs")] = None,
    directed: Directed = False,
    edges: EdgesFile = None,
    output_json: OutputJson = False,
) -> None:
    """Show the BFS or DFS visiting order, step by step."""
    try:
        walk = TraversalOrder((order or get_settings().default_order).lower())
    except ValueError:
        raise typer.BadParameter(f"Unknown order '{order}', use bfs or dfs") from None

    with handle_errors():
        graph = load_graph(path, directed=directed, edges_path=edges)
        steps = traverse(graph, start, walk) if start is not None else traverse_all(graph, walk)

    if output_json:
        print(json.dumps({"order": walk.value, "steps": [s.to_dict() for s in steps]}))
        return

    label = f"from [cyan]{start}[/]" if start is not None else "over the whole graph"
    console.print(f"[bold]{walk.value.upper()}[/] {label}")
    table = Table(show_header=True)
    table.add_column("Step", justify="right", style="dim")
    table.add_column("Node", justify="right", style="cyan")
    table.add_column("Visited so far")
    for i, step in enumerate(steps, start=1):
        table.add_row(str(i), str(step.node), format_nodes(sorted(step.visited)))
    console.print(table)
    console.print(f"Order: {' -> '.join(str(s.node) for s in steps)}")


@app.command()
def components(
    path: GraphFile,
    directed: Directed = False,
    edges: EdgesFile = None,
    output_json: OutputJson = False,
) -> None:
    """Show connected components."""
    with handle_errors():
        graph = load_graph(path, directed=directed, edges_path=edges)
        result = connected_components(graph)

    if output_json:
        print(json.dumps(result.to_dict()))
    else:
        print_groups("Connected components", result.components)


@app.command()
def articulation(
    path: GraphFile,
    show_removal: Annotated[
        bool,
        typer.Option("--show-removal", "-r", help="Also show components once cut vertices are removed"),
    ] = False,
    output_json: OutputJson = False,
) -> None:
    """Show articulation points and bridges."""
    with handle_errors():
        graph = load_graph(path)
        result = articulation_points(graph)
        remaining = (
            connected_components(graph.without_nodes(result.points)) if show_removal else None
        )

    if output_json:
        data: dict[str, Any] = result.to_dict()
        if remaining is not None:
            data["after_removal"] = remaining.as_lists()
        print(json.dumps(data))
        return

    console.print(f"[bold]Articulation points:[/] {format_nodes(result.points)}")
    bridges = ", ".join(f"{u}-{v}" for u, v in result.bridges)
    console.print(f"[bold]Bridges:[/] {bridges or '[dim]none[/]'}")
    if remaining is not None:
        print_groups("Components after removing articulation points", remaining.components)


@app.command()
def biconnected(
    path: GraphFile,
    output_json: OutputJson = False,
) -> None:
    """Show biconnected components."""
    with handle_errors():
        result = biconnected_components(load_graph(path))

    if output_json:
        print(json.dumps(result.to_dict()))
    else:
        print_groups("Biconnected components", result.components)


@app.command()
def scc(
    path: GraphFile,
    edges: RequiredEdgesFile,
    output_json: OutputJson = False,
) -> None:
    """Show strongly connected components of a directed graph."""
    with handle_errors():
        result = strongly_connected_components(load_graph(path, directed=True, edges_path=edges))

    if output_json:
        print(json.dumps(result.to_dict()))
    else:
        print_groups("Strongly connected components", result.components)


@app.command()
def maxflow(
    path: GraphFile,
    source: Annotated[int, typer.Option("--source", "-s", help="Source node")],
    sink: Annotated[int, typer.Option("--sink", "-t", help="Sink node")],
    edges: RequiredEdgesFile,
    output_json: OutputJson = False,
) -> None:
    """Compute the maximum flow of a directed graph."""
    with handle_errors():
        result = max_flow(load_graph(path, directed=True, edges_path=edges), source, sink)

    if output_json:
        print(json.dumps(result.to_dict()))
    else:
        console.print(
            f"Max flow from [cyan]{result.source}[/] to [cyan]{result.sink}[/]: "
            f"[bold green]{result.value}[/]"
        )


@app.command()
def analyze(
    path: GraphFile,
    directed: Directed = False,
    edges: EdgesFile = None,
    source: Annotated[int | None, typer.Option("--source", "-s", help="Max flow source")] = None,
    sink: Annotated[int | None, typer.Option("--sink", "-t", help="Max flow sink")] = None,
    output_json: OutputJson = False,
) -> None:
    """Run every analysis that applies to the graph."""
    with handle_errors():
        graph = load_graph(path, directed=directed, edges_path=edges)
        results = run_analyses(graph, source, sink)

    if output_json:
        print(json.dumps({kind: r.to_dict() for kind, r in results.items()}))
        return

    console.print(f"[dim]{graph!r}[/]")
    for kind, result in results.items():
        if kind == "articulation_points":
            console.print(f"[bold]Articulation points:[/] {format_nodes(result.points)}")
            bridges = ", ".join(f"{u}-{v}" for u, v in result.bridges)
            console.print(f"[bold]Bridges:[/] {bridges or '[dim]none[/]'}")
        elif kind == "max_flow":
            console.print(
                f"[bold]Max flow[/] {result.source} -> {result.sink}: [green]{result.value}[/]"
            )
        else:
            print_groups(kind.replace("_", " ").capitalize(), result.components)


def run_analyses(graph: Graph, source: int | None, sink: int | None) -> dict[str, Any]:
    """Results keyed by kind; SCC and max flow only for directed graphs."""
    results: dict[str, Any] = {}
    for result in (
        connected_components(graph),
        articulation_points(graph),
        biconnected_components(graph),
    ):
        results[result.kind] = result
    if graph.directed:
        results["strongly_connected_components"] = strongly_connected_components(graph)
        if source is not None and sink is not None:
            results["max_flow"] = max_flow(graph, source, sink)
    elif source is not None or sink is not None:
        err_console.print("[yellow]Max flow skipped: graph is undirected[/]")
    return results


if __name__ == "__main__":
    app()
