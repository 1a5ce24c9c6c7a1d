"""Graph inspection commands: show, descendants, ancestors, path."""

import json
from collections.abc import Hashable
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from dagweave.core.domain.dag import DirectedAcyclicGraph
from dagweave.core.domain.node import Node
from dagweave.core.exceptions import CycleDetectedError, GraphFileError
from dagweave.io.graph_file import build_graph, load_graph_file
from dagweave.visualization.tree import build_tree

console = Console()

GraphFileArg = Annotated[
    Path,
    typer.Argument(
        help="Path to YAML/JSON graph file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Print full records as JSON")]


def _fail(message: str, error: Exception) -> typer.Exit:
    console.print(f"[red]✗ {message}:[/red] {escape(str(error))}")
    return typer.Exit(1)


def _load(ctx: typer.Context, graph_file: Path) -> DirectedAcyclicGraph:
    """Build the graph from ``graph_file``, exiting with status 1 on errors."""
    graph_config = (ctx.obj or {}).get("graph_config")
    try:
        document = load_graph_file(graph_file)
        return build_graph(document, config=graph_config, source=graph_file)
    except GraphFileError as e:
        raise _fail("Graph file error", e) from e
    except CycleDetectedError as e:
        raise _fail("Cycle detected", e) from e


def _resolve(graph: DirectedAcyclicGraph, key_text: str) -> Node:
    """Find a vertex by key, comparing as text so numeric keys work too."""
    if key_text in graph:
        return graph.nodes[key_text]
    for key, node in graph.nodes.items():
        if str(key) == key_text:
            return node
    console.print(f"[red]✗ Unknown vertex:[/red] {escape(key_text)}")
    raise typer.Exit(1)


def _print_records(graph: DirectedAcyclicGraph, records: list[Any], as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(records, default=str))
        return
    for record in records:
        key: Hashable = record[graph.unique_key]
        console.print(str(key), markup=False, highlight=False, soft_wrap=True)


def show(
    ctx: typer.Context,
    graph_file: GraphFileArg,
    tree: Annotated[bool, typer.Option("--tree", "-t", help="Draw a Rich tree")] = False,
) -> None:
    """Print the graph from its root, one line per path.

    Examples
    --------
    dagweave show letters.yaml
    dagweave show letters.yaml --tree
    """
    graph = _load(ctx, graph_file)

    if tree:
        console.print(build_tree(graph, title=graph_file.name))
        return

    console.print(graph.render(), end="", markup=False, highlight=False, soft_wrap=True)


def descendants(
    ctx: typer.Context,
    graph_file: GraphFileArg,
    key: Annotated[str, typer.Argument(help="Key of the starting vertex")],
    as_json: JsonOpt = False,
) -> None:
    """List descendants of KEY in depth-first order, once per path."""
    graph = _load(ctx, graph_file)
    node = _resolve(graph, key)
    _print_records(graph, graph.descendants_of(node.data), as_json)


def ancestors(
    ctx: typer.Context,
    graph_file: GraphFileArg,
    key: Annotated[str, typer.Argument(help="Key of the starting vertex")],
    as_json: JsonOpt = False,
) -> None:
    """List ancestors of KEY in depth-first order, once per path."""
    graph = _load(ctx, graph_file)
    node = _resolve(graph, key)
    _print_records(graph, graph.ancestors_of(node.data), as_json)


def path(
    ctx: typer.Context,
    graph_file: GraphFileArg,
    source: Annotated[str, typer.Argument(help="Key where paths start")],
    target: Annotated[str, typer.Argument(help="Key where paths end")],
    as_json: JsonOpt = False,
) -> None:
    """List the vertices on paths from SOURCE down to TARGET."""
    graph = _load(ctx, graph_file)
    source_node = _resolve(graph, source)
    target_node = _resolve(graph, target)

    records = graph.find_edge(source_node.data, target_node.data)
    if not records and not as_json:
        console.print(f"[yellow]No path from {escape(source)} to {escape(target)}[/yellow]")
        return
    _print_records(graph, records, as_json)
