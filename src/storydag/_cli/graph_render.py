"""Rich rendering utilities for scene graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console

    from storydag._graph import DAG, CycleDetectedError


def _join(nodes: Iterable[str]) -> str:
    return ", ".join(escape(str(node)) for node in sorted(nodes))


def render_layer_table(dag: DAG[str], console: Console, title: str | None = None) -> None:
    """Render the antichains of a DAG as a Rich table inside a panel.

    Args:
        dag: The validated scene graph.
        console: Rich Console to output to.
        title: Optional timeline title for the panel.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Layer", justify="right", style="bold")
    table.add_column("Scenes")
    table.add_column("Count", justify="right", style="yellow")

    for index, layer in enumerate(dag.antichains()):
        table.add_row(str(index), _join(layer), str(len(layer)))

    panel_title = f"[bold]{escape(title)}[/bold]" if title else "[bold]Scene graph[/bold]"
    console.print(
        Panel(
            table,
            title=panel_title,
            subtitle=f"[dim]{dag.size()} scenes, {len(dag.edge_pairs())} edges[/dim]",
            border_style="cyan",
        ),
    )
    console.print(f"[cyan]Initial scenes:[/cyan] {_join(dag.initials())}")
    console.print(f"[cyan]Final scenes:[/cyan]   {_join(dag.finals())}")


def render_cycle(error: CycleDetectedError, console: Console) -> None:
    """Render a cycle witness and the scenes it blocks.

    Args:
        error: The error raised while building the DAG.
        console: Rich Console to output to.

    """
    walk = " -> ".join(escape(str(node)) for node in error.cycle)
    console.print("[red]✗ The timeline contains a cycle:[/red]")
    console.print(f"  [red]{walk}[/red]")
    console.print(f"[dim]Unordered scenes: {_join(error.residual)}[/dim]")
