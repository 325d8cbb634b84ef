import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from storydag._graph import DAG, CycleDetectedError
from storydag._io import TimelineError, export_analysis, load_timeline
from storydag._render import render_dot
from storydag._timeline import Timeline

from .config import ConfigError, StorydagConfig, get_config
from .graph_render import render_cycle, render_layer_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)

TimelineArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to the timeline TOML file (defaults to [tool.storydag].input)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Storydag CLI."""
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


def _get_config() -> StorydagConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_dag(path: Path | None, config: StorydagConfig) -> tuple[Timeline, DAG[str]]:
    """Load the timeline and build its scene graph, exiting on any error."""
    timeline_path = path if path is not None else config.input
    if timeline_path is None:
        hint = escape("[tool.storydag].input")
        err_console.print(f"[red]Error: Timeline file required. Pass a path or configure {hint}[/red]")
        raise typer.Exit(code=1)

    if not timeline_path.is_file():
        err_console.print(f"[red]Error: Timeline file not found: {escape(str(timeline_path))}[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading timeline from:[/cyan] {escape(str(timeline_path))}")
    try:
        timeline = load_timeline(timeline_path)
    except TimelineError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    try:
        dag = timeline.build_dag()
    except CycleDetectedError as e:
        render_cycle(e, err_console)
        raise typer.Exit(code=1) from e

    logger.debug(f"Scene graph: {dag!r}")
    return timeline, dag


@app.command()
def check(path: TimelineArgument = None) -> None:
    """Check that a timeline is acyclic and show its layers."""
    config = _get_config()
    err_console.print()
    timeline, dag = _load_dag(path, config)
    err_console.print()

    render_layer_table(dag, err_console, timeline.title)

    err_console.print()
    err_console.print("[green]✓ Timeline is valid[/green]")
    err_console.print()


@app.command()
def order(path: TimelineArgument = None) -> None:
    """Print the scenes in topological order, one per line."""
    config = _get_config()
    _, dag = _load_dag(path, config)
    for scene in dag.topo_sort():
        typer.echo(scene)


@app.command()
def render(
    path: TimelineArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output DOT file (defaults to stdout)"),
    ] = None,
    labels: Annotated[
        bool | None,
        typer.Option("--labels/--no-labels", help="Label edges with the actors that carry them"),
    ] = None,
    rankdir: Annotated[
        str | None,
        typer.Option("--rankdir", help="Layout direction: TB, LR, BT or RL"),
    ] = None,
) -> None:
    """Render a timeline as a Graphviz DOT graph with one rank per layer."""
    config = _get_config()
    timeline, dag = _load_dag(path, config)

    effective_labels = labels if labels is not None else (config.labels if config.labels is not None else True)
    effective_rankdir = rankdir or config.rankdir or "TB"

    try:
        dot = render_dot(
            dag,
            title=timeline.title,
            edge_labels=timeline.edge_labels() if effective_labels else None,
            rankdir=effective_rankdir,
        )
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(dot, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dot, encoding="utf-8")
    err_console.print(f"[cyan]Writing graph to:[/cyan] {escape(str(output))}")
    err_console.print("[green]✓ Render complete[/green]")


@app.command()
def export(
    path: TimelineArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
) -> None:
    """Export the order, layers and edges of a timeline to TOML."""
    config = _get_config()
    effective_output = output if output is not None else config.output
    if effective_output is None:
        hint = escape("[tool.storydag].output")
        err_console.print(f"[red]Error: Output file required. Use -o/--output or configure {hint}[/red]")
        raise typer.Exit(code=1)

    timeline, dag = _load_dag(path, config)

    err_console.print(f"[cyan]Exporting analysis to:[/cyan] {escape(str(effective_output))}")
    export_analysis(dag, effective_output, timeline.title)
    err_console.print("[green]✓ Export complete[/green]")


def main() -> None:
    app()
