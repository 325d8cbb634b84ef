"""DOT rendering of a layered scene graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ._graph import DAG

RANKDIRS = ("TB", "LR", "BT", "RL")


def quote(identifier: object) -> str:
    """Quote an identifier for DOT, escaping backslashes and double quotes."""
    text = str(identifier).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def render_dot(
    dag: DAG[str],
    *,
    title: str | None = None,
    edge_labels: Mapping[tuple[str, str], Sequence[str]] | None = None,
    rankdir: str = "TB",
) -> str:
    """Render a DAG as a Graphviz digraph.

    Each antichain becomes a ``rank=same`` group so that scenes happening
    "at the same time" line up. Edges follow ``dag.edge_pairs()``; an edge
    found in ``edge_labels`` gets a label listing its actors.

    Args:
        dag: The graph to render.
        title: Optional graph name.
        edge_labels: Optional mapping from (source, target) to actor names.
        rankdir: Layout direction, one of TB, LR, BT, RL.

    Returns:
        The DOT source, ending with a newline.

    Raises:
        ValueError: If rankdir is not a known direction.

    """
    if rankdir not in RANKDIRS:
        msg = f"Invalid rankdir '{rankdir}', expected one of {', '.join(RANKDIRS)}"
        raise ValueError(msg)

    header = f"digraph {quote(title)} {{" if title else "digraph {"
    lines = [header, f"  rankdir={rankdir};"]

    for layer in dag.antichains():
        members = " ".join(f"{quote(node)};" for node in sorted(layer))
        lines.append(f"  {{ rank=same; {members} }}")

    labels = edge_labels or {}
    for source, target in dag.edge_pairs():
        edge = f"  {quote(source)} -> {quote(target)}"
        actors = labels.get((source, target))
        if actors:
            edge += f" [label={quote(', '.join(actors))}]"
        lines.append(f"{edge};")

    lines.append("}")
    return "\n".join(lines) + "\n"
