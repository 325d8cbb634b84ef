from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import ValidationError

from ._timeline import Timeline

if TYPE_CHECKING:
    from ._graph import DAG

logger = logging.getLogger(__name__)


class TimelineError(Exception):
    """Error reading or validating a timeline file."""


def load_timeline(input_path: Path) -> Timeline:
    """Load a timeline from a TOML file.

    Expected format::

        title = "Heist"

        [actors]
        alice = ["briefing", "vault", "escape"]
        bob = ["briefing", "getaway", "escape"]

    Args:
        input_path: Path to the TOML file.

    Returns:
        The validated Timeline.

    Raises:
        TimelineError: If the file cannot be read, is not valid TOML or does not describe a timeline.

    """
    try:
        f = input_path.open("rb")
    except OSError as e:
        msg = f"Cannot read {input_path}: {e}"
        raise TimelineError(msg) from e

    with f:
        try:
            data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise TimelineError(msg) from e
        except OSError as e:
            msg = f"Cannot read {input_path}: {e}"
            raise TimelineError(msg) from e

    try:
        timeline = Timeline.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid timeline in {input_path}: {e}"
        raise TimelineError(msg) from e

    logger.debug(f"Loaded timeline with {len(timeline.actors)} actors from {input_path}")
    return timeline


def analysis_to_dict(dag: DAG[str], title: str | None = None) -> dict[str, Any]:
    """Summarize a DAG as TOML-compatible data.

    Sets are written as sorted lists; the topological order, layers and
    edges keep the DAG's own ordering.
    """
    data: dict[str, Any] = {}
    if title is not None:
        data["title"] = title
    data["size"] = dag.size()
    data["initials"] = sorted(dag.initials())
    data["finals"] = sorted(dag.finals())
    data["order"] = list(dag.topo_sort())
    data["layers"] = [sorted(layer) for layer in dag.antichains()]
    data["edges"] = [[source, target] for source, target in dag.edge_pairs()]
    return data


def export_analysis(dag: DAG[str], output_path: Path, title: str | None = None) -> None:
    """Write the analysis of a DAG to a TOML file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(analysis_to_dict(dag, title), f)
    logger.debug(f"Exported analysis to {output_path}")
