"""Turn per-actor scene orderings into a validated, layered DAG."""

__all__ = [
    "DAG",
    "CycleDetectedError",
    "Timeline",
    "TimelineError",
    "analysis_to_dict",
    "antichain_decomposition",
    "export_analysis",
    "find_cycle",
    "load_timeline",
    "normalize_adjacency",
    "render_dot",
    "topological_sort",
]

from ._graph import (
    DAG,
    CycleDetectedError,
    antichain_decomposition,
    find_cycle,
    normalize_adjacency,
    topological_sort,
)
from ._io import TimelineError, analysis_to_dict, export_analysis, load_timeline
from ._render import render_dot
from ._timeline import Timeline
