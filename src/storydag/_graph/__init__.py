"""Graph module providing the validated DAG and its algorithms.

This module contains:
- DAG[T]: An immutable, validated directed acyclic graph
- topological_sort: Sink-driven ordering of a successor map
- antichain_decomposition: Layering into mutually unreachable node sets
- find_cycle: Cycle witness tracing for rejected inputs
"""

from ._algorithms import antichain_decomposition, find_cycle, normalize_adjacency, topological_sort
from ._dag import DAG
from ._errors import CycleDetectedError

__all__ = [
    "DAG",
    "CycleDetectedError",
    "antichain_decomposition",
    "find_cycle",
    "normalize_adjacency",
    "topological_sort",
]
