"""Graph algorithms over successor maps.

A successor map sends each node to the nodes that must come after it:
``{"a": {"b"}}`` is the single edge ``a -> b``. Every function here works on a
private scratch copy and never mutates its input.
"""

import bisect
import logging
from collections import defaultdict
from collections.abc import Collection, Mapping
from typing import Any, Protocol

from ._errors import CycleDetectedError

logger = logging.getLogger(__name__)


class Comparable(Protocol):
    """A hashable node identifier that supports ``<``."""

    def __hash__(self) -> int: ...

    def __lt__(self, other: Any, /) -> bool: ...


def normalize_adjacency[T: Comparable](successors: Mapping[T, Collection[T]]) -> dict[T, frozenset[T]]:
    """Return a copy of the successor map in which every node is a key.

    Nodes that only appear as successors get an empty successor set. Keys keep
    the input's insertion order; implicit nodes are appended in sorted order.

    Example:
        >>> normalize_adjacency({"a": ["c", "b"]})
        {'a': frozenset({'b', 'c'}), 'b': frozenset(), 'c': frozenset()}

    """
    normalized = {node: frozenset(succ) for node, succ in successors.items()}
    implicit = {succ for targets in normalized.values() for succ in targets if succ not in normalized}
    for node in sorted(implicit):
        normalized[node] = frozenset()
    return normalized


def _predecessor_index[T: Comparable](successors: Mapping[T, Collection[T]]) -> dict[T, list[T]]:
    predecessors: defaultdict[T, list[T]] = defaultdict(list)
    for node, targets in successors.items():
        for target in targets:
            predecessors[target].append(node)
    return predecessors


def topological_sort[T: Comparable](successors: Mapping[T, Collection[T]]) -> list[T]:
    """Sort a graph topologically, working backwards from its sinks.

    This is Kahn's algorithm run in reverse: instead of counting incoming
    edges, a node becomes eligible once every one of its successors has been
    placed. Nodes are collected sink-first and the result is reversed.

    Among simultaneously eligible nodes the greatest is consumed first, so
    after the reversal they come out in ascending order.

    Args:
        successors: Mapping from node to the nodes that must come after it.
            Successors that are not keys are treated as sinks.

    Returns:
        List of all nodes, each before every node it has an edge to.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    Example:
        >>> topological_sort({"a": ["b", "c"], "b": ["d"], "c": ["d"]})
        ['a', 'b', 'c', 'd']

    """
    scratch = {node: set(targets) for node, targets in normalize_adjacency(successors).items()}
    predecessors = _predecessor_index(scratch)

    ready = sorted(node for node, targets in scratch.items() if not targets)
    placed: list[T] = []

    while ready:
        node = ready.pop()
        placed.append(node)
        scratch.pop(node, None)
        for pred in predecessors.get(node, ()):
            remaining = scratch.get(pred)
            if remaining is None:
                continue
            if len(remaining) == 1:
                # node was the last successor of pred
                del scratch[pred]
                bisect.insort(ready, pred)
            else:
                remaining.discard(node)

    if scratch:
        logger.debug(f"{len(scratch)} nodes left unordered, tracing cycle")
        raise CycleDetectedError(scratch, find_cycle(scratch))

    placed.reverse()
    return placed


def find_cycle[T: Comparable](residual: Mapping[T, Collection[T]]) -> tuple[T, ...]:
    """Trace a cycle through a graph in which every node has a successor.

    Starts at the smallest node and keeps following the smallest successor
    until some node is visited twice. The walk is not necessarily the shortest
    cycle.

    Args:
        residual: Successor map where every node has at least one successor
            that is itself a key (what is left after a failed topological sort).

    Returns:
        The closed walk, starting and ending at the same node.

    Raises:
        ValueError: If the map is empty or a node has no successor inside it.

    Example:
        >>> find_cycle({"a": {"b"}, "b": {"c"}, "c": {"b"}})
        ('b', 'c', 'b')

    """
    if not residual:
        msg = "Cannot trace a cycle through an empty graph"
        raise ValueError(msg)

    node = min(residual)
    position: dict[T, int] = {}
    walk: list[T] = []
    while node not in position:
        position[node] = len(walk)
        walk.append(node)
        candidates = [succ for succ in residual[node] if succ in residual]
        if not candidates:
            msg = f"Node {node!r} has no successor inside the graph"
            raise ValueError(msg)
        node = min(candidates)

    return (*walk[position[node] :], node)


def antichain_decomposition[T: Comparable](successors: Mapping[T, Collection[T]]) -> list[frozenset[T]]:
    """Split a DAG into layers of mutually unreachable nodes.

    Each round removes every current sink at once; the removed set is one
    antichain. The rounds are reversed at the end, so the first layer holds
    the source side and the last layer holds the original sinks. Every edge
    goes from an earlier layer to a strictly later one.

    Args:
        successors: Mapping from node to the nodes that must come after it.

    Returns:
        Layers in source-to-sink order. Together they partition the nodes.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    Example:
        >>> antichain_decomposition({"a": {"b", "c"}, "b": {"d"}, "c": {"d"}})
        [frozenset({'a'}), frozenset({'b', 'c'}), frozenset({'d'})]

    """
    scratch = {node: set(targets) for node, targets in normalize_adjacency(successors).items()}
    layers: list[frozenset[T]] = []

    while scratch:
        sinks = frozenset(node for node, targets in scratch.items() if not targets)
        if not sinks:
            raise CycleDetectedError(scratch, find_cycle(scratch))
        layers.append(sinks)
        for node in sinks:
            del scratch[node]
        for targets in scratch.values():
            targets -= sinks

    layers.reverse()
    return layers
