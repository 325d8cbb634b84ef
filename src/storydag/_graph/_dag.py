"""Immutable, validated directed acyclic graph."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass

from ._algorithms import Comparable, antichain_decomposition, normalize_adjacency, topological_sort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, init=False, repr=False)
class DAG[T: Comparable]:
    """A validated precedence relation with its derived structure.

    The constructor takes a mapping from each node to its direct successors
    ("must come after") and either returns a fully analysed DAG or raises
    CycleDetectedError. Topological order and antichains are computed
    eagerly, so every query afterwards is a plain read.

    Nodes that only appear as successors are first-class nodes with no
    outgoing edges. The input mapping is copied, never mutated.

    Example:
        >>> dag = DAG({"a": {"b", "c"}, "b": {"d"}, "c": {"d"}, "d": set()})
        >>> dag.initials(), dag.finals()
        (frozenset({'a'}), frozenset({'d'}))
        >>> dag.topo_sort()
        ('a', 'b', 'c', 'd')

    """

    _successors: dict[T, frozenset[T]]
    _predecessors: dict[T, frozenset[T]]
    _order: tuple[T, ...]
    _edges: tuple[tuple[T, T], ...]
    _antichains: tuple[frozenset[T], ...]
    _layer_index: dict[T, int]

    def __init__(self, adjacency: Mapping[T, Collection[T]]) -> None:
        successors = normalize_adjacency(adjacency)
        order = tuple(topological_sort(successors))
        antichains = tuple(antichain_decomposition(successors))

        predecessors: dict[T, set[T]] = {node: set() for node in successors}
        for node, targets in successors.items():
            for target in targets:
                predecessors[target].add(node)

        position = {node: i for i, node in enumerate(order)}
        edges = sorted(
            ((source, target) for source, targets in successors.items() for target in targets),
            key=lambda edge: (position[edge[0]], position[edge[1]]),
        )

        object.__setattr__(self, "_successors", successors)
        object.__setattr__(self, "_predecessors", {k: frozenset(v) for k, v in predecessors.items()})
        object.__setattr__(self, "_order", order)
        object.__setattr__(self, "_edges", tuple(edges))
        object.__setattr__(self, "_antichains", antichains)
        object.__setattr__(
            self,
            "_layer_index",
            {node: i for i, layer in enumerate(antichains) for node in layer},
        )
        logger.debug(f"Built DAG with {len(order)} nodes, {len(edges)} edges, {len(antichains)} layers")

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]]) -> DAG[T]:
        """Build a DAG from (source, target) pairs.

        An edge (a, b) means "a comes before b". Nodes without any edge cannot
        be expressed this way; use the constructor for those.

        Args:
            edges: Iterable of (source, target) tuples.

        Returns:
            A new DAG.

        Raises:
            CycleDetectedError: If the edges form a cycle.

        """
        adjacency: dict[T, set[T]] = {}
        for source, target in edges:
            adjacency.setdefault(source, set()).add(target)
            adjacency.setdefault(target, set())
        return cls(adjacency)

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._successors)

    def size(self) -> int:
        """Return the number of nodes."""
        return len(self._successors)

    def initials(self) -> frozenset[T]:
        """Nodes with no incoming edge (sources)."""
        return frozenset(node for node, preds in self._predecessors.items() if not preds)

    def finals(self) -> frozenset[T]:
        """Nodes with no outgoing edge (sinks)."""
        return frozenset(node for node, succs in self._successors.items() if not succs)

    def topo_sort(self) -> tuple[T, ...]:
        """Return all nodes so that every edge points forward."""
        return self._order

    def edge_pairs(self) -> tuple[tuple[T, T], ...]:
        """Return every edge, ordered by the topological position of source then target."""
        return self._edges

    def antichains(self) -> tuple[frozenset[T], ...]:
        """Return the layered decomposition, source side first.

        Every edge goes from an earlier layer to a strictly later one, and
        no two nodes of a layer are connected by a path.
        """
        return self._antichains

    def layer_of(self, node: T) -> int:
        """Return the index of the antichain containing node.

        Raises:
            KeyError: If node is not in the graph.

        """
        return self._layer_index[node]

    def successors(self, node: T) -> frozenset[T]:
        """Direct successors of a node (empty for unknown nodes)."""
        return self._successors.get(node, frozenset())

    def predecessors(self, node: T) -> frozenset[T]:
        """Direct predecessors of a node (empty for unknown nodes)."""
        return self._predecessors.get(node, frozenset())

    def descendants(self, node: T) -> frozenset[T]:
        """Get every node reachable from node.

        Args:
            node: The node to query.

        Returns:
            Set of all nodes that must come after node.

        """
        visited: set[T] = set()
        stack = list(self.successors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def ancestors(self, node: T) -> frozenset[T]:
        """Get every node from which node is reachable.

        Args:
            node: The node to query.

        Returns:
            Set of all nodes that must come before node.

        """
        visited: set[T] = set()
        stack = list(self.predecessors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def is_antichain(self, nodes: Iterable[T]) -> bool:
        """Check that no two of the given nodes are connected by a directed path.

        Args:
            nodes: Nodes of this graph.

        Returns:
            True if no node in the collection can reach another one.

        """
        members = frozenset(nodes)
        return all(not (self.descendants(node) & members) for node in members)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._successors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._successors

    def __hash__(self) -> int:
        # equal DAGs have equal order and edges
        return hash((self._order, self._edges))

    def __repr__(self) -> str:
        return f"DAG(nodes={len(self._successors)}, edges={len(self._edges)}, layers={len(self._antichains)})"
