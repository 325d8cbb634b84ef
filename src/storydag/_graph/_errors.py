"""Errors raised while validating a precedence relation."""

from collections.abc import Hashable, Iterable


class CycleDetectedError(ValueError):
    """Raised when the edge relation contains a directed cycle.

    Attributes:
        residual: Nodes that could not be ordered (every cycle lies inside this set).
        cycle: Closed walk proving the cycle, first and last node equal.

    """

    def __init__(self, residual: Iterable[Hashable], cycle: tuple[Hashable, ...]) -> None:
        self.residual = frozenset(residual)
        self.cycle = cycle
        walk = " -> ".join(str(node) for node in cycle)
        super().__init__(f"Cycle detected in graph: {walk}")
