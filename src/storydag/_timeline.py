"""Per-actor timelines and their translation into a precedence relation.

A timeline lists, for every actor, the scenes that actor appears in, in the
order they happen to that actor. Two consecutive scenes of one actor give an
edge "earlier scene comes before later scene"; merging all actors yields the
adjacency map the DAG is built from.
"""

import logging
from typing import Self

from pydantic import BaseModel, ConfigDict, model_validator

from ._graph import DAG

logger = logging.getLogger(__name__)


class Timeline(BaseModel):
    """Ordered scene lists per actor.

    Example:
        >>> timeline = Timeline(actors={"alice": ["intro", "vault"], "bob": ["vault"]})
        >>> timeline.to_adjacency()
        {'intro': {'vault'}, 'vault': set()}

    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    actors: dict[str, tuple[str, ...]]

    @model_validator(mode="after")
    def _check_names(self) -> Self:
        for actor, scenes in self.actors.items():
            if not actor.strip():
                msg = "Actor names must not be empty"
                raise ValueError(msg)
            for scene in scenes:
                if not scene.strip():
                    msg = f"Actor '{actor}' has an empty scene name"
                    raise ValueError(msg)
        return self

    def scenes(self) -> list[str]:
        """Every scene, in order of first appearance."""
        seen: dict[str, None] = {}
        for scenes in self.actors.values():
            for scene in scenes:
                seen.setdefault(scene, None)
        return list(seen)

    def to_adjacency(self) -> dict[str, set[str]]:
        """Translate the scene lists into a successor map.

        Every scene becomes a key. A scene listed twice in a row by the same
        actor turns into a self-loop, which the DAG rejects as a cycle.
        """
        adjacency: dict[str, set[str]] = {scene: set() for scene in self.scenes()}
        for scenes in self.actors.values():
            for earlier, later in zip(scenes, scenes[1:], strict=False):
                adjacency[earlier].add(later)
        return adjacency

    def edge_labels(self) -> dict[tuple[str, str], tuple[str, ...]]:
        """Map each edge to the actors that carry it, in declaration order."""
        labels: dict[tuple[str, str], list[str]] = {}
        for actor, scenes in self.actors.items():
            for edge in zip(scenes, scenes[1:], strict=False):
                carriers = labels.setdefault(edge, [])
                if actor not in carriers:
                    carriers.append(actor)
        return {edge: tuple(actors) for edge, actors in labels.items()}

    def build_dag(self) -> DAG[str]:
        """Build the validated DAG of scenes.

        Raises:
            CycleDetectedError: If the actors disagree on the order of some scenes.

        """
        logger.debug(f"Building scene graph from {len(self.actors)} actors")
        return DAG(self.to_adjacency())
