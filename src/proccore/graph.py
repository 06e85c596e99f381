"""Graph entity types that procedures may emit as column values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["Node", "Relationship", "Path"]


@dataclass(frozen=True)
class Node:
    """A graph node."""

    id: int
    labels: tuple[str, ...] = ()
    properties: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Relationship:
    """A typed, directed relationship between two nodes."""

    id: int
    type: str
    start_node_id: int
    end_node_id: int
    properties: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Path:
    """An alternating sequence of nodes and relationships.

    A path always holds exactly one more node than relationships.
    """

    nodes: tuple[Node, ...]
    relationships: tuple[Relationship, ...] = ()

    def __post_init__(self) -> None:
        if not self.nodes:
            raise ValueError("A path must contain at least one node")
        if len(self.nodes) != len(self.relationships) + 1:
            raise ValueError(
                f"A path with {len(self.relationships)} relationships must have "
                f"{len(self.relationships) + 1} nodes, got {len(self.nodes)}"
            )

    @property
    def start(self) -> Node:
        return self.nodes[0]

    @property
    def end(self) -> Node:
        return self.nodes[-1]

    def __len__(self) -> int:
        return len(self.relationships)
