"""Rule histories: data carried alongside grammar rules, kept in a graph."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


class BinarizedRhsSubset(enum.Enum):
    """Which symbols of a binarized right-hand side are nullable and eliminated."""

    LEFT = "left"
    RIGHT = "right"
    ALL = "all"


@dataclass(frozen=True)
class RootNoOp:
    """A root history that carries no information."""


@dataclass(frozen=True)
class RootRule:
    """A root history of a rule with the given left-hand side."""

    lhs: int


@dataclass(frozen=True)
class RootOrigin:
    """A root history pointing at an external rule."""

    origin: int


@dataclass(frozen=True)
class RhsNode:
    """Records the right-hand side a rule was written with."""

    rhs: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rhs", tuple(self.rhs))


@dataclass(frozen=True)
class BinarizeNode:
    """Records the depth of a rule produced by binarization."""

    depth: int


@dataclass(frozen=True)
class EliminateNullingNode:
    """Records the elimination of nullable symbols from a binarized rule."""

    rhs0: int
    rhs1: Optional[int]
    which: BinarizedRhsSubset


@dataclass(frozen=True)
class AssignPrecedenceNode:
    """Records the precedence level of a rule alternative."""

    looseness: int


@dataclass(frozen=True)
class RewriteSequenceNode:
    """Records the rewrite of a sequence rule into productions."""

    top: bool
    rhs: int
    sep: Optional[int]


@dataclass(frozen=True)
class WeightNode:
    """Assigns a weight to a rule."""

    weight: float


@dataclass(frozen=True)
class DistancesNode:
    """Records event distances."""

    events: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))


LinkedPayload = Union[
    RhsNode,
    BinarizeNode,
    EliminateNullingNode,
    AssignPrecedenceNode,
    RewriteSequenceNode,
    WeightNode,
    DistancesNode,
]


@dataclass(frozen=True)
class LinkedNode:
    """A history node that refines the node with id ``prev``."""

    prev: int
    node: LinkedPayload


HistoryNode = Union[RootNoOp, RootRule, RootOrigin, LinkedNode]


class HistoryGraph:
    """An append-only list of history nodes; ids are positions, starting at 1."""

    def __init__(self) -> None:
        self._nodes: list = [RootNoOp()]

    def next_id(self) -> int:
        """Return the id the next added node will get."""
        if not self._nodes:
            raise ValueError("history graph has zero length")
        return len(self._nodes)

    def add_history_node(self, node: HistoryNode) -> int:
        """Append a node and return its id."""
        result = self.next_id()
        self._nodes.append(node)
        return result

    def __getitem__(self, index: int) -> HistoryNode:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[HistoryNode]:
        return iter(self._nodes)

    def copy(self) -> "HistoryGraph":
        """Return an independent copy of this graph."""
        graph = HistoryGraph()
        graph._nodes = list(self._nodes)
        return graph