"""Histories of rules as seen by an Earley parser: origins, dots and nulling information."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from grammarkit.history import (
    AssignPrecedenceNode,
    BinarizeNode,
    BinarizedRhsSubset,
    DistancesNode,
    EliminateNullingNode,
    LinkedNode,
    RewriteSequenceNode,
    RhsNode,
    RootNoOp,
    RootOrigin,
    RootRule,
    WeightNode,
)

ExternalDottedRule = Tuple[int, int]
EventId = Optional[int]
MinimalDistance = Optional[int]
Event = Tuple[EventId, MinimalDistance]


class _SymKind(enum.Enum):
    ELEMENT = "element"
    SEPARATOR = "separator"
    OTHER = "other"


@dataclass(frozen=True)
class RuleDot:
    """A position in an external rule, with an optional event and distance."""

    event: Optional[Tuple[EventId, ExternalDottedRule]] = None
    distance: MinimalDistance = None

    @classmethod
    def at(cls, rule_id: int, pos: int) -> "RuleDot":
        """A dot at position ``pos`` of external rule ``rule_id``."""
        return cls(event=(None, (rule_id, pos)))

    @classmethod
    def none(cls) -> "RuleDot":
        """A dot with no information."""
        return cls()

    def trace(self) -> Optional[ExternalDottedRule]:
        """The external dotted rule, if any."""
        return None if self.event is None else self.event[1]

    def event_without_tracing(self) -> Event:
        """The event id and the distance."""
        return (None if self.event is None else self.event[0], self.distance)


@dataclass(frozen=True)
class SequenceDetails:
    """How a sequence rule was rewritten."""

    top: bool = False
    rhs: int = 0
    sep: Optional[int] = None


@dataclass(frozen=True)
class History:
    """The final history of a rule."""

    dots: Tuple[RuleDot, ...] = ()
    origin: Optional[int] = None
    nullable: Optional[Tuple[int, bool]] = None
    weight: Optional[float] = None
    sequence: Optional[SequenceDetails] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "dots", tuple(self.dots))

    @classmethod
    def new(cls, rule_id: int, length: int) -> "History":
        """A history of external rule ``rule_id`` with ``length`` right-hand symbols."""
        return cls(
            dots=tuple(RuleDot.at(rule_id, pos) for pos in range(length + 1)),
            origin=rule_id,
        )

    def dot(self, n: int) -> RuleDot:
        return self.dots[n]

    def binarize(self, depth: int) -> "History":
        """The history of the binarized rule at ``depth``."""
        none = RuleDot.none()
        dot_len = len(self.dots)
        if not self.dots:
            dots = (none, none, none)
        elif depth == 0:
            if dot_len == 2:
                dots = (self.dots[0], none, self.dots[1])
            elif dot_len >= 3:
                dots = (self.dots[0], self.dots[-2], self.dots[-1])
            else:
                dots = (self.dots[0], none, none)
        else:
            index = dot_len - 2 - depth
            if index < 0:
                raise IndexError("binarization depth exceeds the rule's length")
            dots = (none, self.dots[index], none)
        origin = self.origin if depth == 0 else None
        return dataclasses.replace(self, dots=dots, origin=origin)

    def eliminate_nulling(
        self, rhs0: int, rhs1: Optional[int], subset: BinarizedRhsSubset
    ) -> "History":
        """The history of a rule with nullable symbols eliminated."""
        if subset is BinarizedRhsSubset.ALL:
            return History(origin=self.origin)
        if subset is BinarizedRhsSubset.RIGHT:
            if rhs1 is None:
                raise ValueError("right subset requires a second right-hand symbol")
            sym = rhs1
        else:
            sym = rhs0
        return dataclasses.replace(
            self, nullable=(sym, subset is BinarizedRhsSubset.RIGHT)
        )

    def rewrite_sequence(self, details: SequenceDetails, new_rhs: Sequence[int]) -> "History":
        """The history of a production made from a sequence rule."""
        bottom = self._rewrite_sequence_bottom(details, new_rhs)
        if details.top:
            return dataclasses.replace(bottom, origin=self.origin)
        return bottom

    def _rewrite_sequence_bottom(
        self, details: SequenceDetails, new_rhs: Sequence[int]
    ) -> "History":
        #  -  sym (1) Sep (2)
        #  -  lhs (1) Sep (2) Rhs (1)
        #  -  lhs (0) Rhs (1)
        # (0) Rhs (1)
        # (0) Rhs (1) Sep (2) Rhs (1)
        # (0) Rhs (1) Rhs (1)
        def kind(sym: int) -> _SymKind:
            if sym == details.rhs:
                return _SymKind.ELEMENT
            if details.sep is not None and sym == details.sep:
                return _SymKind.SEPARATOR
            return _SymKind.OTHER

        kinds = [kind(sym) for sym in new_rhs] + [_SymKind.OTHER]
        dots: List[RuleDot] = []
        to_left = _SymKind.OTHER
        for to_right in kinds:
            if to_right is _SymKind.SEPARATOR:
                dots.append(self.dots[1])
            elif to_left is _SymKind.SEPARATOR:
                dots.append(self.dots[2])
            elif to_left is _SymKind.ELEMENT:
                dots.append(self.dots[1])
            elif to_right is _SymKind.ELEMENT:
                dots.append(self.dots[0])
            else:
                dots.append(RuleDot.none())
            to_left = to_right
        return History(dots=tuple(dots))


def _process_root(node) -> History:
    if isinstance(node, RootOrigin):
        return History.new(node.origin, 0)
    if isinstance(node, (RootNoOp, RootRule)):
        return History.new(0, 0)
    raise TypeError(f"unknown root history node: {node!r}")


def _process_linked(payload, prev: History) -> History:
    if isinstance(payload, (AssignPrecedenceNode, DistancesNode)):
        return prev
    if isinstance(payload, BinarizeNode):
        return prev.binarize(payload.depth)
    if isinstance(payload, EliminateNullingNode):
        return prev.eliminate_nulling(payload.rhs0, payload.rhs1, payload.which)
    if isinstance(payload, RewriteSequenceNode):
        return dataclasses.replace(
            prev, sequence=SequenceDetails(payload.top, payload.rhs, payload.sep)
        )
    if isinstance(payload, WeightNode):
        return dataclasses.replace(prev, weight=payload.weight)
    if isinstance(payload, RhsNode):
        dots = tuple(RuleDot.at(0, pos) for pos in range(len(payload.rhs) + 1))
        return dataclasses.replace(prev, dots=dots)
    raise TypeError(f"unknown linked history node: {payload!r}")


def final_history(grammar) -> List[History]:
    """Compute the history of every node in the grammar's history graph, by node id."""
    result: List[History] = []
    for node in grammar.history_graph:
        if isinstance(node, LinkedNode):
            result.append(_process_linked(node.node, result[node.prev]))
        else:
            result.append(_process_root(node))
    return result