"""Right-hand sides grouped by left-hand side, each with a weight, for random choice.

Weights are any real numbers; a rule without a weight in its history weighs 1.0.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from grammarkit.history import LinkedNode, WeightNode


@dataclass
class _WeightedRhsList:
    total_weight: float = 0
    starts: List[float] = field(default_factory=list)
    rhs_list: List[Tuple[int, ...]] = field(default_factory=list)


class WeightedRhsByLhs:
    """Weighted alternatives for each left-hand side."""

    def __init__(self) -> None:
        self._weights: Dict[int, _WeightedRhsList] = {}

    def add_weight(self, weight: float, lhs: int, rhs: Sequence[int]) -> None:
        """Add an alternative for ``lhs`` with the given weight."""
        entry = self._weights.setdefault(lhs, _WeightedRhsList())
        entry.starts.append(entry.total_weight)
        entry.rhs_list.append(tuple(rhs))
        entry.total_weight += weight

    def pick_rhs(self, lhs: int, rng) -> Tuple[int, ...]:
        """Choose an alternative for ``lhs`` in proportion to the weights.

        ``rng.gen(limit)`` must return a number in ``[0, limit)``. An unknown
        ``lhs`` gives the empty right-hand side.
        """
        entry = self._weights.get(lhs)
        if entry is None:
            return ()
        if len(entry.rhs_list) == 1:
            return entry.rhs_list[0]
        value = rng.gen(float(entry.total_weight))
        idx = bisect.bisect_left(entry.starts, value)
        return entry.rhs_list[max(idx - 1, 0)]


def _rule_weight(grammar, history_id: int):
    node = grammar.history_graph[history_id]
    while isinstance(node, LinkedNode):
        if isinstance(node.node, WeightNode):
            return node.node.weight
        node = grammar.history_graph[node.prev]
    return None


def weighted(grammar) -> WeightedRhsByLhs:
    """Collect the weighted alternatives of every rule of ``grammar``."""
    result = WeightedRhsByLhs()
    for rule in grammar.rules():
        weight = _rule_weight(grammar, rule.history_id)
        result.add_weight(1.0 if weight is None else weight, rule.lhs, rule.rhs)
    return result