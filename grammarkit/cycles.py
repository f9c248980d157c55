"""Detection and elimination of cycles among unit derivations."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from grammarkit.derivation import unit_derivation_matrix
from grammarkit.rule import Rule


class Cycles:
    """Cycles among the unit rules of a grammar, which this object may rewrite."""

    def __init__(self, grammar) -> None:
        self._grammar = grammar
        self._unit = unit_derivation_matrix(grammar)
        self._cycle_free = not any(row[i] for i, row in enumerate(self._unit))

    def cycle_free(self) -> bool:
        """Whether the grammar has no cycles."""
        return self._cycle_free

    def _in_cycle(self, rule: Rule) -> bool:
        return len(rule.rhs) == 1 and self._unit[rule.rhs[0]][rule.lhs]

    def cycle_participants(self) -> Iterator[Rule]:
        """Iterate over rules that take part in a cycle."""
        if self._cycle_free:
            return
        yield from (rule for rule in self._grammar.rules() if self._in_cycle(rule))

    def remove_cycles(self) -> None:
        """Remove every rule in a cycle. The language may change."""
        if not self._cycle_free:
            self._grammar.retain(lambda rule: not self._in_cycle(rule))

    def rewrite_cycles(self) -> None:
        """Merge the symbols of each cycle into one. The language is preserved."""
        if self._cycle_free:
            return
        unit = self._unit
        translation: Dict[int, Optional[int]] = {}

        def drop_cycle_rule(rule: Rule) -> bool:
            if not self._in_cycle(rule):
                return True
            lhs = rule.lhs
            if lhs not in translation:
                for sym, derived in enumerate(unit[lhs]):
                    if derived and unit[sym][lhs]:
                        translation[sym] = lhs
                translation[lhs] = None
            return False

        self._grammar.retain(drop_cycle_rule)

        def rename(sym: int) -> int:
            new_sym = translation.get(sym)
            return sym if new_sym is None else new_sym

        rewritten: List[Rule] = []

        def keep_unchanged(rule: Rule) -> bool:
            lhs = rename(rule.lhs)
            rhs = tuple(rename(sym) for sym in rule.rhs)
            if lhs == rule.lhs and rhs == rule.rhs:
                return True
            rewritten.append(Rule(lhs, rhs, rule.history_id))
            return False

        self._grammar.retain(keep_unchanged)
        for rule in rewritten:
            self._grammar.add_rule(rule)