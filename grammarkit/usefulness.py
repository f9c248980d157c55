"""Analysis of rule usefulness: a useful rule is both reachable and productive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

from grammarkit.derivation import reachability_matrix
from grammarkit.rhs_closure import RhsClosure
from grammarkit.rule import Rule
from grammarkit.symbol_set import SymbolBitSet


@dataclass(frozen=True)
class RuleUsefulness:
    """Whether a rule is reachable and productive."""

    reachable: bool
    productive: bool

    def is_useless(self) -> bool:
        return not self.reachable or not self.productive


@dataclass(frozen=True)
class UselessRule:
    """A useless rule together with the reason for its uselessness."""

    rule: Rule
    usefulness: RuleUsefulness


def _used_syms(grammar) -> List[bool]:
    used = [False] * grammar.num_syms()
    for rule in grammar.rules():
        used[rule.lhs] = True
        for sym in rule.rhs:
            used[sym] = True
    return used


def _productive_syms(grammar) -> List[bool]:
    productive = SymbolBitSet.terminal_or_nulling_set(grammar).bits()
    return RhsClosure(grammar).rhs_closure(productive)


class Usefulness:
    """Reachability and productivity of a grammar's symbols and rules."""

    def __init__(self, grammar) -> None:
        self._grammar = grammar
        unused = [not used for used in _used_syms(grammar)]
        self._productivity = [
            productive or is_unused
            for productive, is_unused in zip(_productive_syms(grammar), unused)
        ]
        self._reachability = reachability_matrix(grammar)
        # Unused symbols count as reachable; the rest must be marked by `reachable`.
        self._reachable_syms = list(unused)

    def productivity(self, sym: int) -> bool:
        """Whether a symbol is productive."""
        return self._productivity[sym]

    def reachable(self, syms: Iterable[int]) -> "Usefulness":
        """Mark everything reachable from ``syms`` as reachable; return self."""
        for sym in syms:
            for target, is_reachable in enumerate(self._reachability[sym]):
                if is_reachable:
                    self._reachable_syms[target] = True
        return self

    def all_useful(self) -> bool:
        return self.all_productive() and self.all_reachable()

    def all_productive(self) -> bool:
        return all(self._productivity)

    def all_reachable(self) -> bool:
        return all(self._reachable_syms)

    def rule_usefulness(self, rule: Rule) -> RuleUsefulness:
        return RuleUsefulness(
            reachable=self._reachable_syms[rule.lhs],
            productive=all(self._productivity[sym] for sym in rule.rhs),
        )

    def useless_rules(self) -> Iterator[UselessRule]:
        """Iterate over the grammar's useless rules."""
        if self.all_useful():
            return
        for rule in self._grammar.rules():
            usefulness = self.rule_usefulness(rule)
            if usefulness.is_useless():
                yield UselessRule(rule, usefulness)

    def remove_useless_rules(self) -> None:
        """Remove useless rules; the language does not change."""
        if not self.all_useful():
            self._grammar.retain(lambda rule: not self.rule_usefulness(rule).is_useless())