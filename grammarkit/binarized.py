"""Binarized grammars: every rule has at most two symbols on its right-hand side."""

from __future__ import annotations

import dataclasses
import functools
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from grammarkit.container import RuleContainer, SymbolSource
from grammarkit.history import (
    BinarizeNode,
    BinarizedRhsSubset,
    EliminateNullingNode,
    HistoryNode,
    LinkedNode,
)
from grammarkit.rhs_closure import RhsClosure
from grammarkit.rule import Rule


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class BinarizedRule:
    """A rule with one or two right-hand symbols; compared by lhs and rhs only."""

    lhs: int
    rhs: Tuple[int, ...]
    history_id: int

    def __post_init__(self) -> None:
        rhs = tuple(self.rhs)
        if len(rhs) not in (1, 2):
            raise ValueError("invalid rule rhs length")
        object.__setattr__(self, "rhs", rhs)

    @classmethod
    def from_rule(cls, rule: Rule) -> "BinarizedRule":
        """Build a binarized rule from a rule with one or two right-hand symbols."""
        return cls(rule.lhs, rule.rhs, rule.history_id)

    @property
    def rhs0(self) -> int:
        """The first right-hand symbol."""
        return self.rhs[0]

    @property
    def rhs1(self) -> Optional[int]:
        """The second right-hand symbol, if present."""
        return self.rhs[1] if len(self.rhs) == 2 else None

    def as_rule(self) -> Rule:
        return Rule(self.lhs, self.rhs, self.history_id)

    def _key(self):
        # One-symbol right-hand sides order before two-symbol ones.
        return (self.lhs, len(self.rhs), self.rhs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinarizedRule):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "BinarizedRule") -> bool:
        if not isinstance(other, BinarizedRule):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class BinarizedCfg(RuleContainer):
    """A grammar whose rules have at most two right-hand symbols; nulling rules are kept apart."""

    def __init__(self, sym_source: Optional[SymbolSource] = None) -> None:
        super().__init__(sym_source)
        self._rules: List[BinarizedRule] = []
        # History ids of nulling rules, indexed by their left-hand side.
        self._nulling: List[Optional[int]] = []

    @classmethod
    def from_context_free(cls, grammar) -> "BinarizedCfg":
        """Binarize the rules of any rule container."""
        result = cls(grammar.sym_source.copy())
        result.history_graph = grammar.history_graph.copy()
        for rule in grammar.rules():
            result.add_rule(rule)
        return result

    def sort(self, key: Optional[Callable[[BinarizedRule], object]] = None) -> None:
        """Sort the non-nulling rules, by their natural order or by ``key``."""
        self._rules.sort(key=key)

    def dedup(self) -> None:
        """Remove consecutive duplicate rules."""
        deduped: List[BinarizedRule] = []
        for rule in self._rules:
            if not deduped or deduped[-1] != rule:
                deduped.append(rule)
        self._rules = deduped

    def eliminate_nulling_rules(self) -> "BinarizedCfg":
        """Split off the nulling part of the grammar and return it as a new grammar.

        The language is preserved except for the empty string; unproductive rules are dropped.
        """
        nulling_grammar = BinarizedCfg(self.sym_source.copy())
        if not any(history is not None for history in self._nulling):
            return nulling_grammar

        nulling, self._nulling = self._nulling, []
        num_syms = self.num_syms()
        nulling.extend([None] * max(0, num_syms - len(nulling)))
        nullable = [history is not None for history in nulling]
        productive = [True] * num_syms
        nulling_grammar._nulling = nulling
        RhsClosure(self).rhs_closure(nullable)

        rewritten: List[Tuple[int, Tuple[int, ...], HistoryNode]] = []
        for rule in self._rules:
            rhs0, rhs1 = rule.rhs0, rule.rhs1
            left_nullable = nullable[rhs0]
            right_nullable = rhs1 is None or nullable[rhs1]
            if left_nullable and right_nullable:
                history_id = nulling_grammar.add_history_node(
                    LinkedNode(
                        prev=rule.history_id,
                        node=EliminateNullingNode(rhs0, rhs1, BinarizedRhsSubset.ALL),
                    )
                )
                nulling_grammar.add_rule(Rule(rule.lhs, rule.rhs, history_id))
            if rhs1 is not None:
                if left_nullable:
                    node = LinkedNode(
                        prev=rule.history_id,
                        node=EliminateNullingNode(rhs0, rhs1, BinarizedRhsSubset.LEFT),
                    )
                    rewritten.append((rule.lhs, (rhs1,), node))
                if right_nullable:
                    node = LinkedNode(
                        prev=rule.history_id,
                        node=EliminateNullingNode(rhs0, rhs1, BinarizedRhsSubset.RIGHT),
                    )
                    rewritten.append((rule.lhs, (rhs0,), node))

        for lhs, rhs, node in rewritten:
            self._rules.append(BinarizedRule(lhs, rhs, self.history_graph.add_history_node(node)))

        for rule in nulling_grammar.rules():
            productive[rule.lhs] = False
        RhsClosure(self).rhs_closure(productive)
        self._rules = [
            rule
            for rule in self._rules
            if productive[rule.rhs0] and (rule.rhs1 is None or productive[rule.rhs1])
        ]
        return nulling_grammar

    def rules(self) -> Iterator[Rule]:
        """Iterate over nulling rules first, then the remaining rules."""
        for lhs, history_id in enumerate(self._nulling):
            if history_id is not None:
                yield Rule(lhs, (), history_id)
        for rule in self._rules:
            yield rule.as_rule()

    def retain(self, predicate: Callable[[Rule], bool]) -> None:
        """Keep only the non-nulling rules for which ``predicate`` is true."""
        self._rules = [rule for rule in self._rules if predicate(rule.as_rule())]

    def add_rule(self, rule: Rule) -> None:
        """Add a rule, splitting long right-hand sides into a chain of binary rules."""
        if not rule.rhs:
            if len(self._nulling) <= rule.lhs:
                self._nulling.extend([None] * (rule.lhs + 1 - len(self._nulling)))
            if self._nulling[rule.lhs] is not None:
                raise ValueError("Duplicate nulling rule")
            self._nulling[rule.lhs] = self.add_history_node(
                LinkedNode(prev=rule.history_id, node=BinarizeNode(depth=0))
            )
            return

        # LHS ::= A B C ... Z becomes LHS ::= S0 Z, S0 ::= S1 Y, ..., Sn ::= A B.
        generated = self.sym_source.sym(max(len(rule.rhs), 2) - 2)
        lefts = list(generated) + [rule.rhs[0]]
        rights: List[Optional[int]] = list(reversed(rule.rhs[1:])) + [None]
        next_lhs = rule.lhs
        for depth, (left, right) in enumerate(zip(lefts, rights)):
            lhs, next_lhs = next_lhs, left
            history_id = self.history_graph.add_history_node(
                LinkedNode(prev=rule.history_id, node=BinarizeNode(depth=depth))
            )
            rhs = (left,) if right is None else (left, right)
            self._rules.append(BinarizedRule(lhs, rhs, history_id))

    def add_history_node(self, node: HistoryNode) -> int:
        """Add a node to the history graph and return its id."""
        return self.history_graph.add_history_node(node)

    def copy(self) -> "BinarizedCfg":
        """Return an independent copy of this grammar."""
        result = BinarizedCfg(self.sym_source.copy())
        result.history_graph = self.history_graph.copy()
        result._rules = list(self._rules)
        result._nulling = list(self._nulling)
        return result


__all__ = ["BinarizedRule", "BinarizedCfg", "dataclasses"]