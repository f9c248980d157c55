"""Symbol sources and the common interface of rule containers."""

from __future__ import annotations

import abc
import dataclasses
from typing import Callable, Iterator, Optional, Tuple

from grammarkit.builder import RuleBuilder
from grammarkit.history import HistoryGraph, HistoryNode
from grammarkit.precedence import PrecedencedRuleBuilder
from grammarkit.rule import Rule


class SymbolSource:
    """Hands out fresh symbols, numbered from zero."""

    def __init__(self, num_syms: int = 0) -> None:
        self._next = num_syms

    def next_sym(self) -> int:
        """Generate a new unique symbol."""
        sym = self._next
        self._next += 1
        return sym

    def sym(self, n: int) -> Tuple[int, ...]:
        """Generate ``n`` new symbols."""
        return tuple(self.next_sym() for _ in range(n))

    def num_syms(self) -> int:
        """Return the number of symbols handed out."""
        return self._next

    def copy(self) -> "SymbolSource":
        return SymbolSource(self._next)

    def __repr__(self) -> str:
        return f"SymbolSource(num_syms={self._next})"


class RuleContainer(abc.ABC):
    """A container of rules and symbols with a history graph."""

    def __init__(self, sym_source: Optional[SymbolSource] = None) -> None:
        self.sym_source = sym_source if sym_source is not None else SymbolSource()
        self.history_graph = HistoryGraph()

    def sym(self, n: int) -> Tuple[int, ...]:
        """Generate ``n`` new symbols."""
        return self.sym_source.sym(n)

    def next_sym(self) -> int:
        """Generate a new unique symbol."""
        return self.sym_source.next_sym()

    def num_syms(self) -> int:
        """Return the number of symbols in use."""
        return self.sym_source.num_syms()

    @abc.abstractmethod
    def retain(self, predicate: Callable[[Rule], bool]) -> None:
        """Keep only the rules for which ``predicate`` is true."""

    @abc.abstractmethod
    def add_rule(self, rule: Rule) -> None:
        """Insert a rule."""

    @abc.abstractmethod
    def rules(self) -> Iterator[Rule]:
        """Iterate over the rules."""

    def rule(self, lhs: int) -> RuleBuilder:
        """Start building a new rule."""
        return RuleBuilder(self).rule(lhs)

    def precedenced_rule(self, lhs: int) -> PrecedencedRuleBuilder:
        """Start building a new precedenced rule."""
        return PrecedencedRuleBuilder(self, lhs)

    def add_history_node(self, node: HistoryNode) -> int:
        """Add a node to the history graph and return its id."""
        return self.history_graph.add_history_node(node)

    def reverse(self) -> "RuleContainer":
        """Return a new container of the same type with every right-hand side reversed."""
        new_grammar = type(self)()
        new_grammar.sym(self.num_syms())
        # The fresh graph already holds its own root at id 0; copying the rest keeps ids aligned.
        for node in list(self.history_graph)[1:]:
            new_grammar.add_history_node(node)
        for rule in self.rules():
            new_grammar.add_rule(dataclasses.replace(rule, rhs=tuple(reversed(rule.rhs))))
        return new_grammar