"""The basic representation of context-free grammars."""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from grammarkit.binarized import BinarizedCfg
from grammarkit.container import RuleContainer, SymbolSource
from grammarkit.history import HistoryNode
from grammarkit.rule import Rule


class Cfg(RuleContainer):
    """A context-free grammar holding rules in insertion order."""

    def __init__(self, sym_source: Optional[SymbolSource] = None) -> None:
        super().__init__(sym_source)
        self._rules: List[Rule] = []

    def rules(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def retain(self, predicate: Callable[[Rule], bool]) -> None:
        self._rules = [rule for rule in self._rules if predicate(rule)]

    def add_rule(self, rule: Rule) -> None:
        self._rules.append(Rule(rule.lhs, rule.rhs, rule.history_id))

    def add_history_node(self, node: HistoryNode) -> int:
        """Add a node to the history graph and return its id."""
        return self.history_graph.add_history_node(node)

    def binarize(self) -> BinarizedCfg:
        """Return a weakly equivalent binarized grammar."""
        return BinarizedCfg.from_context_free(self)