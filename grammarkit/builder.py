"""Building grammar rules with chained calls."""

from __future__ import annotations

from typing import Iterable, Optional

from grammarkit.history import LinkedNode, LinkedPayload, RhsNode, RootRule
from grammarkit.rule import Rule


class RuleBuilder:
    """Adds rule alternatives for one left-hand side at a time to a rule container."""

    def __init__(self, rules) -> None:
        self._rules = rules
        self._lhs: Optional[int] = None
        self._history: Optional[int] = None

    def _require_lhs(self) -> int:
        if self._lhs is None:
            raise ValueError("no left-hand side; call rule() first")
        return self._lhs

    def rule(self, lhs: int) -> "RuleBuilder":
        """Start building a new rule with the given left-hand side."""
        self._lhs = lhs
        self._history = None
        return self

    def history(self, history_id: int) -> "RuleBuilder":
        """Use this history on the next call to ``rhs``."""
        self._history = history_id
        return self

    def rhs(self, syms: Iterable[int]) -> "RuleBuilder":
        """Add a rule alternative, recording its right-hand side in the history."""
        syms = tuple(syms)
        lhs = self._require_lhs()
        history, self._history = self._history, None
        if history is None:
            history = self._rules.add_history_node(RootRule(lhs=lhs))
        new_history = self._rules.add_history_node(LinkedNode(prev=history, node=RhsNode(syms)))
        return self.rhs_with_history(syms, new_history)

    def rhs_with_history(self, syms: Iterable[int], history_id: int) -> "RuleBuilder":
        """Add a rule alternative with the given history id."""
        lhs = self._require_lhs()
        self._rules.add_rule(Rule(lhs, tuple(syms), history_id))
        return self

    def rhs_with_linked_history(
        self, syms: Iterable[int], linked_history: LinkedPayload
    ) -> "RuleBuilder":
        """Add a rule alternative whose history ends with ``linked_history``."""
        syms = tuple(syms)
        lhs = self._require_lhs()
        base_id = self._rules.add_history_node(RootRule(lhs=lhs))
        rhs_id = self._rules.add_history_node(LinkedNode(prev=base_id, node=RhsNode(syms)))
        history_id = self._rules.add_history_node(LinkedNode(prev=rhs_id, node=linked_history))
        return self.rhs_with_history(syms, history_id)

    def precedenced_rule(self, lhs: int):
        """Start building a new precedenced rule."""
        from grammarkit.precedence import PrecedencedRuleBuilder

        return PrecedencedRuleBuilder(self._rules, lhs)