"""Precedenced rules, built as series of alternatives with equal precedence."""

from __future__ import annotations

import enum
from typing import Iterable, List, Optional

from grammarkit.builder import RuleBuilder
from grammarkit.history import AssignPrecedenceNode, LinkedNode, RhsNode, RootNoOp, RootRule
from grammarkit.rule import Rule


class Associativity(enum.Enum):
    """Associativity of an operator."""

    LEFT = "left"
    RIGHT = "right"
    # The operand is delimited, for example by parentheses.
    GROUP = "group"


DEFAULT_ASSOC = Associativity.LEFT


class PrecedencedRuleBuilder:
    """Builds the alternatives of one precedenced rule, loosening precedence on request."""

    def __init__(self, rules, lhs: int) -> None:
        self._rules = rules
        self._lhs = lhs
        tightest_lhs = rules.next_sym()
        self._tighter_lhs = tightest_lhs
        self._current_lhs = tightest_lhs
        self._history: Optional[int] = None
        self._assoc = DEFAULT_ASSOC
        self._looseness = 0
        self._rules_with_group_assoc: List[Rule] = []

    def precedenced_rule(self, lhs: int) -> "PrecedencedRuleBuilder":
        """Finish this rule and start a new precedenced rule."""
        return self.finalize().precedenced_rule(lhs)

    def rule(self, lhs: int) -> RuleBuilder:
        """Finish this rule and start a plain rule."""
        return self.finalize().rule(lhs)

    def history(self, history_id: int) -> "PrecedencedRuleBuilder":
        """Use this history on the next call to ``rhs``."""
        self._history = history_id
        return self

    def rhs(self, syms: Iterable[int]) -> "PrecedencedRuleBuilder":
        """Add a rule alternative at the current precedence."""
        syms = tuple(syms)
        history_id, self._history = self._history, None
        if history_id is None:
            history_id = self._rules.add_history_node(RootRule(lhs=self._lhs))
        history_id = self._rules.add_history_node(LinkedNode(prev=history_id, node=RhsNode(syms)))
        return self.rhs_with_history(syms, history_id)

    def rhs_with_history(self, syms: Iterable[int], history_id: int) -> "PrecedencedRuleBuilder":
        """Add a rule alternative with the given history at the current precedence."""
        assigned = self._rules.add_history_node(
            LinkedNode(prev=history_id, node=AssignPrecedenceNode(looseness=self._looseness))
        )
        syms = list(syms)
        if self._assoc is Associativity.GROUP:
            self._rules_with_group_assoc.append(Rule(self._current_lhs, syms, assigned))
        else:
            positions = [i for i, sym in enumerate(syms) if sym == self._lhs]
            if positions:
                extreme = positions[0] if self._assoc is Associativity.LEFT else positions[-1]
                for i in positions:
                    syms[i] = self._current_lhs if i == extreme else self._tighter_lhs
            self._rules.add_rule(Rule(self._current_lhs, syms, assigned))
        self._assoc = DEFAULT_ASSOC
        self._history = None
        return self

    def associativity(self, assoc: Associativity) -> "PrecedencedRuleBuilder":
        """Set the associativity for the next alternative."""
        self._assoc = assoc
        return self

    def lower_precedence(self) -> "PrecedencedRuleBuilder":
        """Give lower precedence to alternatives added after this call."""
        self._looseness += 1
        self._tighter_lhs = self._current_lhs
        self._current_lhs = self._rules.next_sym()
        history_id = self._rules.add_history_node(RootNoOp())
        RuleBuilder(self._rules).rule(self._current_lhs).rhs_with_history(
            [self._tighter_lhs], history_id
        )
        return self

    def finalize(self) -> RuleBuilder:
        """Finish the precedenced rule and return a plain rule builder."""
        loosest_lhs = self._current_lhs
        pending, self._rules_with_group_assoc = self._rules_with_group_assoc, []
        for rule in pending:
            rhs = tuple(loosest_lhs if sym == self._lhs else sym for sym in rule.rhs)
            self._rules.add_rule(Rule(rule.lhs, rhs, rule.history_id))
        history_id = self._rules.add_history_node(RootNoOp())
        return RuleBuilder(self._rules).rule(self._lhs).rhs_with_history([loosest_lhs], history_id)