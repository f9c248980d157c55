"""Grammars that track their start symbol and prepare rules for Earley parsing."""

from __future__ import annotations

import warnings
from typing import Optional, Tuple

from grammarkit.binarized import BinarizedCfg
from grammarkit.builder import RuleBuilder
from grammarkit.cfg import Cfg
from grammarkit.container import SymbolSource
from grammarkit.derivation import transitive_closure
from grammarkit.history import RootNoOp, RootOrigin
from grammarkit.remap import Mapping, Remap
from grammarkit.rule import Rule
from grammarkit.usefulness import Usefulness


class BinarizedGrammar(BinarizedCfg):
    """A binarized grammar with a start symbol, optionally wrapped with an end-of-input symbol."""

    def __init__(self, sym_source: Optional[SymbolSource] = None) -> None:
        super().__init__(sym_source)
        self._start: Optional[int] = None
        self.has_wrapped_start = False

    @classmethod
    def _from_cfg(
        cls, cfg: BinarizedCfg, start: Optional[int], has_wrapped_start: bool
    ) -> "BinarizedGrammar":
        result = cls(cfg.sym_source)
        result.history_graph = cfg.history_graph
        result._rules = list(cfg._rules)
        result._nulling = list(cfg._nulling)
        result._start = start
        result.has_wrapped_start = has_wrapped_start
        return result

    def set_start(self, start: int) -> None:
        """Set the start symbol."""
        self._start = start

    def start(self) -> int:
        """Return the start symbol."""
        if self._start is None:
            raise ValueError("the grammar has no start symbol")
        return self._start

    def wrap_start(self) -> None:
        """Add ``new_start ::= start eof`` and make ``new_start`` the start symbol."""
        start = self.start()
        new_start, eof = self.sym(2)
        history_id = self.add_history_node(RootNoOp())
        self.add_rule(Rule(new_start, (start, eof), history_id))
        self.set_start(new_start)
        self.has_wrapped_start = True

    def _start_rule(self) -> Optional[Rule]:
        start = self.start()
        return next((rule for rule in self.rules() if rule.lhs == start), None)

    def original_start(self) -> Optional[int]:
        """The start symbol from before wrapping, if the start was wrapped."""
        if not self.has_wrapped_start:
            return None
        rule = self._start_rule()
        if rule is None or len(rule.rhs) < 1:
            return None
        return rule.rhs[0]

    def eof(self) -> Optional[int]:
        """The end-of-input symbol, if the start was wrapped."""
        if not self.has_wrapped_start:
            return None
        rule = self._start_rule()
        if rule is None or len(rule.rhs) < 2:
            return None
        return rule.rhs[1]

    def dot_before_eof(self) -> Optional[int]:
        """The position of the wrapping start rule among the rules, if the start was wrapped."""
        if not self.has_wrapped_start:
            return None
        start = self.start()
        return next(
            (pos for pos, rule in enumerate(self.rules()) if rule.lhs == start), None
        )

    def make_proper(self) -> "BinarizedGrammar":
        """Remove rules that are unreachable from the start or unproductive; return self."""
        usefulness = Usefulness(self).reachable([self.start()])
        if not usefulness.all_useful():
            warnings.warn("grammar has useless rules", UserWarning, stacklevel=2)
            usefulness.remove_useless_rules()
        return self

    def eliminate_nulling(self) -> Tuple["BinarizedGrammar", "BinarizedGrammar"]:
        """Split off nulling rules; return this grammar and the nulling grammar."""
        start = self.start()
        nulling = self.eliminate_nulling_rules()
        nulling_grammar = BinarizedGrammar._from_cfg(nulling, start, self.has_wrapped_start)
        return self, nulling_grammar

    def remap_symbols(self) -> Tuple["BinarizedGrammar", Mapping]:
        """Drop unused symbols and order unit-rule symbols; return this grammar and the mapping."""
        num_syms = self.num_syms()
        order = [[False] * num_syms for _ in range(num_syms)]
        for rule in self.rules():
            if len(rule.rhs) == 1:
                left, right = rule.lhs, rule.rhs[0]
                if left < right:
                    order[left][right] = True
                elif left > right:
                    order[right][left] = True
        # Make the order transitive: A < B and B < C give A < C.
        transitive_closure(order)

        def compare(left: int, right: int) -> int:
            if order[left][right]:
                return -1
            if order[right][left]:
                return 1
            return 0

        remap = Remap(self)
        remap.remove_unused_symbols()
        remap.reorder_symbols(compare)
        mapping = remap.get_mapping()

        start = self.start()
        internal_start = mapping.to_internal[start]
        if internal_start is None:
            # The trivial grammar: the start symbol was removed.
            internal_start = len(mapping.to_external)
            mapping.to_internal[start] = internal_start
            mapping.to_external.append(start)
        self.set_start(internal_start)
        return self, mapping

    def is_empty(self) -> bool:
        """Whether no rule has the start symbol on its left-hand side."""
        return all(rule.lhs != self._start for rule in self.rules())


class Grammar(Cfg):
    """A context-free grammar with a start symbol whose rules record their origin."""

    def __init__(self, sym_source: Optional[SymbolSource] = None) -> None:
        super().__init__(sym_source)
        self._start: Optional[int] = None

    def set_start(self, start: int) -> None:
        """Set the start symbol."""
        self._start = start

    def start(self) -> int:
        """Return the start symbol."""
        if self._start is None:
            raise ValueError("the grammar has no start symbol")
        return self._start

    def rule(self, lhs: int) -> RuleBuilder:
        """Start building a rule whose history points at its position among the rules."""
        rule_count = sum(1 for _ in self.rules())
        history_id = self.add_history_node(RootOrigin(origin=rule_count))
        return super().rule(lhs).history(history_id)

    def binarize(self) -> BinarizedGrammar:
        """Return a weakly equivalent binarized grammar with the same start symbol."""
        result = BinarizedGrammar.from_context_free(self)
        result._start = self._start
        result.has_wrapped_start = False
        return result