"""Remapping of symbols and removal of unused symbols."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from grammarkit.container import SymbolSource
from grammarkit.rule import Rule


@dataclass
class Mapping:
    """A correspondence between external symbols and internal symbols."""

    to_internal: List[Optional[int]] = field(default_factory=list)
    to_external: List[int] = field(default_factory=list)

    @classmethod
    def identity(cls, num_syms: int) -> "Mapping":
        """The mapping of ``num_syms`` symbols onto themselves."""
        return cls(list(range(num_syms)), list(range(num_syms)))

    def translate(self, other: "Mapping") -> None:
        """Compose with ``other``, which maps this mapping's internal symbols further."""
        self.to_internal = [
            None if internal is None else other.to_internal[internal]
            for internal in self.to_internal
        ]
        self.to_external = [self.to_external[sym] for sym in other.to_external]


class _Intern:
    """Gives symbols new consecutive ids in order of first appearance."""

    def __init__(self, num_syms: int) -> None:
        self.source = SymbolSource()
        self.mapping = Mapping([None] * num_syms, [])

    def intern(self, sym: int) -> int:
        internal = self.mapping.to_internal[sym]
        if internal is None:
            internal = self.source.next_sym()
            self.mapping.to_internal[sym] = internal
            self.mapping.to_external.append(sym)
        return internal


class Remap:
    """Renumbers a grammar's symbols in place, recording the mapping."""

    def __init__(self, grammar) -> None:
        self._grammar = grammar
        self._mapping = Mapping.identity(grammar.num_syms())

    def remove_unused_symbols(self) -> None:
        """Renumber so that only symbols used in rules remain."""
        intern = _Intern(self._grammar.num_syms())
        self._remap_symbols(intern.intern)
        self._grammar.sym_source = intern.source
        self._mapping.translate(intern.mapping)

    def reorder_symbols(self, compare: Callable[[int, int], int]) -> None:
        """Renumber symbols so their order follows ``compare`` (negative, zero or positive)."""
        num_syms = self._grammar.num_syms()
        order = sorted(range(num_syms), key=functools.cmp_to_key(compare))
        new_mapping = Mapping([None] * num_syms, order)
        for after, before in enumerate(order):
            new_mapping.to_internal[before] = after
        self._mapping.translate(new_mapping)
        self._remap_symbols(lambda sym: new_mapping.to_internal[sym])

    def _remap_symbols(self, remap: Callable[[int], int]) -> None:
        added: List[Rule] = []

        def keep(rule: Rule) -> bool:
            if remap(rule.lhs) == rule.lhs and all(remap(sym) == sym for sym in rule.rhs):
                return True
            added.append(
                Rule(remap(rule.lhs), tuple(remap(sym) for sym in rule.rhs), rule.history_id)
            )
            return False

        self._grammar.retain(keep)
        for rule in added:
            self._grammar.add_rule(rule)

    def get_mapping(self) -> Mapping:
        """Return the mapping recorded so far."""
        return self._mapping