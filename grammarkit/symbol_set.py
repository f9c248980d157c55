"""Sets of symbols, used to tell terminal symbols from nonterminal ones."""

from __future__ import annotations

from typing import Iterator, List


class SymbolBitSet:
    """A set of a grammar's symbols, stored as one flag per symbol."""

    def __init__(self, grammar, elem: bool = False) -> None:
        self._bits: List[bool] = [elem] * grammar.num_syms()

    @classmethod
    def terminal_set(cls, grammar) -> "SymbolBitSet":
        """The set of symbols that appear on no rule's left-hand side."""
        result = cls(grammar, True)
        for rule in grammar.rules():
            result.set(rule.lhs, False)
        return result

    @classmethod
    def terminal_or_nulling_set(cls, grammar) -> "SymbolBitSet":
        """The terminal symbols together with the left-hand sides of empty rules."""
        result = cls.terminal_set(grammar)
        for rule in grammar.rules():
            if not rule.rhs:
                result.set(rule.lhs, True)
        return result

    def set(self, sym: int, value: bool) -> None:
        """Set the entry for a symbol."""
        self._bits[sym] = value

    def has_sym(self, sym: int) -> bool:
        """Check whether a symbol is in this set."""
        return self._bits[sym]

    def bits(self) -> List[bool]:
        """Return the flags, one per symbol, as a new list."""
        return list(self._bits)

    def __iter__(self) -> Iterator[int]:
        return (sym for sym, present in enumerate(self._bits) if present)

    def __contains__(self, sym: object) -> bool:
        return isinstance(sym, int) and 0 <= sym < len(self._bits) and self._bits[sym]